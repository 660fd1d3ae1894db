import pytest

import json_parser as jp
from json_value import Array, Str


def test_plain_and_empty_strings():
    assert jp.parse('"hello"') == Str("hello")
    assert jp.parse('""') == Str("")


@pytest.mark.parametrize(
    "text, expected",
    [
        ('"hello\\n"', "hello\n"),
        ('"hello\\t"', "hello\t"),
        ('"hello\\b"', "hello\b"),
        ('"hello\\f"', "hello\f"),
        ('"hello\\r"', "hello\r"),
        ('"back\\\\slash"', "back\\slash"),
        ('"forward\\/slash"', "forward/slash"),
        ('"a \\"quoted\\" word"', 'a "quoted" word'),
    ],
)
def test_named_escapes(text, expected):
    assert jp.parse(text) == Str(expected)


def test_unicode_escape_is_case_insensitive():
    assert jp.parse('"Unicode char: \\u00A9"') == Str("Unicode char: ©")
    assert jp.parse('"\\u00e9\\u00E9"') == Str("éé")


def test_surrogate_pair_escape_becomes_one_code_point():
    assert jp.parse('"\\ud83d\\ude00"') == Str("\U0001F600")


def test_lone_surrogate_escape_is_kept():
    assert jp.parse('"\\uD800"') == Str("\ud800")
    assert jp.parse('"\\uD800x"') == Str("\ud800x")


def test_non_ascii_passes_through():
    assert jp.parse('["héllo", "日本"]') == Array((Str("héllo"), Str("日本")))


@pytest.mark.parametrize(
    "text",
    [
        '"string containing " an unescaped quote"',
        '"string without end quote',
        '"\\u123g"',
        '"\\u12"',
        '"\\q"',
        '"tab\tinside"',
        '"newline\ninside"',
        '"\\',
    ],
)
def test_invalid_strings_do_not_parse(text):
    assert jp.parse(text) is None
