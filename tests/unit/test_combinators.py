import combinators as pc


def test_literal_consumes_exact_prefix():
    assert pc.literal("ab")("abc") == ("ab", "c")
    assert pc.literal("ab")("xabc") is None
    assert pc.literal("ab")("a") is None


def test_satisfy_consumes_one_character():
    vowel = pc.satisfy(lambda c: c in "aeiou")
    assert vowel("apa") == ("a", "pa")
    assert vowel("pa") is None
    assert vowel("") is None


def test_always_and_fail_consume_nothing():
    assert pc.always(42)("rest") == (42, "rest")
    assert pc.fail()("rest") is None


def test_map_transforms_only_success():
    upper = pc.literal("a").map(str.upper)
    assert upper("ab") == ("A", "b")
    assert upper("b") is None


def test_and_then_feeds_value_to_next_parser():
    # Read a digit, then expect that many x's.
    counted = pc.satisfy(str.isdigit).and_then(lambda n: pc.literal("x" * int(n)))
    assert counted("3xxx!") == ("xxx", "!")
    assert counted("3xx!") is None


def test_and_then_does_not_call_continuation_on_failure():
    calls = []

    def continuation(value):
        calls.append(value)
        return pc.always(value)

    assert pc.literal("a").and_then(continuation)("b") is None
    assert calls == []


def test_keep_and_skip_still_require_both_sides():
    assert pc.literal("(").keep(pc.literal("x"))("(x)") == ("x", ")")
    assert pc.literal("x").skip(pc.literal(")"))("x)") == ("x", "")
    assert pc.literal("(").keep(pc.literal("x"))("(y") is None
    assert pc.literal("x").skip(pc.literal(")"))("x]") is None


def test_one_of_tries_in_order_from_same_position():
    parser = pc.one_of(pc.literal("ab"), pc.literal("a"), pc.literal("abc"))
    assert parser("abc") == ("ab", "c")
    assert parser("ax") == ("a", "x")
    assert parser("x") is None


def test_plus_concatenates_string_results():
    parser = pc.literal("-") + pc.literal("1") + pc.literal("2")
    assert parser("-12x") == ("-12", "x")
    assert parser("-1x") is None


def test_lazy_defers_construction_until_invoked():
    built = []

    def supplier():
        built.append(True)
        return pc.literal("a")

    parser = pc.lazy(supplier)
    assert built == []
    assert parser("a") == ("a", "")
    assert built == [True]


def test_lazy_supports_self_reference():
    # nested := "(" nested ")" | "x"
    nested = pc.one_of(
        pc.literal("(").keep(pc.lazy(lambda: nested)).skip(pc.literal(")")),
        pc.literal("x"),
    )
    assert nested("((x))") == ("x", "")
    assert nested("((x)") is None


def test_many_collects_zero_or_more():
    digits = pc.many(pc.satisfy(str.isdigit))
    assert digits("123a") == (["1", "2", "3"], "a")
    assert digits("a") == ([], "a")


def test_many_stops_on_non_consuming_match():
    assert pc.many(pc.always("x"))("abc") == ([], "abc")


def test_many1_requires_one_match():
    digits = pc.many1(pc.satisfy(str.isdigit))
    assert digits("12") == (["1", "2"], "")
    assert digits("a") is None


def test_sep_by1_leaves_dangling_separator_unconsumed():
    items = pc.sep_by1(pc.satisfy(str.isalpha), pc.literal(","))
    assert items("a,b,c") == (["a", "b", "c"], "")
    assert items("a,b,") == (["a", "b"], ",")
    assert items(",a") is None
