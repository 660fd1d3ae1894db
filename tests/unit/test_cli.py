import pathlib
import subprocess
import sys
import tempfile

import pytest

import json_parser as jp

PARSER = pathlib.Path(__file__).resolve().parents[2] / "json_parser.py"


def _write(data):
    with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False, encoding="utf-8") as f:
        f.write(data)
        return f.name


def test_cli_debug_logs_trailing_input_offset():
    fname = _write("[1,2,3] x")
    try:
        cmd = [sys.executable, str(PARSER), fname, "--debug"]
        cp = subprocess.run(cmd, capture_output=True, text=True)
        assert cp.returncode == 1
        assert "unconsumed input at offset 8" in cp.stderr
        assert f"Invalid JSON: {fname}" in cp.stderr
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)


def test_cli_max_depth_flag(capsys):
    fname = _write('{"a": [[1]]}')
    try:
        assert jp._cli([fname]) == 0
        assert capsys.readouterr().out.strip() == "OK"
        assert jp._cli([fname, "--max-depth", "2"]) == 1
        assert "Invalid JSON" in capsys.readouterr().err
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)


def test_cli_rejects_unsafe_max_depth(capsys):
    fname = _write("[]")
    try:
        with pytest.raises(SystemExit) as ei:
            jp._cli([fname, "--max-depth", "100000"])
        assert ei.value.code == 2
        assert "--max-depth must be between 0 and" in capsys.readouterr().err
    finally:
        pathlib.Path(fname).unlink(missing_ok=True)
