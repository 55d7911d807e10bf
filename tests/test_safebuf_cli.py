"""Tests for the safebuf command line front end and the self-test report."""

from __future__ import annotations

from pathlib import Path

import pytest

import safebuf_cli
import safebuf_selftest


def test_self_test_report_passes() -> None:
    report = safebuf_selftest.run_self_test()

    failed = {name: r["why"] for name, r in report["tests"].items() if not r["ok"]}
    assert failed == {}
    assert report["all_passed"] is True
    assert {"append_atomic", "move", "hash_sip128", "mid", "trim"} <= set(report["tests"])


def test_self_test_report_formats_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(safebuf_selftest, "REF_KEY", bytes(16))

    report = safebuf_selftest.run_self_test()
    text = safebuf_selftest.format_report(report)

    assert report["all_passed"] is False
    assert not report["tests"]["hash_sip128"]["ok"]
    assert "FAIL" in text
    assert "hash_sip128" in text


def test_selftest_command(capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["selftest"])

    out = capsys.readouterr().out
    assert rc == 0
    assert "All passed: True" in out


def test_hash_command(capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main([
        "hash", "Esto es un Test para hash",
        "--version", "sip128",
        "--key", bytes(range(16)).hex(),
    ])

    assert rc == 0
    assert capsys.readouterr().out.strip() == "1882ec9b9f416a6330aecc8b1bfafd13"


def test_hash_command_reads_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "msg.txt"
    src.write_bytes(b"Esto es un Test para hash")

    rc = safebuf_cli.main(["hash", f"@{src}", "--version", "hsip64"])

    assert rc == 0
    assert capsys.readouterr().out.strip() == "eac1d8508e6a7f5a"


def test_hash_command_rejects_short_key(capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["hash", "x", "--key", "0011"])

    assert rc == 2
    assert "key must be 16 bytes" in capsys.readouterr().err


def test_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["trim", f"@{tmp_path / 'nope.txt'}"])

    assert rc == 2
    assert "Input file not found" in capsys.readouterr().err


def test_split_command(capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["split", "String de Prueba para split_c"])

    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["String", "de", "Prueba", "para", "split_c"]


def test_split_first_not_found(capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["split", "abc", "--delim", "-", "--first"])

    assert rc == 1
    assert "not found" in capsys.readouterr().err


@pytest.mark.parametrize(
    "mode, expected",
    [("both", "es un test"), ("left", "es un test   "), ("right", "   es un test")],
)
def test_trim_command(mode: str, expected: str, capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["trim", "   es un test   ", "--mode", mode])

    assert rc == 0
    assert capsys.readouterr().out == expected + "\n"


def test_check_command(capsys: pytest.CaptureFixture[str]) -> None:
    rc = safebuf_cli.main(["check", "-23.89"])

    out = capsys.readouterr().out
    assert rc == 0
    assert "integer : no" in out
    assert "float   : yes" in out
    assert "signed  : yes" in out


def test_unknown_command_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as exc:
        safebuf_cli.main(["frobnicate"])
    assert exc.value.code == 2
