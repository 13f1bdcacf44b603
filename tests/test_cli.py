"""Unit tests for the CLI entry point."""

import json
import logging

import pytest

import simplecalc_pkg.config as _config
from simplecalc_pkg.cli import format_operator_table, main_entry


@pytest.fixture(autouse=True)
def restore_cli_state(monkeypatch):
    # main_entry writes CLI overrides into the config module and installs handlers
    monkeypatch.setattr(_config, "FLOAT_PRECISION", _config.FLOAT_PRECISION)
    yield
    logger = logging.getLogger("simplecalc")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["10", "+", "5"], "15"),
        (["10", "/", "3"], "3.33"),
        (["7", "/", "2"], "3.50"),
        (["-7", "%", "2"], "-1"),
        (["10", "-", "15"], "-5"),
        (["1", "<<<", "1"], "2"),
        (["1", ">>>", "1"], "2147483648"),
        (["4294967295", "&", "255"], "255"),
    ],
)
def test_success_prints_result(capsys, argv, expected):
    assert main_entry(argv) == 0
    captured = capsys.readouterr()
    assert captured.out == expected + "\n"
    assert captured.err == ""


def test_show_expression(capsys):
    assert main_entry(["-x", "10", "+", "5"]) == 0
    assert capsys.readouterr().out == "10 + 5 = 15\n"


def test_precision_override(capsys):
    assert main_entry(["-p", "4", "10", "/", "3"]) == 0
    assert capsys.readouterr().out == "3.3333\n"


@pytest.mark.parametrize(
    "argv, fragment",
    [
        (["7", "/", "0"], "Division by zero"),
        (["7", "%", "0"], "Division by zero"),
        (["2147483647", "+", "1"], "overflow"),
        (["-1", "&", "1"], "Negative numbers"),
        (["1", "+", "1.5"], "operand2"),
        (["12a", "+", "1"], "operand1"),
    ],
)
def test_failure_prints_error(capsys, argv, fragment):
    assert main_entry(argv) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: ")
    assert fragment in captured.err


def test_unsupported_operator_lists_operators(capsys):
    assert main_entry(["1", "**", "2"]) == 1
    err = capsys.readouterr().err
    assert "Unsupported operator" in err
    assert "Supported Operators:" in err
    assert "(<<<) rotate left" in err


def test_json_success(capsys):
    assert main_entry(["--format", "json", "10", "/", "4"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is True
    assert data["type"] == "float64"
    assert data["result"] == 2.5
    assert data["formatted"] == "2.50"


def test_json_failure(capsys):
    assert main_entry(["--format", "json", "5", "%", "0"]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: Division by zero")
    data = json.loads(captured.out)
    assert data["ok"] is False
    assert data["code"] == "DIVISION_BY_ZERO"


def test_missing_arguments_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main_entry(["1", "+"])
    assert exc_info.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_negative_precision_is_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main_entry(["-p", "-1", "1", "/", "3"])
    assert exc_info.value.code == 2


def test_version(capsys):
    assert main_entry(["--version"]) == 0
    assert capsys.readouterr().out.strip() == _config.VERSION


def test_operators(capsys):
    assert main_entry(["--operators"]) == 0
    out = capsys.readouterr().out
    assert out == format_operator_table() + "\n"
    assert "(%) modulo" in out


def test_health_check(capsys):
    assert main_entry(["--health-check"]) == 0
    out = capsys.readouterr().out
    assert "[FAIL]" not in out
    assert "All health checks passed" in out


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "calc.log"
    assert main_entry(["--log-level", "DEBUG", "--log-file", str(log_file), "6", "*", "7"]) == 0
    assert capsys.readouterr().out == "42\n"
    content = log_file.read_text()
    assert "[DEBUG] simplecalc.evaluator" in content
    assert "[INFO] simplecalc.cli: Calculating 6 * 7" in content
