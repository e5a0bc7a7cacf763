import io
import subprocess
import sys

import pytest

import runledger
from runledger.errors import ParseError, UnsupportedOperation
from runledger.main import EXIT_CONFIG_ERROR, EXIT_EVAL_ERROR, EXIT_OK, EXIT_PARSE_ERROR, build_parser, main, process


# ---------------------------
# process()
# ---------------------------

def test_process_example(example_document, example_output):
    assert process(example_document) == example_output

def test_process_raises_parse_error():
    with pytest.raises(ParseError):
        process("12..5")

def test_process_raises_unsupported_operation():
    with pytest.raises(UnsupportedOperation):
        process("[1, 2] / [3, 4]")

def test_importing_the_package_does_not_load_the_cli():
    code = "import sys, runledger; print(sorted(m for m in ('runledger.main', 'runledger.settings', 'dotenv') if m in sys.modules))"
    out = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)
    assert out.stdout.strip() == "[]"
    assert "process" not in runledger.__all__


# ---------------------------
# Command line
# ---------------------------

def test_build_parser_defaults():
    args = build_parser().parse_args(["ledger.txt"])
    assert args.path == "ledger.txt"
    assert args.precision is None
    assert args.log_level is None

def test_main_prints_evaluated_document(clean_env, capsys, example_document, example_output):
    path = clean_env / "ledger.txt"
    path.write_text(example_document, encoding="utf-8")
    assert main([str(path)]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == example_output
    assert captured.err == ""

def test_main_reads_stdin(clean_env, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("50 cash\n20 lunch\n---\nleft\n"))
    assert main(["-"]) == EXIT_OK
    assert "30 left" in capsys.readouterr().out

def test_main_precision_flag(clean_env, capsys):
    path = clean_env / "ledger.txt"
    path.write_text("10\n3.333 x\n---\n", encoding="utf-8")
    assert main([str(path), "--precision", "1"]) == EXIT_OK
    assert "6.7" in capsys.readouterr().out

def test_main_precision_from_environment(clean_env, capsys, monkeypatch):
    monkeypatch.setenv("RUNLEDGER_PRECISION", "0")
    path = clean_env / "ledger.txt"
    path.write_text("10\n3.333 x\n---\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert " 7 \n" in out

def test_main_reports_parse_errors(clean_env, capsys):
    path = clean_env / "bad.txt"
    path.write_text("10\n12..5\n[1, ]\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_PARSE_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error: found '.' expected number" in captured.err
    assert f"{path}:2:4" in captured.err
    assert f"{path}:3:5" in captured.err

def test_main_reports_evaluation_errors(clean_env, capsys):
    path = clean_env / "bad.txt"
    path.write_text("100\n[1, 2] * [-1, 3]\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_EVAL_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error: Interval multiplication")

def test_main_missing_file(clean_env, capsys):
    assert main([str(clean_env / "missing.txt")]) == EXIT_PARSE_ERROR
    assert "cannot read" in capsys.readouterr().err

def test_main_invalid_configuration(clean_env, capsys):
    path = clean_env / "ledger.txt"
    path.write_text("1\n", encoding="utf-8")
    assert main([str(path), "--precision", "42"]) == EXIT_CONFIG_ERROR
    assert "invalid configuration" in capsys.readouterr().err

def test_main_rejects_unknown_log_level(clean_env):
    with pytest.raises(SystemExit) as e:
        main(["ledger.txt", "--log-level", "loud"])
    assert e.value.code == 2

def test_main_accepts_lowercase_log_level(clean_env, capsys):
    path = clean_env / "ledger.txt"
    path.write_text("1 one\n", encoding="utf-8")
    assert main([str(path), "--log-level", "debug"]) == EXIT_OK
    assert capsys.readouterr().out == "1 one\n"
