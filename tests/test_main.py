import json
import logging

import pytest

import declarg.__main__ as cli
from declarg.__main__ import build_cli_spec, main

SPEC = """
name: deploy
description: Deploy the project.
options:
  - name: verbose
    type: boolean
    short: v
  - name: port
    type: number
    default: 8080
positionals:
  - name: target
commands:
  - name: build
    description: Build the project
    options:
      - name: output
        default: dist
"""


@pytest.fixture(autouse=True)
def log_levels(monkeypatch):
    """Record logging setup instead of replacing the root handlers."""
    levels = []
    monkeypatch.setattr(
        cli, "setup_logging", lambda console_log_level: levels.append(console_log_level)
    )
    return levels


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "deploy.yaml"
    path.write_text(SPEC, encoding="UTF-8")
    return str(path)


def test_cli_spec_structure():
    spec = build_cli_spec()
    assert [subcommand.name for subcommand in spec.subcommands] == [
        "parse",
        "help",
        "completions",
    ]
    assert spec.default_command == "help"


def test_parse_prints_json(spec_file, capsys):
    main(["parse", spec_file, "--port", "9000", "prod"])
    assert json.loads(capsys.readouterr().out) == {
        "verbose": False,
        "port": 9000,
        "target": "prod",
    }


def test_parse_subcommand_result(spec_file, capsys):
    main(["parse", spec_file, "prod", "build", "--output", "out"])
    parsed = json.loads(capsys.readouterr().out)
    assert parsed["build"] == {"output": "out"}


def test_parse_error_in_target(spec_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["parse", spec_file, "--bogus"])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.strip() == "deploy: Unknown argument: --bogus"


def test_parse_passes_help_to_target(spec_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["parse", spec_file, "--help"])
    assert excinfo.value.code == 0
    assert "usage: deploy <target>" in capsys.readouterr().out


def test_help_for_root(spec_file, capsys):
    main(["help", spec_file])
    out = capsys.readouterr().out
    assert "usage: deploy <target> <command> [options]" in out
    assert "global options:" in out


def test_help_for_subcommand(spec_file, capsys):
    main(["help", spec_file, "build"])
    out = capsys.readouterr().out
    assert "usage: deploy build [options]" in out
    assert "Build the project" in out


def test_help_for_unknown_subcommand(spec_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["help", spec_file, "nope"])
    assert excinfo.value.code == 1
    assert "Unknown command 'nope' under 'deploy'" in capsys.readouterr().err


def test_completions(spec_file, capsys):
    main(["completions", spec_file])
    out = capsys.readouterr().out
    assert out.startswith("complete -c deploy -f")
    assert '-a "build"' in out


def test_completions_rejects_unknown_shell(spec_file, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["completions", spec_file, "--shell", "bash"])
    assert excinfo.value.code == 1
    assert "must be one of: fish" in capsys.readouterr().err


def test_missing_spec_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["parse", str(tmp_path / "missing.yaml")])
    assert excinfo.value.code == 1
    assert "declarg: No such config file" in capsys.readouterr().err


def test_no_arguments_shows_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 0
    assert "usage: declarg <command> [options]" in capsys.readouterr().out


def test_verbose_enables_debug_logging(spec_file, log_levels, capsys):
    main(["-v", "completions", spec_file])
    main(["completions", spec_file])
    assert log_levels == [logging.DEBUG, logging.WARNING]
