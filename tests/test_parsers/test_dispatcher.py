import pytest

from declarg.exceptions import (
    ErrorKind,
    InvalidNumberError,
    MissingArgumentError,
    MissingValueError,
    UnknownArgumentError,
    ValidationError,
)
from declarg.parser import ArgType, CommandSpec, find_subcommand, parse_command
from declarg.signals import HelpSignal
from declarg.validators import min_value, one_of, required


def build_spec():
    spec = CommandSpec(name="build", description="Build the project")
    spec.add_option("output", ArgType.STRING, short="o", default="dist")
    spec.add_option("release", ArgType.BOOLEAN)
    return spec


@pytest.fixture
def app():
    spec = CommandSpec(name="app", description="Example app")
    spec.add_option("verbose", ArgType.BOOLEAN, short="v")
    spec.add_option("port", ArgType.NUMBER, short="p")
    spec.add_option("name", ArgType.STRING)
    spec.add_option("tags", ArgType.STRING_ARRAY)
    spec.add_option("ports", ArgType.NUMBER_ARRAY)
    spec.add_subcommand("build", build_spec(), description="Build the project")
    return spec


def test_subcommand_isolation(app):
    result = parse_command(app, ["--verbose", "build", "--output", "dist"])
    assert result["verbose"] is True
    assert result["build"] == {"output": "dist", "release": False}
    assert "output" not in result
    assert "verbose" not in result["build"]


def test_parent_flags_after_subcommand_are_unknown(app):
    with pytest.raises(UnknownArgumentError) as excinfo:
        parse_command(app, ["build", "--verbose"])
    assert excinfo.value.command_path == "app build"
    assert str(excinfo.value) == "Unknown argument: --verbose"


def test_unknown_flag(app):
    with pytest.raises(UnknownArgumentError) as excinfo:
        parse_command(app, ["--bogus"])
    assert excinfo.value.kind is ErrorKind.UNKNOWN_ARGUMENT
    assert excinfo.value.command_path == "app"


def test_string_array(app):
    assert parse_command(app, ["--tags", "a,b,c"])["tags"] == ["a", "b", "c"]


def test_number_array_rejects_bad_element(app):
    with pytest.raises(InvalidNumberError) as excinfo:
        parse_command(app, ["--ports", "1,2,x"])
    assert excinfo.value.kind is ErrorKind.INVALID_NUMBER
    assert excinfo.value.value == "x"


@pytest.mark.parametrize(
    "flag, value, expected",
    [
        ("name", "hello", "hello"),
        ("port", "8080", 8080),
        ("port", "-1.5", -1.5),
        ("tags", "a,b", ["a", "b"]),
        ("ports", "1,2", [1, 2]),
        ("verbose", "false", False),
        ("verbose", "1", True),
    ],
)
def test_equals_and_space_forms_match(app, flag, value, expected):
    joined = parse_command(app, [f"--{flag}={value}"])
    spaced = parse_command(app, [f"--{flag}", value])
    assert joined[flag] == spaced[flag] == expected


def test_space_form_with_flag_shaped_value(app):
    assert parse_command(app, ["--name=--x"])["name"] == "--x"
    with pytest.raises(MissingValueError):
        parse_command(app, ["--name", "--x"])


def test_absent_options_use_defaults(app):
    result = parse_command(app, [])
    assert result == {
        "verbose": False,
        "port": None,
        "name": None,
        "tags": None,
        "ports": None,
    }


def test_absent_boolean_is_false_unless_defaulted():
    spec = CommandSpec(name="app")
    spec.add_option("quiet", ArgType.BOOLEAN)
    spec.add_option("color", ArgType.BOOLEAN, default=True)
    assert parse_command(spec, []) == {"quiet": False, "color": True}
    assert parse_command(spec, ["--quiet", "--color=false"]) == {
        "quiet": True,
        "color": False,
    }


def test_invalid_default_fails_without_tokens():
    spec = CommandSpec(name="app")
    spec.add_option("port", ArgType.NUMBER, default=0, validators=[min_value(1)])
    with pytest.raises(ValidationError) as excinfo:
        parse_command(spec, [])
    assert str(excinfo.value) == "Validation error for --port: must be at least 1"


def test_first_failing_validator_is_reported():
    spec = CommandSpec(name="app")
    spec.add_option(
        "level",
        ArgType.STRING,
        validators=[one_of(["low", "high"]), required()],
    )
    with pytest.raises(ValidationError) as excinfo:
        parse_command(spec, ["--level", ""])
    assert str(excinfo.value) == "Validation error for --level: must be one of: low, high"


def test_required_option_missing():
    spec = CommandSpec(name="app")
    spec.add_option("token", validators=[required()])
    with pytest.raises(MissingArgumentError) as excinfo:
        parse_command(spec, [])
    assert excinfo.value.kind is ErrorKind.MISSING_ARGUMENT
    assert str(excinfo.value) == "Missing required option: --token"


def test_required_option_empty_value():
    spec = CommandSpec(name="app")
    spec.add_option("token", validators=[required()])
    with pytest.raises(ValidationError) as excinfo:
        parse_command(spec, ["--token="])
    assert str(excinfo.value) == "Validation error for --token: cannot be empty"


def test_missing_positional():
    spec = CommandSpec(name="app")
    spec.add_positional("input")
    with pytest.raises(MissingArgumentError) as excinfo:
        parse_command(spec, [])
    assert str(excinfo.value) == "Missing required positional argument at position 0: input"


def test_positional_default_and_validation():
    spec = CommandSpec(name="app")
    spec.add_positional("count", ArgType.NUMBER, default=1, validators=[min_value(1)])
    assert parse_command(spec, []) == {"count": 1}
    with pytest.raises(ValidationError) as excinfo:
        parse_command(spec, ["0"])
    assert str(excinfo.value) == (
        "Validation error for positional argument count: must be at least 1"
    )


def test_positional_number_coercion_error():
    spec = CommandSpec(name="app")
    spec.add_positional("count", ArgType.NUMBER)
    with pytest.raises(InvalidNumberError) as excinfo:
        parse_command(spec, ["many"])
    assert str(excinfo.value) == "Invalid number for positional argument count: many"


def test_extra_positional_is_unknown():
    spec = CommandSpec(name="app")
    spec.add_positional("input")
    with pytest.raises(UnknownArgumentError) as excinfo:
        parse_command(spec, ["a", "extra"])
    assert str(excinfo.value) == "Unknown argument: extra"


def test_rest_positional():
    spec = CommandSpec(name="lint")
    spec.add_option("fix", ArgType.BOOLEAN)
    spec.add_positional("files", ArgType.STRING, rest=True)
    assert parse_command(spec, ["a.py", "--fix", "b.py"]) == {
        "fix": True,
        "files": ["a.py", "b.py"],
    }
    assert parse_command(spec, []) == {"fix": False, "files": []}


def test_rest_positional_coerces_each_element():
    spec = CommandSpec(name="sum")
    spec.add_positional("numbers", ArgType.NUMBER, rest=True)
    assert parse_command(spec, ["1", "-2", "3.5"]) == {"numbers": [1, -2, 3.5]}


def test_required_rest_positional():
    spec = CommandSpec(name="lint")
    spec.add_positional("files", rest=True, validators=[required()])
    with pytest.raises(MissingArgumentError):
        parse_command(spec, [])


def test_raw_positional_keeps_tokens_verbatim():
    spec = CommandSpec(name="run")
    spec.add_option("verbose", ArgType.BOOLEAN)
    spec.add_positional("script")
    spec.add_positional("args", raw=True)
    result = parse_command(spec, ["--verbose", "deploy.sh", "--force", "-h", "--", "x"])
    assert result == {
        "verbose": True,
        "script": "deploy.sh",
        "args": ["--force", "-h", "--", "x"],
    }


def test_separator_leftovers_are_rejected():
    spec = CommandSpec(name="app")
    spec.add_positional("query")
    assert parse_command(spec, ["--", "-h"]) == {"query": "-h"}
    with pytest.raises(UnknownArgumentError) as excinfo:
        parse_command(spec, ["--", "a", "b"])
    assert str(excinfo.value) == "Unknown argument: b"


def test_help_wins_over_invalid_values(app):
    with pytest.raises(HelpSignal) as excinfo:
        parse_command(app, ["--port", "not-a-number", "--help"])
    assert excinfo.value.spec is app
    assert excinfo.value.command_path == "app"


def test_help_wins_over_unknown_flags(app):
    with pytest.raises(HelpSignal):
        parse_command(app, ["--bogus", "-h"])


def test_help_for_deepest_level(app):
    with pytest.raises(HelpSignal) as excinfo:
        parse_command(app, ["--help", "build", "-h"])
    assert excinfo.value.spec.name == "build"
    assert excinfo.value.command_path == "app build"


def test_help_as_flag_value_is_not_help(app):
    assert parse_command(app, ["--name", "-h"])["name"] == "-h"


def test_find_subcommand_skips_flag_values(app):
    assert find_subcommand(app, ["--name", "build"]) is None
    assert find_subcommand(app, ["--name", "x", "build"]) == 2
    assert find_subcommand(app, ["--", "build"]) is None
    assert parse_command(app, ["--name", "build"])["name"] == "build"


def test_parent_level_is_finalized_before_child():
    spec = CommandSpec(name="app")
    spec.add_option("token", validators=[required()])
    spec.add_subcommand("build", build_spec())
    with pytest.raises(MissingArgumentError) as excinfo:
        parse_command(spec, ["build", "--bogus"])
    assert excinfo.value.command_path == "app"


def test_nested_subcommands():
    add = CommandSpec(name="add")
    add.add_positional("name")
    add.add_option("url", validators=[required()])
    remote = CommandSpec(name="remote")
    remote.add_subcommand("add", add)
    spec = CommandSpec(name="git")
    spec.add_subcommand("remote", remote)

    result = parse_command(spec, ["remote", "add", "origin", "--url", "https://x"])
    assert result == {"remote": {"add": {"url": "https://x", "name": "origin"}}}

    with pytest.raises(MissingArgumentError) as excinfo:
        parse_command(spec, ["remote", "add", "origin"])
    assert excinfo.value.command_path == "git remote add"


def test_subcommand_factory_is_lazy():
    calls = []

    def factory():
        calls.append(1)
        return build_spec()

    spec = CommandSpec(name="app")
    spec.add_option("verbose", ArgType.BOOLEAN)
    spec.add_subcommand("build", factory)
    parse_command(spec, ["--verbose"])
    assert calls == []
    assert parse_command(spec, ["build"])["build"]["output"] == "dist"
    assert calls


def test_parsing_is_repeatable(app):
    tokens = ["-v", "--tags", "x,y", "build", "-o", "out"]
    assert parse_command(app, tokens) == parse_command(app, tokens)


def test_short_flags(app):
    result = parse_command(app, ["-v", "-p", "81"])
    assert result["verbose"] is True
    assert result["port"] == 81
