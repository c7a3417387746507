import pytest

from declarg.exceptions import ErrorKind, MissingValueError, UnknownArgumentError
from declarg.parser import ArgType, CommandSpec
from declarg.parser.option_scanner import has_help_flag, scan_options
from declarg.signals import HelpSignal


@pytest.fixture
def spec():
    spec = CommandSpec(name="app")
    spec.add_option("port", ArgType.NUMBER, short="p")
    spec.add_option("name", ArgType.STRING, short="n")
    spec.add_option("tags", ArgType.STRING_ARRAY)
    spec.add_option("debug", ArgType.BOOLEAN, short="d")
    spec.add_option("all", ArgType.BOOLEAN, short="a")
    spec.add_option("brief", ArgType.BOOLEAN, short="b")
    return spec


@pytest.mark.parametrize(
    "tokens",
    [
        ["--port", "8080"],
        ["--port=8080"],
        ["-p", "8080"],
        ["-p=8080"],
    ],
)
def test_value_forms_are_equivalent(spec, tokens):
    values, leftovers = scan_options(spec, tokens)
    assert values == {"port": 8080}
    assert leftovers == []


def test_equals_value_binds_regardless_of_shape(spec):
    values, _ = scan_options(spec, ["--name=--weird"])
    assert values == {"name": "--weird"}


def test_space_value_starting_with_double_dash_is_not_bound(spec):
    with pytest.raises(MissingValueError) as excinfo:
        scan_options(spec, ["--name", "--debug"])
    assert excinfo.value.kind is ErrorKind.MISSING_VALUE
    assert str(excinfo.value) == "Missing value for argument: --name"


def test_missing_value_at_end(spec):
    with pytest.raises(MissingValueError):
        scan_options(spec, ["-p"])


def test_negative_number_value(spec):
    values, _ = scan_options(spec, ["--port", "-5"])
    assert values == {"port": -5}


def test_boolean_presence_means_true(spec):
    values, leftovers = scan_options(spec, ["--debug", "target"])
    assert values == {"debug": True}
    assert leftovers == ["target"]


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (["--debug=false"], False),
        (["--debug=0"], False),
        (["--debug", "false"], False),
        (["--debug", "0"], False),
        (["--debug", "true"], True),
        (["-d", "false"], False),
    ],
)
def test_explicit_boolean_values(spec, tokens, expected):
    values, leftovers = scan_options(spec, tokens)
    assert values == {"debug": expected}
    assert leftovers == []


def test_boolean_bundle(spec):
    values, _ = scan_options(spec, ["-abd"])
    assert values == {"all": True, "brief": True, "debug": True}


def test_bundle_with_value_flag_is_rejected(spec):
    with pytest.raises(UnknownArgumentError) as excinfo:
        scan_options(spec, ["-dp"])
    assert str(excinfo.value) == "Combined short flag -p must be boolean (found in -dp)"


def test_bundle_with_unknown_flag_is_rejected(spec):
    with pytest.raises(UnknownArgumentError) as excinfo:
        scan_options(spec, ["-dz"])
    assert str(excinfo.value) == "Unknown argument: -z"


def test_unknown_long_flag(spec):
    with pytest.raises(UnknownArgumentError) as excinfo:
        scan_options(spec, ["--bogus"])
    assert excinfo.value.kind is ErrorKind.UNKNOWN_ARGUMENT
    assert excinfo.value.argument == "--bogus"
    assert str(excinfo.value) == "Unknown argument: --bogus"


def test_last_occurrence_wins(spec):
    values, _ = scan_options(spec, ["--port", "1", "-p", "2"])
    assert values == {"port": 2}


def test_array_value(spec):
    values, _ = scan_options(spec, ["--tags", "a,b,c"])
    assert values == {"tags": ["a", "b", "c"]}


def test_scanning_stops_at_separator(spec):
    values, leftovers = scan_options(spec, ["--debug", "--", "--port", "x"])
    assert values == {"debug": True}
    assert leftovers == ["--port", "x"]


def test_help_flag_raises_help_signal(spec):
    with pytest.raises(HelpSignal) as excinfo:
        scan_options(spec, ["--debug", "-h"], command_path="app")
    assert excinfo.value.spec is spec
    assert excinfo.value.command_path == "app"


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (["--help"], True),
        (["--debug", "-h"], True),
        (["--port", "abc", "--help"], True),
        (["--name", "-h"], False),
        (["--", "--help"], False),
        (["--bogus", "--help"], True),
        ([], False),
    ],
)
def test_has_help_flag(spec, tokens, expected):
    assert has_help_flag(spec, tokens) is expected
