import pytest

from declarg.config import build_validator, convert_spec, load_spec
from declarg.exceptions import ConfigError, StructuralError, ValidationError
from declarg.parser import ArgType, parse_command

YAML_SPEC = """
name: deploy
description: Deploy the project.
options:
  - name: verbose
    type: boolean
    short: v
  - name: port
    type: number
    default: 8080
    validators:
      - range: [1, 65535]
positionals:
  - name: target
    validators: [required]
commands:
  - name: build
    description: Build the project
    options:
      - name: output
        default: dist
"""

TOML_SPEC = """
name = "deploy"

[[options]]
name = "tags"
type = "string[]"

[[positionals]]
name = "files"
rest = true
"""


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="UTF-8")
    return path


def test_load_yaml_spec(tmp_path):
    spec = load_spec(write(tmp_path, "deploy.yaml", YAML_SPEC))
    assert spec.name == "deploy"
    assert spec.description == "Deploy the project."
    assert spec.get_option("-v").type is ArgType.BOOLEAN
    assert spec.positionals[0].required
    build = spec.get_subcommand("build")
    assert build.get_description() == "Build the project"

    result = parse_command(spec, ["prod", "build"])
    assert result == {
        "verbose": False,
        "port": 8080,
        "target": "prod",
        "build": {"output": "dist"},
    }


def test_loaded_validators_run(tmp_path):
    spec = load_spec(write(tmp_path, "deploy.yml", YAML_SPEC))
    with pytest.raises(ValidationError) as excinfo:
        parse_command(spec, ["prod", "--port", "0"])
    assert str(excinfo.value) == "Validation error for --port: must be between 1 and 65535"


def test_load_toml_spec(tmp_path):
    spec = load_spec(str(write(tmp_path, "tool.toml", TOML_SPEC)))
    assert spec.get_option("tags").type is ArgType.STRING_ARRAY
    assert spec.positionals[0].rest
    assert parse_command(spec, ["a", "b", "--tags", "x,y"]) == {
        "tags": ["x", "y"],
        "files": ["a", "b"],
    }


def test_external_command_config(tmp_path):
    (tmp_path / "sub").mkdir()
    write(
        tmp_path / "sub",
        "remote.yaml",
        "name: ignored\ndescription: Manage remotes\npositionals:\n  - name: url\n",
    )
    root = write(
        tmp_path,
        "git.yaml",
        "name: git\ncommands:\n  - name: remote\n    config: sub/remote.yaml\n",
    )
    spec = load_spec(root)
    remote = spec.get_subcommand("remote").resolve()
    assert remote.name == "remote"
    assert spec.get_subcommand("remote").get_description() == "Manage remotes"
    assert parse_command(spec, ["remote", "https://example.com"]) == {
        "remote": {"url": "https://example.com"}
    }


def test_self_referencing_config_hits_depth_limit(tmp_path):
    path = write(
        tmp_path,
        "loop.yaml",
        "name: loop\ncommands:\n  - name: again\n    config: loop.yaml\n",
    )
    with pytest.raises(ConfigError, match="Maximum command depth exceeded"):
        load_spec(path)


def test_custom_validator_by_import_path(tmp_path, monkeypatch):
    write(
        tmp_path,
        "spec_checks.py",
        "def even(value):\n"
        "    if value % 2:\n"
        "        return 'must be even'\n"
        "    return None\n",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    spec = convert_spec(
        {
            "name": "app",
            "options": [
                {
                    "name": "count",
                    "type": "number",
                    "validators": [{"custom": "spec_checks.even"}],
                }
            ],
        }
    )
    assert parse_command(spec, ["--count", "4"]) == {"count": 4}
    with pytest.raises(ValidationError) as excinfo:
        parse_command(spec, ["--count", "3"])
    assert str(excinfo.value) == "Validation error for --count: must be even"


@pytest.mark.parametrize(
    "entry, value, expected",
    [
        ("required", "", "cannot be empty"),
        ({"min": 2}, 1, "must be at least 2"),
        ({"max": 2}, 3, "must be at most 2"),
        ({"length": {"min_length": 2}}, "a", "must be at least 2 characters long"),
        ({"one_of": ["a", "b"]}, "c", "must be one of: a, b"),
        (
            {"pattern": {"regex": "^v", "message": "must start with v"}},
            "1.0",
            "must start with v",
        ),
        ({"array_length": [1, 2]}, [], "must have at least 1 items"),
    ],
)
def test_build_validator(entry, value, expected):
    assert build_validator(entry)(value) == expected


@pytest.mark.parametrize(
    "entry",
    [
        "unknown",
        {"min": 1, "max": 2},
        {"custom": 42},
        {"custom": "nodots"},
        {"custom": "declarg.validators.not_there"},
        {"min": {"bogus": 1}},
    ],
)
def test_build_validator_rejects_bad_entries(entry):
    with pytest.raises(ConfigError):
        build_validator(entry)


def test_unknown_type_is_rejected():
    with pytest.raises(ConfigError, match="Invalid spec definition"):
        convert_spec({"name": "app", "options": [{"name": "x", "type": "decimal"}]})


def test_structural_errors_surface():
    with pytest.raises(StructuralError):
        convert_spec(
            {
                "name": "app",
                "options": [
                    {"name": "verbose", "short": "v"},
                    {"name": "version", "short": "v"},
                ],
            }
        )


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ConfigError, match="Unsupported config format"):
        load_spec(write(tmp_path, "spec.json", "{}"))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_spec(tmp_path / "missing.yaml")


def test_invalid_path_type():
    with pytest.raises(TypeError):
        load_spec(42)


def test_non_mapping_content(tmp_path):
    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_spec(write(tmp_path, "list.yaml", "- a\n- b\n"))
