# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Spec definition loader: builds a `CommandSpec` tree from a YAML or TOML file.

Example (YAML):

    name: deploy
    description: Deploy the project.
    default_command: help
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
      - name: remote
        config: remote.yaml

Validators are given by name (`required`, `integer`), or as a single-key mapping
whose value holds the arguments (`min: 1`, `range: [1, 10]`,
`pattern: {regex: "^v", message: "must start with v"}`, `one_of: [a, b]`).
`custom: my.module.check` imports a validator callable by dotted path.
"""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from declarg.exceptions import ConfigError
from declarg.logger import logger
from declarg.parser.arg_type import ArgType
from declarg.parser.descriptors import CommandSpec
from declarg.validators import (
    Validator,
    array_length,
    integer,
    length,
    max_value,
    min_value,
    one_of,
    pattern,
    required,
    value_range,
)

MAX_DEPTH = 5

VALIDATOR_FACTORIES: dict[str, Callable[..., Validator]] = {
    "required": required,
    "min": min_value,
    "max": max_value,
    "range": value_range,
    "integer": integer,
    "length": length,
    "pattern": pattern,
    "one_of": one_of,
    "array_length": array_length,
}


def import_object(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid import path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


def build_validator(entry: str | dict[str, Any]) -> Validator:
    """Turn one validator entry of a spec definition into a validator callable."""
    if isinstance(entry, str):
        name, args = entry, None
    elif isinstance(entry, dict) and len(entry) == 1:
        name, args = next(iter(entry.items()))
    else:
        raise ConfigError(
            f"Validator must be a name or a single-key mapping, got: {entry!r}"
        )

    if name == "custom":
        if not isinstance(args, str):
            raise ConfigError("custom validator needs a dotted import path")
        validator = import_object(args)
        if not callable(validator):
            raise ConfigError(f"custom validator '{args}' is not callable")
        return validator

    factory = VALIDATOR_FACTORIES.get(name)
    if factory is None:
        valid = ", ".join([*VALIDATOR_FACTORIES, "custom"])
        raise ConfigError(f"Unknown validator '{name}'. Must be one of: {valid}")
    try:
        if args is None:
            return factory()
        if name == "one_of":
            return factory(args)
        if isinstance(args, dict):
            return factory(**args)
        if isinstance(args, list):
            return factory(*args)
        return factory(args)
    except TypeError as error:
        raise ConfigError(f"Invalid arguments for validator '{name}': {error}") from error


class _RawArgument(BaseModel):
    name: str
    type: ArgType = ArgType.STRING
    default: Any = None
    description: str = ""
    validators: list[str | dict[str, Any]] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, value: Any) -> ArgType:
        return ArgType(value)


class RawOption(_RawArgument):
    """Option entry of a spec definition."""

    short: str | None = None


class RawPositional(_RawArgument):
    """Positional entry of a spec definition; its index is its list position."""

    rest: bool = False
    raw: bool = False


class RawCommandSpec(BaseModel):
    """One command level of a spec definition."""

    name: str = ""
    description: str = ""
    default_command: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    positionals: list[RawPositional] = Field(default_factory=list)
    commands: list[dict[str, Any]] = Field(default_factory=list)


def _read_file(path: Path) -> Any:
    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(config_file)
        elif suffix == ".toml":
            return toml.load(config_file)
    raise ConfigError(f"Unsupported config format: {suffix}")


def convert_spec(
    raw_config: dict[str, Any],
    *,
    parent_path: Path | None = None,
    depth: int = 0,
) -> CommandSpec:
    """Build a `CommandSpec` tree from an already-parsed spec definition."""
    if depth > MAX_DEPTH:
        raise ConfigError(f"Maximum command depth exceeded ({MAX_DEPTH} levels deep)")
    try:
        raw = RawCommandSpec(**raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid spec definition: {error}") from error

    spec = CommandSpec(
        name=raw.name,
        description=raw.description,
        default_command=raw.default_command,
    )
    for option in raw.options:
        spec.add_option(
            option.name,
            option.type,
            short=option.short,
            default=option.default,
            validators=[build_validator(entry) for entry in option.validators],
            description=option.description,
        )
    for positional in raw.positionals:
        spec.add_positional(
            positional.name,
            positional.type,
            default=positional.default,
            validators=[build_validator(entry) for entry in positional.validators],
            description=positional.description,
            rest=positional.rest,
            raw=positional.raw,
        )

    for entry in raw.commands:
        name = entry.get("name")
        if not isinstance(name, str):
            raise ConfigError(f"Invalid command name: {name!r}")
        if entry.get("config"):
            config_path = Path(entry["config"])
            if parent_path:
                config_path = (parent_path.parent / config_path).resolve()
            child = load_spec(config_path, _depth=depth + 1)
            child.name = name
        else:
            child = convert_spec(entry, parent_path=parent_path, depth=depth + 1)
        description = entry.get("description", "")
        if not isinstance(description, str):
            raise ConfigError(f"Invalid command description: {description!r}")
        spec.add_subcommand(name, child, description=description)

    logger.debug(
        "Loaded command '%s' with %d subcommand(s)", spec.name, len(spec.subcommands)
    )
    return spec


def load_spec(file_path: Path | str, _depth: int = 0) -> CommandSpec:
    """
    Load a `CommandSpec` tree from a YAML or TOML spec definition.

    Args:
        file_path (Path | str): Path to the definition file.

    Returns:
        CommandSpec: The root command description.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file format is unsupported or the definition is invalid.
        StructuralError: If the described spec breaks a structural rule.
    """
    if _depth > MAX_DEPTH:
        raise ConfigError(f"Maximum command depth exceeded ({MAX_DEPTH} levels deep)")

    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    raw_config = _read_file(path)
    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Spec definition must contain a mapping.\n"
            "Example:\n"
            "name: 'app'\n"
            "options:\n"
            "  - name: 'verbose'\n"
            "    type: 'boolean'"
        )
    logger.debug("Loading spec definition from %s", path)
    return convert_spec(raw_config, parent_path=path, depth=_depth)
