# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Recursive subcommand dispatch: the entry point of the Declarg parsing engine.

`parse_command` turns a flat token list into a result tree mirroring the command
hierarchy. Per command level:

    SCANNING ─┬─> SUBCOMMAND_FOUND ──> finalize level ──> RECURSE ──> DONE
              └─> NO_SUBCOMMAND ─────> finalize level ──────────────> DONE

The tokens before the subcommand selector belong to the current level; the tokens
after it are parsed against the subcommand's own `CommandSpec` and the nested
result is stored under the subcommand's name. Finalizing a level applies defaults,
reports missing required arguments and runs every validator chain, even for
descriptors absent from the input.

Help always wins: before any coercion, the whole stream is pre-scanned and a
`HelpSignal` is raised for the deepest level carrying `--help` or `-h` among its
own flags. Flag values, raw captures and tokens after `--` never count.
"""
from __future__ import annotations

from typing import Any, Sequence

from declarg.exceptions import (
    MissingArgumentError,
    ParseError,
    UnknownArgumentError,
    ValidationError,
)
from declarg.logger import logger
from declarg.parser.coercion import coerce_each, coerce_value
from declarg.parser.descriptors import CommandSpec
from declarg.parser.option_scanner import has_help_flag, scan_options
from declarg.parser.positional_matcher import PositionalMatch, match_positionals
from declarg.parser.tokens import TokenKind, classify
from declarg.signals import HelpSignal
from declarg.validators import Validator, run_validators


def _join_path(command_path: str, name: str) -> str:
    return f"{command_path} {name}".strip()


def find_subcommand(spec: CommandSpec, tokens: Sequence[str]) -> int | None:
    """
    Return the index of the token selecting a subcommand of `spec`, if any.

    Only operands count: flags, values swallowed by a flag and tokens after `--`
    are skipped.
    """
    if not spec.subcommands:
        return None
    tokens = list(tokens)
    for index, kind in enumerate(classify(spec, tokens)):
        if kind is TokenKind.SEPARATOR:
            return None
        if kind is TokenKind.OPERAND and spec.get_subcommand(tokens[index]):
            return index
    return None


def find_help_request(
    spec: CommandSpec,
    tokens: Sequence[str],
    command_path: str = "",
) -> tuple[CommandSpec, str] | None:
    """
    Return the deepest `(spec, command_path)` whose own tokens request help.

    Nothing is coerced or rejected here; subcommand specs on the selected branch
    are resolved to follow the stream.
    """
    tokens = list(tokens)
    boundary = find_subcommand(spec, tokens)
    head = tokens if boundary is None else tokens[:boundary]
    if boundary is not None:
        subcommand = spec.get_subcommand(tokens[boundary])
        assert subcommand is not None
        deeper = find_help_request(
            subcommand.resolve(),
            tokens[boundary + 1 :],
            _join_path(command_path, subcommand.name),
        )
        if deeper is not None:
            return deeper
    if has_help_flag(spec, match_positionals(spec, head).remaining):
        return spec, command_path
    return None


def _validate(value: Any, validators: list[Validator], label: str, name: str) -> None:
    if value is None:
        return
    error = run_validators(value, validators)
    if error:
        raise ValidationError(
            f"Validation error for {label}: {error}", argument=name, value=value
        )


def finalize_level(
    spec: CommandSpec,
    match: PositionalMatch,
    option_values: dict[str, Any],
) -> dict[str, Any]:
    """
    Build the result of one command level.

    Applies defaults, raises `MissingArgumentError` for absent required arguments
    and runs the validator chain of every descriptor. Absent options without a
    default are reported as `None`; an absent rest/raw positional as `[]`.
    """
    result: dict[str, Any] = {}

    for option in spec.options:
        if option.name in option_values:
            value = option_values[option.name]
        else:
            value = option.default
            if value is None and option.required:
                raise MissingArgumentError(
                    f"Missing required option: {option.long_flag}",
                    argument=option.name,
                )
            if value is None and option.is_boolean:
                value = False
        _validate(value, option.validators, option.long_flag, option.name)
        result[option.name] = value

    for positional in spec.positionals:
        if positional.is_terminal:
            tokens = match.collected or []
            if tokens:
                if positional.raw:
                    value = list(tokens)
                else:
                    value = coerce_each(
                        tokens, positional.type, positional.label, positional.name
                    )
            elif positional.default is not None:
                value = positional.default
            elif positional.required:
                raise MissingArgumentError(
                    f"Missing required positional argument at position "
                    f"{positional.index}: {positional.name}",
                    argument=positional.name,
                )
            else:
                value = []
        elif positional.name in match.assigned:
            value = coerce_value(
                match.assigned[positional.name],
                positional.type,
                positional.label,
                positional.name,
            )
        elif positional.default is not None:
            value = positional.default
        else:
            raise MissingArgumentError(
                f"Missing required positional argument at position "
                f"{positional.index}: {positional.name}",
                argument=positional.name,
            )
        _validate(value, positional.validators, positional.label, positional.name)
        result[positional.name] = value

    return result


def _parse_level(spec: CommandSpec, tokens: list[str], command_path: str) -> dict[str, Any]:
    try:
        boundary = find_subcommand(spec, tokens)
        head = tokens if boundary is None else tokens[:boundary]
        match = match_positionals(spec, head)
        option_values, leftovers = scan_options(spec, match.remaining, command_path)
        if leftovers:
            raise UnknownArgumentError(
                f"Unknown argument: {leftovers[0]}",
                argument=leftovers[0],
                value=leftovers[0],
            )
        result = finalize_level(spec, match, option_values)
    except ParseError as error:
        raise error.with_command_path(command_path)

    if boundary is None:
        logger.debug("[%s] no subcommand, level done", command_path or spec.name)
        return result

    subcommand = spec.get_subcommand(tokens[boundary])
    assert subcommand is not None
    child_path = _join_path(command_path, subcommand.name)
    logger.debug("[%s] dispatching to subcommand '%s'", command_path, subcommand.name)
    result[subcommand.name] = _parse_level(
        subcommand.resolve(), tokens[boundary + 1 :], child_path
    )
    return result


def parse_command(
    spec: CommandSpec,
    tokens: Sequence[str],
    command_path: str | None = None,
) -> dict[str, Any]:
    """
    Parse `tokens` against `spec` and return the typed result tree.

    Args:
        spec (CommandSpec): Root command description.
        tokens (Sequence[str]): Raw tokens, without the program name.
        command_path (str | None): Path used for help and error context. Defaults
            to `spec.name`.

    Returns:
        dict[str, Any]: Option and positional values by name; the selected
        subcommand's result nested under its name.

    Raises:
        HelpSignal: If help was requested anywhere in the stream.
        ParseError: On the first unparseable, missing or invalid argument.
    """
    tokens = list(tokens)
    path = spec.name if command_path is None else command_path
    logger.debug("[%s] parsing tokens: %s", path, tokens)
    help_request = find_help_request(spec, tokens, path)
    if help_request is not None:
        help_spec, help_path = help_request
        logger.debug("[%s] help requested", help_path)
        raise HelpSignal(help_spec, help_path)
    return _parse_level(spec, tokens, path)
