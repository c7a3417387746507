# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shell completion output and next-token suggestions for a `CommandSpec` tree.

`generate_fish_completions` instantiates every subcommand spec of the tree and
emits a fish script:

    complete -c app -f
    complete -c app -n "__fish_use_subcommand" -l verbose -s v -d "Verbose output"
    complete -c app -n "__fish_use_subcommand" -a "build" -d "Build the project"
    complete -c app -n "__fish_seen_subcommand_from build" -l output -d "Output dir"

`suggest_next` follows partially typed tokens down the tree and returns the
subcommand names and flags valid at the level reached. It powers the interactive
`SpecCompleter`.
"""
from __future__ import annotations

from typing import Sequence

from declarg.parser.descriptors import CommandSpec, OptionDescriptor
from declarg.parser.dispatcher import find_subcommand
from declarg.parser.tokens import HELP_FLAGS, TokenKind, classify, split_flag

SUPPORTED_SHELLS = ["fish"]


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _option_rule(app_name: str, condition: str, option: OptionDescriptor) -> str:
    rule = f"complete -c {app_name} -n {_quote(condition)} -l {option.name}"
    if option.short:
        rule += f" -s {option.short}"
    if option.description:
        rule += f" -d {_quote(option.description)}"
    return rule


def _subcommand_rules(app_name: str, spec: CommandSpec, condition: str) -> list[str]:
    lines = []
    for subcommand in spec.subcommands:
        rule = f"complete -c {app_name} -n {_quote(condition)} -a {_quote(subcommand.name)}"
        description = subcommand.get_description()
        if description:
            rule += f" -d {_quote(description)}"
        lines.append(rule)

        child = subcommand.resolve()
        child_condition = f"__fish_seen_subcommand_from {subcommand.name}"
        for option in child.options:
            lines.append(_option_rule(app_name, child_condition, option))
        lines.extend(_subcommand_rules(app_name, child, child_condition))
    return lines


def generate_fish_completions(spec: CommandSpec, app_name: str | None = None) -> str:
    """
    Generate a fish completion script for `spec` and its whole subcommand tree.

    Args:
        spec (CommandSpec): Root command description.
        app_name (str | None): Command name the rules apply to. Defaults to
            `spec.name`.

    Returns:
        str: The script, one `complete` rule per line.
    """
    app_name = app_name or spec.name
    lines = [f"complete -c {app_name} -f"]
    for option in spec.options:
        lines.append(_option_rule(app_name, "__fish_use_subcommand", option))
    lines.extend(_subcommand_rules(app_name, spec, "__fish_use_subcommand"))
    return "\n".join(lines)


def generate_completions(spec: CommandSpec, shell: str, app_name: str | None = None) -> str:
    """Generate a completion script for the named shell."""
    if shell == "fish":
        return generate_fish_completions(spec, app_name)
    raise ValueError(
        f"Unsupported shell: {shell}. Must be one of: {', '.join(SUPPORTED_SHELLS)}"
    )


def _flag_candidates(spec: CommandSpec, used: set[str]) -> list[str]:
    candidates = []
    for option in spec.options:
        if option.name in used:
            continue
        candidates.append(option.long_flag)
        if option.short:
            candidates.append(f"-{option.short}")
    candidates.extend(HELP_FLAGS)
    return candidates


def suggest_next(spec: CommandSpec, tokens: Sequence[str], prefix: str = "") -> list[str]:
    """
    Suggest the next token after the complete `tokens`.

    Subcommand names are offered until one is selected at the current level; flags
    already given at that level are not offered again. Nothing is suggested when
    the last token is a flag still waiting for its value.

    Args:
        spec (CommandSpec): Root command description.
        tokens (Sequence[str]): Complete tokens typed so far.
        prefix (str): Partially typed next token.

    Returns:
        list[str]: Candidates starting with `prefix`.
    """
    tokens = list(tokens)
    boundary = find_subcommand(spec, tokens)
    while boundary is not None:
        subcommand = spec.get_subcommand(tokens[boundary])
        assert subcommand is not None
        spec = subcommand.resolve()
        tokens = tokens[boundary + 1 :]
        boundary = find_subcommand(spec, tokens)

    kinds = classify(spec, tokens)
    if kinds and kinds[-1] is TokenKind.FLAG and "=" not in tokens[-1]:
        option = spec.get_option(tokens[-1])
        if option is not None and not option.is_boolean:
            return []

    used = set()
    for token, kind in zip(tokens, kinds):
        if kind is not TokenKind.FLAG:
            continue
        option = spec.get_option(split_flag(token)[0])
        if option is not None:
            used.add(option.name)

    candidates: list[str] = []
    if not prefix.startswith("-"):
        candidates.extend(subcommand.name for subcommand in spec.subcommands)
    candidates.extend(_flag_candidates(spec, used))
    return [candidate for candidate in candidates if candidate.startswith(prefix)]
