# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Assigns positional candidates to the positional descriptors of one command level.

The matcher is purely structural: it decides which token belongs to which positional
and hands every other token back to the caller, in order, for option scanning.
Coercion and validation of the assigned tokens happen when the dispatcher finalizes
the level, so a help request can still short-circuit a stream with bad values.

Matching rules:
- Flag tokens and the value tokens they swallow are skipped (see `tokens.py`).
- Each other token fills the next unfilled positional by index.
- A `rest` positional collects every later non-flag token; flags met along the way
  are still returned for option scanning.
- A `raw` positional collects everything from its first token on, verbatim. When
  earlier positionals exist, capture begins as soon as they are all filled, so
  flags meant for a proxied program are captured too.
- After `--`, every token is a positional candidate.
- Tokens left over once every positional is filled are returned unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from declarg.logger import logger
from declarg.parser.descriptors import CommandSpec
from declarg.parser.tokens import consumes_next, is_flag, is_separator


@dataclass
class PositionalMatch:
    """
    Result of matching one command level's tokens.

    Attributes:
        assigned (dict[str, str]): Raw token per single-valued positional.
        collected (list[str] | None): Tokens absorbed by the rest/raw positional,
            `None` when the level has none or it received nothing.
        remaining (list[str]): Tokens for the option scanner, in order.
    """

    assigned: dict[str, str] = field(default_factory=dict)
    collected: list[str] | None = None
    remaining: list[str] = field(default_factory=list)


def match_positionals(spec: CommandSpec, tokens: list[str]) -> PositionalMatch:
    """Split `tokens` into positional assignments and tokens left for option scanning."""
    regular = [positional for positional in spec.positionals if not positional.is_terminal]
    terminal = next(
        (positional for positional in spec.positionals if positional.is_terminal), None
    )
    match = PositionalMatch()
    collected: list[str] = []
    slot = 0
    capturing = False
    after_separator = False
    index = 0

    while index < len(tokens):
        token = tokens[index]

        if capturing:
            collected.append(token)
            index += 1
            continue

        if not after_separator and is_separator(token):
            after_separator = True
            match.remaining.append(token)
            index += 1
            continue

        if not after_separator and is_flag(token):
            if terminal is not None and terminal.raw and regular and slot >= len(regular):
                capturing = True
                collected.append(token)
                index += 1
                continue
            match.remaining.append(token)
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if consumes_next(spec, token, following):
                match.remaining.append(following)  # type: ignore[arg-type]
                index += 2
            else:
                index += 1
            continue

        if slot < len(regular):
            match.assigned[regular[slot].name] = token
            slot += 1
        elif terminal is not None:
            collected.append(token)
            if terminal.raw:
                capturing = True
        else:
            match.remaining.append(token)
        index += 1

    if terminal is not None and collected:
        match.collected = collected
        logger.debug(
            "[%s] '%s' collected %d token(s)", spec.name, terminal.name, len(collected)
        )
    return match
