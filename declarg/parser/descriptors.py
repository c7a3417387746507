# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the descriptor model consumed by the Declarg parsing engine.

A `CommandSpec` describes one command level: its options, its positional
arguments and its subcommands. Subcommands form an explicit tree; each
`SubCommandDescriptor` owns its nested `CommandSpec` (or a factory building one),
so sibling branches never share state.

Descriptors are plain dataclasses and are never mutated by a parse. Building or
extending a `CommandSpec` runs the structural checks and raises `StructuralError`
for configuration bugs:
- positional indices must be contiguous from 0
- at most one positional may be `rest` or `raw`, and it must be last
- `rest` and `raw` are mutually exclusive
- option, positional and subcommand names must be unique within a command
- short flags must be single characters, unique, and never `h`
- `help` is reserved for the built-in help flag

Example:
    spec = CommandSpec(name="app", description="Deploy things.")
    spec.add_option("verbose", ArgType.BOOLEAN, short="v")
    spec.add_positional("target", validators=[required()])
    spec.add_subcommand("build", build_spec, description="Build the project")
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Union

from declarg.exceptions import StructuralError
from declarg.parser.arg_type import ArgType
from declarg.validators import Validator, is_required_validator

RESERVED_NAMES = {"help"}
RESERVED_SHORTS = {"h"}

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def _check_name(name: str, kind: str) -> None:
    if not isinstance(name, str) or not _NAME_PATTERN.match(name):
        raise StructuralError(f"Invalid {kind} name: {name!r}")
    if name in RESERVED_NAMES:
        raise StructuralError(f"'{name}' is reserved and cannot be used as a {kind} name")


def _check_validators(validators: Any, owner: str) -> list[Validator]:
    if validators is None:
        return []
    validators = list(validators)
    for validator in validators:
        if not callable(validator):
            raise StructuralError(f"Validator for '{owner}' is not callable: {validator!r}")
    return validators


@dataclass
class OptionDescriptor:
    """
    Describes a flag-style argument (`--name value`, `-n value`, `--name`).

    Attributes:
        name (str): Long flag name without dashes; also the key in the parse result.
        type (ArgType): Value type of the option.
        short (str | None): Optional single-character short flag.
        default (Any): Value used when the option is absent. `None` means no default.
        validators (list[Validator]): Ordered validator chain.
        description (str): Help text.
    """

    name: str
    type: ArgType = ArgType.STRING
    short: str | None = None
    default: Any = None
    validators: list[Validator] = field(default_factory=list)
    description: str = ""

    def __post_init__(self) -> None:
        _check_name(self.name, "option")
        try:
            self.type = ArgType(self.type)
        except ValueError as error:
            raise StructuralError(f"Option '{self.name}': {error}") from error
        if self.short is not None:
            if (
                not isinstance(self.short, str)
                or len(self.short) != 1
                or not self.short.isalpha()
            ):
                raise StructuralError(
                    f"Short flag for option '{self.name}' must be a single "
                    f"letter, got {self.short!r}"
                )
            if self.short in RESERVED_SHORTS:
                raise StructuralError(
                    f"Short flag '-{self.short}' is reserved for help "
                    f"(option '{self.name}')"
                )
        self.validators = _check_validators(self.validators, self.name)

    @property
    def long_flag(self) -> str:
        return f"--{self.name}"

    @property
    def short_flag(self) -> str | None:
        return f"-{self.short}" if self.short else None

    @property
    def flags(self) -> tuple[str, ...]:
        """All flags selecting this option, short first."""
        if self.short:
            return (f"-{self.short}", self.long_flag)
        return (self.long_flag,)

    @property
    def is_boolean(self) -> bool:
        return self.type is ArgType.BOOLEAN

    @property
    def required(self) -> bool:
        return any(is_required_validator(validator) for validator in self.validators)


@dataclass
class PositionalDescriptor:
    """
    Describes an argument identified by its position in the token stream.

    Attributes:
        name (str): Key in the parse result.
        type (ArgType): Value type (element type for `rest`).
        index (int | None): Zero-based position; assigned on `add_positional`
            when omitted.
        default (Any): Value used when the positional is absent.
        validators (list[Validator]): Ordered validator chain.
        description (str): Help text.
        rest (bool): Absorb every remaining non-flag token into a list.
        raw (bool): Absorb every remaining token verbatim, flags included.
    """

    name: str
    type: ArgType = ArgType.STRING
    index: int | None = None
    default: Any = None
    validators: list[Validator] = field(default_factory=list)
    description: str = ""
    rest: bool = False
    raw: bool = False

    def __post_init__(self) -> None:
        _check_name(self.name, "positional argument")
        try:
            self.type = ArgType(self.type)
        except ValueError as error:
            raise StructuralError(f"Positional '{self.name}': {error}") from error
        if self.rest and self.raw:
            raise StructuralError(
                f"Positional '{self.name}' cannot be both rest and raw"
            )
        if self.index is not None and (
            not isinstance(self.index, int) or self.index < 0
        ):
            raise StructuralError(
                f"Positional '{self.name}' has invalid index: {self.index!r}"
            )
        self.validators = _check_validators(self.validators, self.name)

    @property
    def is_terminal(self) -> bool:
        """Whether this positional consumes the remainder of the stream."""
        return self.rest or self.raw

    @property
    def label(self) -> str:
        return f"positional argument {self.name}"

    @property
    def required(self) -> bool:
        if any(is_required_validator(validator) for validator in self.validators):
            return True
        return self.default is None and not self.is_terminal

    @property
    def placeholder(self) -> str:
        """Usage-line placeholder: `<name>`, `[name]`, `<name...>` or `[name...]`."""
        text = f"{self.name}..." if self.is_terminal else self.name
        if self.required:
            return f"<{text}>"
        return f"[{text}]"


SpecSource = Union["CommandSpec", Callable[[], "CommandSpec"]]


@dataclass
class SubCommandDescriptor:
    """
    Describes a nested command selected by a literal token.

    `spec` is either a `CommandSpec` or a zero-argument factory returning one; the
    factory is only invoked when the branch is resolved.
    """

    name: str
    spec: SpecSource
    description: str = ""

    def __post_init__(self) -> None:
        if (
            not isinstance(self.name, str)
            or not self.name
            or self.name.startswith("-")
            or any(char.isspace() for char in self.name)
        ):
            raise StructuralError(f"Invalid subcommand name: {self.name!r}")
        if not isinstance(self.spec, CommandSpec) and not callable(self.spec):
            raise StructuralError(
                f"Subcommand '{self.name}' needs a CommandSpec or a factory, "
                f"got {type(self.spec).__name__}"
            )

    def resolve(self) -> CommandSpec:
        """Return the nested `CommandSpec`, invoking the factory if needed."""
        if isinstance(self.spec, CommandSpec):
            return self.spec
        spec = self.spec()
        if not isinstance(spec, CommandSpec):
            raise StructuralError(
                f"Factory for subcommand '{self.name}' returned "
                f"{type(spec).__name__}, expected CommandSpec"
            )
        return spec

    def get_description(self) -> str:
        if self.description:
            return self.description
        if isinstance(self.spec, CommandSpec):
            return self.spec.description
        return ""


def check_structure(
    options: list[OptionDescriptor],
    positionals: list[PositionalDescriptor],
    subcommands: list[SubCommandDescriptor],
) -> None:
    """
    Raise `StructuralError` if the descriptor lists break a structural rule.

    Expects every positional to carry an index.
    """
    names: set[str] = set()
    for descriptor in [*options, *positionals]:
        if descriptor.name in names:
            raise StructuralError(f"Duplicate argument name: '{descriptor.name}'")
        names.add(descriptor.name)

    shorts: set[str] = set()
    for option in options:
        if option.short is None:
            continue
        if option.short in shorts:
            raise StructuralError(
                f"Duplicate short flag '-{option.short}' (option '{option.name}')"
            )
        shorts.add(option.short)

    subcommand_names: set[str] = set()
    for subcommand in subcommands:
        if subcommand.name in subcommand_names:
            raise StructuralError(f"Duplicate subcommand name: '{subcommand.name}'")
        if subcommand.name in names:
            raise StructuralError(
                f"Subcommand '{subcommand.name}' clashes with an argument of the same name"
            )
        subcommand_names.add(subcommand.name)

    indices = sorted(positional.index for positional in positionals)
    if indices != list(range(len(positionals))):
        raise StructuralError(
            f"Positional indices must be contiguous from 0, got {indices}"
        )

    ordered = sorted(positionals, key=lambda positional: positional.index)
    terminal = [positional for positional in ordered if positional.is_terminal]
    if len(terminal) > 1:
        names_text = ", ".join(f"'{positional.name}'" for positional in terminal)
        raise StructuralError(
            f"Only one rest or raw positional is allowed per command, got {names_text}"
        )
    if terminal and terminal[0] is not ordered[-1]:
        raise StructuralError(
            f"Positional '{terminal[0].name}' collects the remaining tokens "
            "and must be the last positional"
        )


@dataclass
class CommandSpec:
    """
    Descriptor set for one command level.

    Attributes:
        name (str): Display name (the app name at the root, the command name below).
        description (str): Help text.
        options (list[OptionDescriptor]): Flag-style arguments.
        positionals (list[PositionalDescriptor]): Positional arguments, kept in
            index order.
        subcommands (list[SubCommandDescriptor]): Nested commands.
        default_command (str | None): Root-only behavior when no tokens are given:
            `"help"` shows help, a subcommand name dispatches to it.
    """

    name: str = ""
    description: str = ""
    options: list[OptionDescriptor] = field(default_factory=list)
    positionals: list[PositionalDescriptor] = field(default_factory=list)
    subcommands: list[SubCommandDescriptor] = field(default_factory=list)
    default_command: str | None = None

    def __post_init__(self) -> None:
        self.options = list(self.options)
        self.positionals = list(self.positionals)
        self.subcommands = list(self.subcommands)
        for position, positional in enumerate(self.positionals):
            if positional.index is None:
                positional.index = position
        check_structure(self.options, self.positionals, self.subcommands)
        self.positionals.sort(key=lambda positional: positional.index)

    def add_option(
        self,
        name: str,
        type: ArgType | str = ArgType.STRING,
        short: str | None = None,
        default: Any = None,
        validators: list[Validator] | None = None,
        description: str = "",
    ) -> CommandSpec:
        """Add an option and re-run the structural checks. Returns the spec."""
        option = OptionDescriptor(
            name=name,
            type=type,  # type: ignore[arg-type]
            short=short,
            default=default,
            validators=validators or [],
            description=description,
        )
        check_structure([*self.options, option], self.positionals, self.subcommands)
        self.options.append(option)
        return self

    def add_positional(
        self,
        name: str,
        type: ArgType | str = ArgType.STRING,
        default: Any = None,
        validators: list[Validator] | None = None,
        description: str = "",
        rest: bool = False,
        raw: bool = False,
        index: int | None = None,
    ) -> CommandSpec:
        """Add a positional argument at the next index. Returns the spec."""
        next_index = len(self.positionals)
        if index is not None and index != next_index:
            raise StructuralError(
                f"Positional '{name}' declared at index {index}, "
                f"expected {next_index}"
            )
        positional = PositionalDescriptor(
            name=name,
            type=type,  # type: ignore[arg-type]
            index=next_index,
            default=default,
            validators=validators or [],
            description=description,
            rest=rest,
            raw=raw,
        )
        check_structure(self.options, [*self.positionals, positional], self.subcommands)
        self.positionals.append(positional)
        return self

    def add_subcommand(
        self,
        name: str,
        spec: SpecSource,
        description: str = "",
    ) -> CommandSpec:
        """Attach a nested command. Returns the spec."""
        subcommand = SubCommandDescriptor(name=name, spec=spec, description=description)
        check_structure(self.options, self.positionals, [*self.subcommands, subcommand])
        self.subcommands.append(subcommand)
        return self

    def get_option(self, flag: str) -> OptionDescriptor | None:
        """Look up an option by `--name`, `-s` or bare name."""
        if flag.startswith("--"):
            name = flag[2:]
            return next((option for option in self.options if option.name == name), None)
        if flag.startswith("-") and len(flag) == 2:
            return next(
                (option for option in self.options if option.short == flag[1]), None
            )
        return next((option for option in self.options if option.name == flag), None)

    def get_subcommand(self, name: str) -> SubCommandDescriptor | None:
        return next(
            (subcommand for subcommand in self.subcommands if subcommand.name == name),
            None,
        )

    def copy(self) -> CommandSpec:
        """Shallow copy with fresh descriptor lists, safe to extend."""
        return replace(
            self,
            options=list(self.options),
            positionals=list(self.positionals),
            subcommands=list(self.subcommands),
        )
