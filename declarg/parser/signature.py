# Declarg CLI Parsing Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds a `CommandSpec` from a Python function signature.

Parameters map to descriptors as follows:
- without a default → positional argument (required)
- with a default → option, using the default value
- keyword-only without a default → option carrying a `required()` validator
- `*args` → rest positional
- `**kwargs` → ignored

Annotations select the `ArgType` (`str`, `int`, `float`, `bool`, `list[str]`,
`list[int]`, `Optional[...]` of those); unannotated parameters are strings. Result
keys are the parameter names, so a parse result can be passed back as keyword
arguments.

Functions:
- spec_from_func: Generate a CommandSpec from a function's signature.
"""
from __future__ import annotations

import inspect
import types
import typing
from typing import Any, Callable, Union, get_args, get_origin

from declarg.exceptions import StructuralError
from declarg.logger import logger
from declarg.parser.arg_type import ArgType
from declarg.parser.descriptors import CommandSpec
from declarg.validators import required

_SCALAR_TYPES = {
    str: ArgType.STRING,
    int: ArgType.NUMBER,
    float: ArgType.NUMBER,
    bool: ArgType.BOOLEAN,
}


def arg_type_from_annotation(annotation: Any) -> ArgType:
    """Map a type annotation to an `ArgType`, defaulting to `ArgType.STRING`."""
    if annotation is inspect.Parameter.empty or annotation is None:
        return ArgType.STRING
    if isinstance(annotation, ArgType):
        return annotation
    if isinstance(annotation, str):
        try:
            return ArgType(annotation)
        except ValueError:
            return ArgType.STRING
    if annotation in _SCALAR_TYPES:
        return _SCALAR_TYPES[annotation]
    if annotation is list:
        return ArgType.STRING_ARRAY

    origin = get_origin(annotation)
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if origin in (Union, types.UnionType) and len(args) == 1:
        return arg_type_from_annotation(args[0])
    if origin in (list, tuple, set) and args:
        return arg_type_from_annotation(args[0]).array_type
    return ArgType.STRING


def spec_from_func(
    func: Callable[..., Any],
    arg_metadata: dict[str, str | dict[str, Any]] | None = None,
    name: str | None = None,
    description: str | None = None,
) -> CommandSpec:
    """
    Infer a `CommandSpec` from a function signature.

    Args:
        func (Callable): The function to inspect.
        arg_metadata (dict | None): Per-parameter overrides. A string is used as the
            description; a dict may set `description`, `type`, `short`, `default`
            and `validators`.
        name (str | None): Command name. Defaults to the function name.
        description (str | None): Command description. Defaults to the first line of
            the docstring.

    Returns:
        CommandSpec: The command description.

    Raises:
        StructuralError: If `func` is not callable or yields an invalid spec.
    """
    if not callable(func):
        raise StructuralError(f"Cannot build a spec from a non-callable: {func!r}")
    arg_metadata = arg_metadata or {}
    if description is None:
        doc = inspect.getdoc(func) or ""
        description = doc.splitlines()[0] if doc else ""
    spec = CommandSpec(name=name or getattr(func, "__name__", ""), description=description)

    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError):
        hints = {}
    signature = inspect.signature(func)

    for param_name, param in signature.parameters.items():
        raw_metadata = arg_metadata.get(param_name, {})
        metadata = (
            {"description": raw_metadata}
            if isinstance(raw_metadata, str)
            else dict(raw_metadata)
        )
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            continue

        if metadata.get("type"):
            arg_type = ArgType(metadata["type"])
        else:
            arg_type = arg_type_from_annotation(hints.get(param_name, param.annotation))
        validators = list(metadata.get("validators", []))
        text = metadata.get("description", metadata.get("help", ""))
        has_default = param.default is not inspect.Parameter.empty
        default = metadata.get("default", param.default if has_default else None)

        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            spec.add_positional(
                param_name,
                arg_type.element_type,
                validators=validators,
                description=text,
                rest=True,
            )
        elif has_default or param.kind is inspect.Parameter.KEYWORD_ONLY:
            if not has_default and "default" not in metadata:
                validators.insert(0, required())
            spec.add_option(
                param_name,
                arg_type,
                short=metadata.get("short"),
                default=default,
                validators=validators,
                description=text,
            )
        else:
            spec.add_positional(
                param_name,
                arg_type,
                default=metadata.get("default"),
                validators=validators,
                description=text,
            )

    logger.debug(
        "Inferred spec '%s': %d option(s), %d positional(s)",
        spec.name,
        len(spec.options),
        len(spec.positionals),
    )
    return spec
