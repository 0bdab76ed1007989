from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from ._abi_types import check_type_string, is_tuple_type
from ._errors import (
    ABIValidationError,
    DefinitionError,
    NestingTooDeep,
    ParameterError,
    PathSegment,
)

# Solidity's own nesting limits are far below this,
# it only protects against stack exhaustion on hostile input.
MAX_NESTING_DEPTH = 128


class DefinitionKind(Enum):
    """The possible values of the ``type`` field of an ABI entry."""

    FUNCTION = "function"
    EVENT = "event"
    CONSTRUCTOR = "constructor"
    FALLBACK = "fallback"
    RECEIVE = "receive"
    ERROR = "error"

    @classmethod
    def from_json(cls, entry: Any, path: Sequence[PathSegment] = ()) -> "DefinitionKind":
        kinds = {kind.value: kind for kind in cls}
        if not isinstance(entry, str) or entry not in kinds:
            raise DefinitionError(f"Unknown ABI entry type: {_describe(entry)}", (*path, "type"))
        return kinds[entry]


class Mutability(Enum):
    """Possible states of a contract's method mutability."""

    PURE = "pure"
    """Solidity's ``pure`` (does not read or write the contract state)."""
    VIEW = "view"
    """Solidity's ``view`` (may read the contract state)."""
    NONPAYABLE = "nonpayable"
    """Solidity's ``nonpayable`` (may write the contract state)."""
    PAYABLE = "payable"
    """
    Solidity's ``payable`` (may write the contract state
    and accept associated funds with transactions).
    """

    @classmethod
    def from_json(cls, entry: Any) -> "Mutability":
        values = dict(
            pure=Mutability.PURE,
            view=Mutability.VIEW,
            nonpayable=Mutability.NONPAYABLE,
            payable=Mutability.PAYABLE,
        )
        if not isinstance(entry, str) or entry not in values:
            raise ValueError(f"Unknown mutability identifier: {_describe(entry)}")
        return values[entry]

    @property
    def payable(self) -> bool:
        return self == Mutability.PAYABLE

    @property
    def mutating(self) -> bool:
        return self in {Mutability.PAYABLE, Mutability.NONPAYABLE}


_ANY_MUTABILITY = frozenset(Mutability)

_PAYABLE_OR_NOT = frozenset([Mutability.PAYABLE, Mutability.NONPAYABLE])


def _describe(value: Any) -> str:
    """Names a JSON value for error messages without dumping the whole of it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, Mapping):
        return "an object"
    if _is_array(value):
        return "an array"
    return type(value).__name__


def _is_array(value: Any) -> bool:
    return isinstance(value, list)


def _check_parameter(
    param: Any, max_depth: int, path: Sequence[PathSegment], depth: int
) -> None:
    if not isinstance(param, Mapping):
        raise ParameterError(f"A parameter must be an object, got {_describe(param)}", path)

    if "name" in param and not isinstance(param["name"], str):
        raise ParameterError(
            f"`name` must be a string, got {_describe(param['name'])}", (*path, "name")
        )

    type_str = param.get("type")
    if not isinstance(type_str, str):
        raise ParameterError(f"`type` must be a string, got {_describe(type_str)}", (*path, "type"))

    if is_tuple_type(type_str):
        components = param.get("components")
        if not _is_array(components):
            raise ParameterError(
                f"`{type_str}` requires a `components` array, got {_describe(components)}",
                (*path, "components"),
            )
        if components and depth >= max_depth:
            raise NestingTooDeep(
                f"Tuple components are nested deeper than {max_depth} levels",
                (*path, "components"),
            )
        _check_parameters(components, max_depth, (*path, "components"), depth + 1)
    else:
        check_type_string(type_str, (*path, "type"))

    if "indexed" in param and not isinstance(param["indexed"], bool):
        raise ParameterError(
            f"`indexed` must be a boolean, got {_describe(param['indexed'])}", (*path, "indexed")
        )


def _check_parameters(
    params: Sequence[Any], max_depth: int, path: Sequence[PathSegment], depth: int
) -> None:
    for index, param in enumerate(params):
        _check_parameter(param, max_depth, (*path, index), depth)


def _too_deep(path: Sequence[PathSegment]) -> NestingTooDeep:
    # `max_depth` was set above what the interpreter stack can hold
    return NestingTooDeep("Tuple components are nested too deeply to be checked", path)


def check_parameter(
    param: Any,
    *,
    max_depth: int = MAX_NESTING_DEPTH,
    path: Sequence[PathSegment] = (),
) -> None:
    """
    Checks that ``param`` is a well-formed ABI parameter,
    recursing into the components of tuple types.

    Raises a :py:class:`ParameterError` (or :py:class:`TypeGrammarError` for unknown leaf types)
    located at the first offending field.
    """
    try:
        _check_parameter(param, max_depth, path, 0)
    except RecursionError as exc:
        raise _too_deep(path) from exc


def check_parameters(
    params: Sequence[Any],
    *,
    max_depth: int = MAX_NESTING_DEPTH,
    path: Sequence[PathSegment] = (),
) -> None:
    """Checks every parameter of a list, stopping at the first invalid one."""
    try:
        _check_parameters(params, max_depth, path, 0)
    except RecursionError as exc:
        raise _too_deep(path) from exc


def validate_parameter(param: Any, *, max_depth: int = MAX_NESTING_DEPTH) -> bool:
    """Returns ``True`` if ``param`` is a well-formed ABI parameter."""
    try:
        check_parameter(param, max_depth=max_depth)
    except ABIValidationError:
        return False
    return True


def _require_name(definition: Mapping[str, Any], path: Sequence[PathSegment]) -> None:
    name = definition.get("name")
    if not isinstance(name, str):
        raise DefinitionError(f"`name` must be a string, got {_describe(name)}", (*path, "name"))


def _require_parameter_list(
    definition: Mapping[str, Any], field: str, max_depth: int, path: Sequence[PathSegment]
) -> None:
    params = definition.get(field)
    if not _is_array(params):
        raise DefinitionError(f"`{field}` must be an array, got {_describe(params)}", (*path, field))
    check_parameters(params, max_depth=max_depth, path=(*path, field))


def _require_mutability(
    definition: Mapping[str, Any],
    allowed: frozenset[Mutability],
    path: Sequence[PathSegment],
) -> None:
    entry = definition.get("stateMutability")
    try:
        mutability = Mutability.from_json(entry)
    except ValueError as exc:
        raise DefinitionError(str(exc), (*path, "stateMutability")) from exc
    if mutability not in allowed:
        allowed_str = ", ".join(sorted(mut.value for mut in allowed))
        raise DefinitionError(
            f"`stateMutability` must be one of {allowed_str}, got {_describe(entry)}",
            (*path, "stateMutability"),
        )


def check_definition(
    definition: Any,
    *,
    max_depth: int = MAX_NESTING_DEPTH,
    path: Sequence[PathSegment] = (),
) -> None:
    """
    Checks that ``definition`` is a well-formed ABI entry of one of the known kinds.

    Raises a subclass of :py:class:`ABIValidationError` located at the first offending field.
    """
    if not isinstance(definition, Mapping):
        raise DefinitionError(
            f"An ABI entry must be an object, got {_describe(definition)}", path
        )

    kind = DefinitionKind.from_json(definition.get("type"), path)

    match kind:
        case DefinitionKind.FUNCTION:
            _require_name(definition, path)
            _require_parameter_list(definition, "inputs", max_depth, path)
            _require_parameter_list(definition, "outputs", max_depth, path)
            _require_mutability(definition, _ANY_MUTABILITY, path)

        case DefinitionKind.EVENT:
            _require_name(definition, path)
            _require_parameter_list(definition, "inputs", max_depth, path)
            if "anonymous" in definition and not isinstance(definition["anonymous"], bool):
                raise DefinitionError(
                    f"`anonymous` must be a boolean, got {_describe(definition['anonymous'])}",
                    (*path, "anonymous"),
                )

        case DefinitionKind.CONSTRUCTOR:
            _require_parameter_list(definition, "inputs", max_depth, path)
            if "stateMutability" in definition:
                _require_mutability(definition, _PAYABLE_OR_NOT, path)

        case DefinitionKind.FALLBACK:
            _require_mutability(definition, _PAYABLE_OR_NOT, path)

        case DefinitionKind.RECEIVE:
            _require_mutability(definition, frozenset([Mutability.PAYABLE]), path)

        case DefinitionKind.ERROR:
            _require_name(definition, path)
            _require_parameter_list(definition, "inputs", max_depth, path)


def validate_definition(definition: Any, *, max_depth: int = MAX_NESTING_DEPTH) -> bool:
    """Returns ``True`` if ``definition`` is a well-formed ABI entry."""
    try:
        check_definition(definition, max_depth=max_depth)
    except ABIValidationError:
        return False
    return True
