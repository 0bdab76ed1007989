import json
import logging
from dataclasses import dataclass
from typing import Any, TypeGuard, cast

from ._definitions import MAX_NESTING_DEPTH, check_definition
from ._errors import ABIParseError, ABIValidationError, StructuralError
from .types import ContractABI

logger = logging.getLogger(__name__)

NOT_AN_ARRAY = "ABI must be an array"


@dataclass(frozen=True)
class ValidationResult:
    """The outcome of :py:func:`validate_contract_abi`."""

    valid: bool
    """Whether the value is a valid contract ABI."""

    error: None | str = None
    """If not valid, names the first invalid definition and echoes it."""

    failure: None | ABIValidationError = None
    """
    If not valid, the specific reason, located relative to the top-level array
    (e.g. ``[2].inputs[0].type``).
    """


def _dump_entry(entry: Any) -> str:
    # Compact, like the usual JSON serializers in other ecosystems.
    try:
        return json.dumps(entry, separators=(",", ":"), ensure_ascii=False, default=repr)
    except (TypeError, ValueError, RecursionError):
        # Circular references, non-string keys, or nesting too deep to serialize.
        return f"<unserializable {type(entry).__name__}>"


def validate_contract_abi(value: Any, *, max_depth: int = MAX_NESTING_DEPTH) -> ValidationResult:
    """
    Checks whether ``value`` (a deserialized JSON value) is a valid contract ABI.

    Validation stops at the first invalid definition.
    Never raises for JSON-like input.
    """
    if not isinstance(value, list):
        return ValidationResult(
            valid=False, error=NOT_AN_ARRAY, failure=StructuralError(NOT_AN_ARRAY)
        )

    for index, entry in enumerate(value):
        try:
            check_definition(entry, max_depth=max_depth, path=(index,))
        except ABIValidationError as exc:
            logger.debug("Rejected ABI definition: %s", exc)
            return ValidationResult(
                valid=False,
                error=f"Invalid ABI definition at index {index}: {_dump_entry(entry)}",
                failure=exc,
            )

    return ValidationResult(valid=True)


def parse_contract_abi(value: Any, *, max_depth: int = MAX_NESTING_DEPTH) -> ContractABI:
    """
    Returns ``value`` typed as a :py:data:`~abiguard.types.ContractABI` if it is a valid ABI,
    otherwise raises :py:class:`ABIParseError`.

    The returned object is ``value`` itself.
    """
    result = validate_contract_abi(value, max_depth=max_depth)
    if not result.valid:
        raise ABIParseError(result.error) from result.failure
    return cast("ContractABI", value)


def safe_parse_contract_abi(
    value: Any, *, max_depth: int = MAX_NESTING_DEPTH
) -> None | ContractABI:
    """Same as :py:func:`parse_contract_abi`, but returns ``None`` instead of raising."""
    try:
        return parse_contract_abi(value, max_depth=max_depth)
    except ABIParseError:
        return None


def is_contract_abi(value: Any, *, max_depth: int = MAX_NESTING_DEPTH) -> TypeGuard[ContractABI]:
    """Returns ``True`` if ``value`` is a valid contract ABI."""
    return validate_contract_abi(value, max_depth=max_depth).valid
