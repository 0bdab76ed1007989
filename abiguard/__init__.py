"""Validation of Ethereum contract ABI JSON."""

from . import types
from ._abi_types import is_tuple_type, is_valid_array_type, is_valid_scalar_type
from ._definitions import (
    MAX_NESTING_DEPTH,
    DefinitionKind,
    Mutability,
    validate_definition,
    validate_parameter,
)
from ._errors import (
    ABIParseError,
    ABIValidationError,
    DefinitionError,
    NestingTooDeep,
    ParameterError,
    StructuralError,
    TypeGrammarError,
)
from ._loader import load_contract_abi, loads_contract_abi
from ._selection import (
    callable_functions,
    format_function,
    functions,
    is_payable,
    is_read_only,
)
from ._validation import (
    ValidationResult,
    is_contract_abi,
    parse_contract_abi,
    safe_parse_contract_abi,
    validate_contract_abi,
)

__all__ = [
    "ABIParseError",
    "ABIValidationError",
    "DefinitionError",
    "DefinitionKind",
    "MAX_NESTING_DEPTH",
    "Mutability",
    "NestingTooDeep",
    "ParameterError",
    "StructuralError",
    "TypeGrammarError",
    "ValidationResult",
    "callable_functions",
    "format_function",
    "functions",
    "is_contract_abi",
    "is_payable",
    "is_read_only",
    "is_tuple_type",
    "is_valid_array_type",
    "is_valid_scalar_type",
    "load_contract_abi",
    "loads_contract_abi",
    "parse_contract_abi",
    "safe_parse_contract_abi",
    "types",
    "validate_contract_abi",
    "validate_definition",
    "validate_parameter",
]
