from collections.abc import Iterable

from ._abi_types import is_tuple_type
from ._definitions import Mutability
from .types import ABIFunction, ABIParameter, ContractABI


def functions(contract_abi: ContractABI) -> list[ABIFunction]:
    """Returns the regular functions of a validated ABI, in declaration order."""
    return [definition for definition in contract_abi if definition["type"] == "function"]


def is_read_only(function: ABIFunction) -> bool:
    """Returns ``True`` if the function can be called without sending a transaction."""
    return not Mutability.from_json(function["stateMutability"]).mutating


def is_payable(function: ABIFunction) -> bool:
    """Returns ``True`` if the function accepts funds along with the call."""
    return Mutability.from_json(function["stateMutability"]).payable


def callable_functions(
    contract_abi: ContractABI, *, read_only: bool = False
) -> list[ABIFunction]:
    """
    Returns the functions that can be offered to a caller.

    If ``read_only`` is ``True`` (the caller has no way to sign transactions),
    only ``view`` and ``pure`` functions are returned.
    """
    return [
        function
        for function in functions(contract_abi)
        if not read_only or is_read_only(function)
    ]


def format_type(param: ABIParameter) -> str:
    """
    Returns the type of the parameter as it would appear in Solidity,
    with tuples expanded into their components.
    """
    type_str = param["type"]
    if is_tuple_type(type_str):
        # Keep the array suffix (if any) of `tuple[]` or `tuple[N]`
        return format_parameters(param["components"]) + type_str[len("tuple") :]
    return type_str


def format_parameter(param: ABIParameter) -> str:
    indexed_str = " indexed" if param.get("indexed") else ""
    name = param.get("name")
    name_str = (" " + name) if name else ""
    return f"{format_type(param)}{indexed_str}{name_str}"


def format_parameters(params: Iterable[ABIParameter]) -> str:
    return "(" + ", ".join(format_parameter(param) for param in params) + ")"


def format_function(function: ABIFunction) -> str:
    """
    Returns a human-readable summary of a function,
    e.g. ``function transfer(address to, uint256 amount) nonpayable returns (bool)``.
    """
    returns = f" returns {format_parameters(function['outputs'])}" if function["outputs"] else ""
    return (
        f"function {function['name']}{format_parameters(function['inputs'])} "
        f"{function['stateMutability']}{returns}"
    )
