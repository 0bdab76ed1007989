"""
Typed views of a contract ABI in its JSON form.

These are the shapes a value is guaranteed to have after it passed validation.
They describe the caller's original dictionaries and lists; nothing is copied or converted.
"""

from collections.abc import Mapping, Sequence
from typing import Literal, NotRequired, TypedDict

ABI_JSON = None | bool | int | float | str | Sequence["ABI_JSON"] | Mapping[str, "ABI_JSON"]
"""Values deserialized from JSON."""

StateMutability = Literal["pure", "view", "nonpayable", "payable"]

PayableMutability = Literal["payable", "nonpayable"]


class ABIParameter(TypedDict):
    """
    A function/event/error parameter, or a component of a tuple.

    If ``type`` is ``tuple``, ``tuple[]`` or ``tuple[<size>]``,
    ``components`` is present and describes the tuple fields.
    """

    type: str
    """An elementary type, a one-dimensional array of one, or a tuple type."""
    name: NotRequired[str]
    components: NotRequired[list["ABIParameter"]]
    indexed: NotRequired[bool]
    """Only meaningful for event inputs."""
    internalType: NotRequired[str]
    """The Solidity-level type name, as emitted by the compiler. Not validated."""


class ABIFunction(TypedDict):
    type: Literal["function"]
    name: str
    inputs: list[ABIParameter]
    outputs: list[ABIParameter]
    stateMutability: StateMutability
    constant: NotRequired[bool]
    """Legacy field, superseded by ``stateMutability``. Not validated."""
    payable: NotRequired[bool]
    """Legacy field, superseded by ``stateMutability``. Not validated."""


class ABIEvent(TypedDict):
    type: Literal["event"]
    name: str
    inputs: list[ABIParameter]
    anonymous: NotRequired[bool]


class ABIConstructor(TypedDict):
    type: Literal["constructor"]
    inputs: list[ABIParameter]
    stateMutability: NotRequired[PayableMutability]
    payable: NotRequired[bool]


class ABIFallback(TypedDict):
    type: Literal["fallback"]
    stateMutability: PayableMutability
    payable: NotRequired[bool]


class ABIReceive(TypedDict):
    type: Literal["receive"]
    stateMutability: Literal["payable"]


class ABIError(TypedDict):
    type: Literal["error"]
    name: str
    inputs: list[ABIParameter]


ABIDefinition = ABIFunction | ABIEvent | ABIConstructor | ABIFallback | ABIReceive | ABIError

ContractABI = list[ABIDefinition]
"""An ordered list of ABI definitions, in the order they were given."""

