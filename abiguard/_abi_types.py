import re
from collections.abc import Sequence
from typing import Any

from ._errors import PathSegment, TypeGrammarError

# Bit sizes are restricted to multiples of 8 up to 256, byte sizes to 1..32.
MAX_INTEGER_BITS = 256
INTEGER_BITS_STEP = 8
MAX_FIXED_BYTES = 32

_UINT_RE = re.compile(r"uint([1-9]\d*)")
_INT_RE = re.compile(r"int([1-9]\d*)")
_BYTES_RE = re.compile(r"bytes([1-9]\d*)")
_FIXED_ARRAY_RE = re.compile(r"(.+)\[(\d+)\]")
_TUPLE_RE = re.compile(r"tuple(\[\d*\])*")

_NO_PARAMS = frozenset(["address", "bool", "string", "bytes"])


def _valid_bits(bits: int) -> bool:
    return INTEGER_BITS_STEP <= bits <= MAX_INTEGER_BITS and bits % INTEGER_BITS_STEP == 0


def is_valid_scalar_type(type_str: Any) -> bool:
    """
    Returns ``True`` if ``type_str`` names an elementary Solidity type:
    ``address``, ``bool``, ``string``, ``bytes``, ``uint<N>``/``int<N>``
    (``N`` a multiple of 8 in ``[8, 256]``), or ``bytes<N>`` (``N`` in ``[1, 32]``).
    """
    if not isinstance(type_str, str):
        return False

    if type_str in _NO_PARAMS:
        return True

    # `uint` has to be checked first, otherwise `int` would match its suffix.
    if type_str.startswith("uint"):
        match = _UINT_RE.fullmatch(type_str)
        return match is not None and _valid_bits(int(match.group(1)))

    if type_str.startswith("int"):
        match = _INT_RE.fullmatch(type_str)
        return match is not None and _valid_bits(int(match.group(1)))

    if match := _BYTES_RE.fullmatch(type_str):
        return 1 <= int(match.group(1)) <= MAX_FIXED_BYTES

    return False


def is_valid_array_type(type_str: Any) -> bool:
    """
    Returns ``True`` if ``type_str`` is a one-dimensional array (``<T>[]`` or ``<T>[<size>]``)
    of an elementary type.

    Multidimensional arrays like ``uint256[][]`` are not recognized.
    """
    if not isinstance(type_str, str):
        return False

    if type_str.endswith("[]"):
        return is_valid_scalar_type(type_str[:-2])

    if match := _FIXED_ARRAY_RE.fullmatch(type_str):
        return is_valid_scalar_type(match.group(1))

    return False


def is_tuple_type(type_str: Any) -> bool:
    """
    Returns ``True`` for ``tuple`` and arrays of it of any dimension
    (``tuple[]``, ``tuple[<size>]``, ``tuple[2][]``, ...).
    """
    return isinstance(type_str, str) and _TUPLE_RE.fullmatch(type_str) is not None


def check_type_string(type_str: str, path: Sequence[PathSegment] = ()) -> None:
    """
    Raises :py:class:`TypeGrammarError` if ``type_str`` is neither an elementary type
    nor a one-dimensional array of one.
    """
    if not (is_valid_scalar_type(type_str) or is_valid_array_type(type_str)):
        raise TypeGrammarError(f"Unknown type: {type_str}", path)
