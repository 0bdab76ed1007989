import json
import logging
from collections.abc import Mapping
from pathlib import Path

from ._definitions import MAX_NESTING_DEPTH
from ._errors import ABIParseError
from ._validation import parse_contract_abi
from .types import ABI_JSON, ContractABI

logger = logging.getLogger(__name__)


def _unwrap_artifact(value: ABI_JSON) -> ABI_JSON:
    # Compiler artifacts (Hardhat, Foundry, `solc --combined-json` entries)
    # keep the ABI under the `abi` key.
    if isinstance(value, Mapping) and "abi" in value:
        return value["abi"]
    return value


def loads_contract_abi(text: str | bytes, *, max_depth: int = MAX_NESTING_DEPTH) -> ContractABI:
    """
    Parses a JSON string containing either a contract ABI array,
    or a compiler artifact object with an ``abi`` field.
    """
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ABIParseError(f"Invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ABIParseError("Invalid JSON: nesting is too deep") from exc

    return parse_contract_abi(_unwrap_artifact(value), max_depth=max_depth)


def load_contract_abi(path: str | Path, *, max_depth: int = MAX_NESTING_DEPTH) -> ContractABI:
    """
    Loads a contract ABI from a JSON file
    (see :py:func:`loads_contract_abi` for the accepted contents).
    """
    path = Path(path)
    try:
        contract_abi = loads_contract_abi(path.read_bytes(), max_depth=max_depth)
    except ABIParseError as exc:
        raise ABIParseError(f"{path}: {exc}") from exc

    logger.debug("Loaded ABI from %s (%d entries)", path, len(contract_abi))
    return contract_abi
