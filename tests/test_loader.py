import json
import re
from pathlib import Path

import pytest

from abiguard import ABIParseError, load_contract_abi, loads_contract_abi

ABI = [
    dict(
        type="function",
        name="get",
        stateMutability="view",
        inputs=[],
        outputs=[dict(name="", type="uint256")],
    ),
    dict(type="receive", stateMutability="payable"),
]


def test_loads() -> None:
    assert loads_contract_abi(json.dumps(ABI)) == ABI
    assert loads_contract_abi(json.dumps(ABI).encode()) == ABI
    assert loads_contract_abi("[]") == []


def test_loads_artifact() -> None:
    artifact = dict(contractName="Counter", abi=ABI, bytecode="0x6080")
    assert loads_contract_abi(json.dumps(artifact)) == ABI


def test_loads_errors() -> None:
    with pytest.raises(ABIParseError, match="Invalid JSON: "):
        loads_contract_abi("[{")

    with pytest.raises(ABIParseError, match="Invalid JSON: "):
        loads_contract_abi(b"[\x80]")

    with pytest.raises(ABIParseError, match="^ABI must be an array$"):
        loads_contract_abi(json.dumps(dict(contractName="Counter")))

    with pytest.raises(ABIParseError, match="^ABI must be an array$"):
        loads_contract_abi(json.dumps(dict(abi=None)))

    message = 'Invalid ABI definition at index 0: {"type":"method"}'
    with pytest.raises(ABIParseError, match=re.escape(message)):
        loads_contract_abi(json.dumps([dict(type="method")]))


def test_load_file(tmp_path: Path) -> None:
    path = tmp_path / "Counter.json"
    path.write_text(json.dumps(dict(abi=ABI)))
    assert load_contract_abi(path) == ABI
    assert load_contract_abi(str(path)) == ABI


def test_load_file_errors(tmp_path: Path) -> None:
    path = tmp_path / "Broken.json"
    path.write_text(json.dumps([dict(type="fallback")]))

    with pytest.raises(ABIParseError) as exc:
        load_contract_abi(path)
    assert str(exc.value) == f'{path}: Invalid ABI definition at index 0: {{"type":"fallback"}}'

    with pytest.raises(FileNotFoundError):
        load_contract_abi(tmp_path / "Missing.json")
