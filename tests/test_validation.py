import json
from copy import deepcopy

import pytest

from abiguard import (
    ABIParseError,
    DefinitionError,
    NestingTooDeep,
    StructuralError,
    TypeGrammarError,
    ValidationResult,
    is_contract_abi,
    parse_contract_abi,
    safe_parse_contract_abi,
    validate_contract_abi,
)

ERC20_LIKE_ABI = [
    dict(
        type="constructor",
        stateMutability="nonpayable",
        inputs=[dict(internalType="uint256", name="supply", type="uint256")],
    ),
    dict(
        type="error",
        name="InsufficientBalance",
        inputs=[dict(name="available", type="uint256"), dict(name="required", type="uint256")],
    ),
    dict(
        type="event",
        name="Transfer",
        anonymous=False,
        inputs=[
            dict(indexed=True, name="from", type="address"),
            dict(indexed=True, name="to", type="address"),
            dict(indexed=False, name="value", type="uint256"),
        ],
    ),
    dict(
        type="function",
        name="balanceOf",
        stateMutability="view",
        inputs=[dict(name="owner", type="address")],
        outputs=[dict(name="", type="uint256")],
    ),
    dict(
        type="function",
        name="batchTransfer",
        stateMutability="nonpayable",
        inputs=[
            dict(
                name="transfers",
                type="tuple[]",
                internalType="struct Token.Transfer[]",
                components=[
                    dict(name="to", type="address"),
                    dict(name="amount", type="uint256"),
                    dict(
                        name="memo",
                        type="tuple",
                        components=[dict(name="text", type="string"), dict(type="bytes4")],
                    ),
                ],
            )
        ],
        outputs=[],
    ),
    dict(type="fallback", stateMutability="nonpayable"),
    dict(type="receive", stateMutability="payable"),
]


def test_valid_abi() -> None:
    result = validate_contract_abi(ERC20_LIKE_ABI)
    assert result == ValidationResult(valid=True)
    assert result.error is None
    assert result.failure is None
    assert is_contract_abi(ERC20_LIKE_ABI)


def test_empty_abi() -> None:
    assert validate_contract_abi([]) == ValidationResult(valid=True)
    assert parse_contract_abi([]) == []


def test_not_an_array() -> None:
    for value in [{}, None, "abi", 1, dict(abi=[])]:
        result = validate_contract_abi(value)
        assert not result.valid
        assert result.error == "ABI must be an array"
        assert isinstance(result.failure, StructuralError)
        assert not is_contract_abi(value)
        assert safe_parse_contract_abi(value) is None
        with pytest.raises(ABIParseError, match="^ABI must be an array$"):
            parse_contract_abi(value)


def test_error_message() -> None:
    bad_entry = dict(type="receive", stateMutability="nonpayable")
    result = validate_contract_abi([dict(type="fallback", stateMutability="payable"), bad_entry])
    assert not result.valid
    assert result.error == (
        'Invalid ABI definition at index 1: {"type":"receive","stateMutability":"nonpayable"}'
    )
    assert isinstance(result.failure, DefinitionError)
    assert result.failure.path == (1, "stateMutability")


def test_error_message_non_ascii() -> None:
    result = validate_contract_abi([dict(type="event", name="Überweisung", inputs=None)])
    assert result.error == (
        'Invalid ABI definition at index 0: {"type":"event","name":"Überweisung","inputs":null}'
    )


def test_error_message_non_json_entry() -> None:
    # Not a JSON value at all, but still reported instead of raising
    result = validate_contract_abi([{("a", "b"): 1}])
    assert result.error == "Invalid ABI definition at index 0: <unserializable dict>"

    cyclic: list = []
    cyclic.append(cyclic)
    result = validate_contract_abi(cyclic)
    assert result.error == "Invalid ABI definition at index 0: <unserializable list>"


def test_fail_fast() -> None:
    abi = deepcopy(ERC20_LIKE_ABI)
    abi[2]["inputs"][0]["type"] = "address[][]"
    abi[5]["stateMutability"] = "view"

    result = validate_contract_abi(abi)
    assert not result.valid
    dumped = json.dumps(abi[2], separators=(",", ":"))
    assert result.error == f"Invalid ABI definition at index 2: {dumped}"
    assert isinstance(result.failure, TypeGrammarError)
    assert result.failure.path == (2, "inputs", 0, "type")


def test_nested_error_location() -> None:
    abi = deepcopy(ERC20_LIKE_ABI)
    del abi[4]["inputs"][0]["components"][2]["components"]

    result = validate_contract_abi(abi)
    assert result.error is not None
    assert result.error.startswith("Invalid ABI definition at index 4: ")
    assert str(result.failure) == (
        "[4].inputs[0].components[2].components: "
        "`tuple` requires a `components` array, got null"
    )


def test_parse_returns_same_object() -> None:
    abi = deepcopy(ERC20_LIKE_ABI)
    parsed = parse_contract_abi(abi)
    assert parsed is abi
    assert parsed == ERC20_LIKE_ABI

    # The input is left untouched and revalidates
    assert validate_contract_abi(parsed).valid

    assert safe_parse_contract_abi(abi) is abi


def test_parse_error() -> None:
    abi = [dict(type="function", name="f", inputs=[], outputs=[], stateMutability="maybe")]
    message = (
        "Invalid ABI definition at index 0: "
        '{"type":"function","name":"f","inputs":[],"outputs":[],"stateMutability":"maybe"}'
    )

    with pytest.raises(ABIParseError) as exc:
        parse_contract_abi(abi)
    assert str(exc.value) == message
    assert isinstance(exc.value.__cause__, DefinitionError)

    assert safe_parse_contract_abi(abi) is None
    assert not is_contract_abi(abi)


def test_non_list_arrays_rejected() -> None:
    result = validate_contract_abi(tuple(ERC20_LIKE_ABI))
    assert result.error == "ABI must be an array"

    abi = deepcopy(ERC20_LIKE_ABI)
    abi[3]["inputs"] = tuple(abi[3]["inputs"])
    result = validate_contract_abi(abi)
    assert result.error is not None
    assert result.error.startswith("Invalid ABI definition at index 3: ")
    assert str(result.failure) == "[3].inputs: `inputs` must be an array, got tuple"


def test_multidimensional_tuple_array() -> None:
    abi = [
        dict(
            type="function",
            name="setGrid",
            stateMutability="nonpayable",
            inputs=[
                dict(
                    name="cells",
                    type="tuple[][3]",
                    internalType="struct Board.Cell[][3]",
                    components=[dict(name="x", type="uint8"), dict(name="y", type="uint8")],
                )
            ],
            outputs=[],
        )
    ]
    assert parse_contract_abi(abi) is abi


def test_max_depth() -> None:
    param: dict = dict(name="leaf", type="bool")
    for _ in range(10):
        param = dict(name="s", type="tuple", components=[param])
    abi = [dict(type="error", name="Deep", inputs=[param])]

    assert is_contract_abi(abi)
    assert is_contract_abi(abi, max_depth=10)
    assert not is_contract_abi(abi, max_depth=9)

    result = validate_contract_abi(abi, max_depth=9)
    assert isinstance(result.failure, NestingTooDeep)
    assert safe_parse_contract_abi(abi, max_depth=9) is None


def test_max_depth_beyond_stack() -> None:
    param: dict = dict(name="leaf", type="bool")
    for _ in range(20000):
        param = dict(name="s", type="tuple", components=[param])
    abi = [dict(type="error", name="Deep", inputs=[param])]

    result = validate_contract_abi(abi, max_depth=100000)
    assert not result.valid
    assert result.error == "Invalid ABI definition at index 0: <unserializable dict>"
    assert isinstance(result.failure, NestingTooDeep)
    assert result.failure.path == (0, "inputs")

    assert not is_contract_abi(abi, max_depth=100000)
    assert safe_parse_contract_abi(abi, max_depth=100000) is None
    with pytest.raises(ABIParseError):
        parse_contract_abi(abi, max_depth=100000)
