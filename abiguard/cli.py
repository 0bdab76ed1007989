"""
Command-line checks for contract ABI files.

Examples:
  abiguard check build/Token.json build/Vault.json
  abiguard functions build/Token.json --read-only
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from ._definitions import MAX_NESTING_DEPTH
from ._errors import ABIParseError
from ._loader import load_contract_abi
from ._selection import callable_functions, format_function

app = typer.Typer(help="Validate Ethereum contract ABI JSON files.", no_args_is_help=True)

MaxDepthOption = Annotated[
    int,
    typer.Option(
        "--max-depth", min=0, help="Reject tuples nested deeper than this number of levels."
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log the reasons for rejections.")
    ] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def check(
    files: Annotated[list[Path], typer.Argument(help="ABI or compiler artifact JSON files.")],
    max_depth: MaxDepthOption = MAX_NESTING_DEPTH,
) -> None:
    """Validate each file, exiting with a non-zero code if any of them is invalid."""
    failed = False
    for path in files:
        try:
            contract_abi = load_contract_abi(path, max_depth=max_depth)
        except (ABIParseError, OSError) as exc:
            typer.echo(f"FAIL {exc}", err=True)
            failed = True
            continue
        typer.echo(f"OK {path} ({len(contract_abi)} definitions)")

    if failed:
        raise typer.Exit(code=1)


@app.command()
def functions(
    file: Annotated[Path, typer.Argument(help="ABI or compiler artifact JSON file.")],
    read_only: Annotated[
        bool, typer.Option("--read-only", help="Only list `view` and `pure` functions.")
    ] = False,
    max_depth: MaxDepthOption = MAX_NESTING_DEPTH,
) -> None:
    """List the functions that can be called on a contract with this ABI."""
    try:
        contract_abi = load_contract_abi(file, max_depth=max_depth)
    except (ABIParseError, OSError) as exc:
        typer.echo(f"FAIL {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for function in callable_functions(contract_abi, read_only=read_only):
        typer.echo(format_function(function))
