"""
devchain — command line entry for the contract demos.

Commands:
  devchain demo <name>     Run one scripted demo on a fresh chain and print
                           a JSON summary (names: simple-storage, add-five,
                           storage-factory, fund-me, modifiers, math-utils,
                           visibility, data-types, structs)
  devchain accounts        List the deterministic signer accounts
  devchain config          Print the effective chain configuration

Global options:
  --log-level TEXT         Logging level (env: DEVCHAIN_LOG_LEVEL)

Examples:
  devchain demo modifiers
  devchain --log-level INFO demo fund-me
  devchain accounts --json
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import demos
from .chain import DevChain
from .config import ETHER, load_config
from .context import to_hex
from .errors import ExecError
from .version import __version__

app = typer.Typer(
    name="devchain",
    help="Deterministic in-process chain for the contract demos",
    no_args_is_help=True,
    add_completion=False,
)

log = logging.getLogger("devchain.cli")


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return to_hex(obj)
    return str(obj)


def _pretty(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, default=_json_default)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
        envvar="DEVCHAIN_LOG_LEVEL",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the version and exit",
    ),
) -> None:
    """
    devchain CLI — run the demo contracts on a throwaway local chain.
    """
    level = (log_level or load_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("demo")
def demo_cmd(
    name: str = typer.Argument(..., help=f"One of: {', '.join(demos.SCENARIOS)}"),
) -> None:
    """Run a scripted demo on a fresh chain."""
    if name not in demos.SCENARIOS:
        typer.echo(f"Error: unknown demo {name!r}; choose from {', '.join(demos.SCENARIOS)}", err=True)
        raise typer.Exit(2)
    chain = DevChain()
    try:
        summary = demos.run(name, chain)
    except ExecError as e:
        log.error("demo %s failed: %s", name, e)
        typer.echo(_pretty({"demo": name, "error": e.to_dict()}), err=True)
        raise typer.Exit(1)
    typer.echo(_pretty({"demo": name, "blocks": chain.block_number, "result": summary}))


@app.command("accounts")
def accounts_cmd(
    json_output: bool = typer.Option(False, "--json", help="Output JSON instead of a table"),
) -> None:
    """List signer accounts and their starting balances."""
    chain = DevChain()
    rows = [
        {"index": i, "address": to_hex(a), "balance": chain.get_balance(a)}
        for i, a in enumerate(chain.accounts)
    ]
    if json_output:
        typer.echo(_pretty(rows))
        return
    table = Table(title=f"devchain accounts (chain id {chain.config.chain_id})")
    table.add_column("#", justify="right")
    table.add_column("address")
    table.add_column("balance (ether)", justify="right")
    for r in rows:
        table.add_row(str(r["index"]), r["address"], f"{r['balance'] // ETHER:,}")
    Console().print(table)


@app.command("config")
def config_cmd() -> None:
    """Print the effective chain configuration."""
    typer.echo(_pretty(load_config().as_dict()))


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
