"""
Tezos Provider CLI

Command-line access to the read side of the provider, plus a session
check that pairs with a wallet through the configured transport.

Commands:
  chains     - List known Tezos chains
  balance    - Show the balance of an address
  proposal   - Show the protocol proposal under vote
  contracts  - List contracts originated by an operation
  accounts   - Connect a wallet session and list its accounts
  info       - Show configuration
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import NoReturn, Optional

import click

from . import __version__
from .chain.explorer import TzktClient
from .chain.rpc import TezosRpcClient
from .config import PROVIDER_ENV, Settings, load_settings
from .constants import TEZ_SYMBOL, TEZOS_CHAIN_MAP
from .provider import TezosProvider
from .types import (
    AssetData,
    ChainData,
    Metadata,
    TezosConnectOpts,
    TezosProviderError,
    TezosProviderOpts,
)
from .utils import format_tezos_balance


def _fail(message: str) -> NoReturn:
    click.secho(f"ERROR: {message}", fg="red", err=True)
    sys.exit(1)


def _resolve_chain(settings: Settings, network: Optional[str]) -> ChainData:
    try:
        return settings.chain(network)
    except TezosProviderError as exc:
        _fail(str(exc))


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=__version__, prog_name="tezos-provider")
@click.option(
    "--log-level",
    envvar="TEZOS_LOG_LEVEL",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str) -> None:
    """Tezos Provider - Tezos over a remote-signing session."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    try:
        settings = load_settings()
    except TezosProviderError as exc:
        _fail(str(exc))
    ctx.obj = replace(settings, log_level=log_level.lower())


# ============ Read-only commands ============


@cli.command()
def chains() -> None:
    """List known Tezos chains."""
    for chain in TEZOS_CHAIN_MAP.values():
        label = "testnet" if chain.testnet else "mainnet"
        click.echo(f"  {chain.id:<16} {chain.name:<16} [{label}]")
        click.echo(f"    RPC: {', '.join(chain.rpc)}")
        click.echo(f"    API: {chain.api}")


@cli.command()
@click.argument("address")
@click.option("--network", default=None, help="mainnet, ghostnet or tezos:<network>")
@click.option("--rpc-url", default=None, help="Override the node RPC URL")
@click.pass_obj
def balance(settings: Settings, address: str, network: Optional[str], rpc_url: Optional[str]) -> None:
    """Show the balance of ADDRESS."""
    chain = _resolve_chain(settings, network)
    client = TezosRpcClient(rpc_url or chain.rpc[0], timeout=settings.timeout)
    try:
        mutez = client.get_balance(address)
    except TezosProviderError as exc:
        _fail(f"Failed to read balance: {exc}")

    click.echo(f"  Address:  {address}")
    click.echo(f"  Network:  {chain.id}")
    click.echo(f"  Balance:  {format_tezos_balance(AssetData(mutez, TEZ_SYMBOL, 'XTZ'))}")


@cli.command()
@click.option("--network", default=None, help="mainnet, ghostnet or tezos:<network>")
@click.option("--rpc-url", default=None, help="Override the node RPC URL")
@click.pass_obj
def proposal(settings: Settings, network: Optional[str], rpc_url: Optional[str]) -> None:
    """Show the protocol proposal currently under vote."""
    chain = _resolve_chain(settings, network)
    client = TezosRpcClient(rpc_url or chain.rpc[0], timeout=settings.timeout)
    try:
        current = client.get_current_proposal()
    except TezosProviderError as exc:
        _fail(f"Failed to read proposal: {exc}")

    click.echo(f"  Current proposal: {current or 'none'}")


@cli.command()
@click.argument("op_hash")
@click.option("--network", default=None, help="mainnet, ghostnet or tezos:<network>")
@click.option("--api-url", default=None, help="Override the TzKT API URL")
@click.pass_obj
def contracts(settings: Settings, op_hash: str, network: Optional[str], api_url: Optional[str]) -> None:
    """List contracts originated by operation OP_HASH."""
    chain = _resolve_chain(settings, network)
    client = TzktClient(api_url or chain.api, timeout=settings.timeout)
    try:
        addresses = client.get_contract_addresses(op_hash)
    except TezosProviderError as exc:
        _fail(f"Explorer lookup failed: {exc}")

    if not addresses:
        click.echo("  No contracts originated.")
        return
    for address in addresses:
        click.echo(f"  {address}")


# ============ Session commands ============


@cli.command()
@click.option("--network", default=None, help="mainnet, ghostnet or tezos:<network>")
@click.pass_obj
def accounts(settings: Settings, network: Optional[str]) -> None:
    """Connect a wallet session and list its accounts."""
    chain = _resolve_chain(settings, network)
    opts = TezosProviderOpts(
        project_id=settings.project_id,
        metadata=Metadata(name="tezos-provider", description="Tezos Provider CLI"),
        relay_url=settings.relay_url,
        logger=settings.log_level,
        timeout=settings.timeout,
    )
    try:
        provider = TezosProvider.init(opts)
        provider.connect(TezosConnectOpts(chain=chain))
        connection = provider.connection
        if connection is None:
            _fail("Wallet did not approve a session.")
    except TezosProviderError as exc:
        _fail(str(exc))

    click.echo(f"  Network:  {connection.chain_id}")
    click.echo(f"  Address:  {connection.address}")
    for account in connection.accounts:
        click.echo(f"    - {account}")


@cli.command()
@click.pass_obj
def info(settings: Settings) -> None:
    """Show configuration."""
    click.echo(f"  Tezos Provider v{__version__}")
    click.echo(f"  Config file: {PROVIDER_ENV}")
    click.echo(f"  Network:     {settings.network}")
    click.echo(f"  Relay:       {settings.relay_url}")
    click.echo(f"  Project ID:  {'set' if settings.project_id else 'not set'}")
    click.echo(f"  Transport:   {settings.transport or 'not configured'}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
