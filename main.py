"""
netlaunch - Main Entry Point

CLI for the two network launch workflows:
    netlaunch network chain init LAUNCH_ID
    netlaunch network campaign update CAMPAIGN_ID
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from netlaunch.config import (
    DEFAULT_ACCOUNT,
    CampaignUpdateOptions,
    ChainInitOptions,
    KeyringBackend,
    NetworkConfig,
    ValidatorOptions,
    load_network_config,
)
from netlaunch.exceptions import NetLaunchError
from netlaunch.observability.logging_config import configure_logging
from netlaunch.prompts import RichPrompter
from netlaunch.workflows import CampaignUpdateWorkflow, ChainInitWorkflow

load_dotenv()

app = typer.Typer(
    name="netlaunch",
    help="netlaunch - join network launches and manage campaigns",
)
network_app = typer.Typer(help="Interact with the launch network")
chain_app = typer.Typer(help="Prepare a chain for a launch")
campaign_app = typer.Typer(help="Manage campaigns")

app.add_typer(network_app, name="network")
network_app.add_typer(chain_app, name="chain")
network_app.add_typer(campaign_app, name="campaign")

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """netlaunch - join network launches and manage campaigns."""
    configure_logging(level=logging.DEBUG if verbose else logging.INFO)


def _load_config(
    config_path: Optional[Path],
    from_account: Optional[str],
    keyring_backend: Optional[KeyringBackend],
) -> NetworkConfig:
    """Load the network config and apply per-command flag overrides."""
    config = load_network_config(config_path)
    updates: dict = {}
    if from_account:
        updates["from_account"] = from_account
    if keyring_backend is not None:
        updates["keyring_backend"] = keyring_backend
    return config.model_copy(update=updates) if updates else config


def _fail(error: NetLaunchError) -> NoReturn:
    console.print(Panel(
        f"[red]{escape(str(error))}[/]",
        title=f"⚠ {type(error).__name__}",
        border_style="red",
    ))
    raise typer.Exit(code=1)


# =========================================================================
# Commands
# =========================================================================


@chain_app.command("init")
def chain_init(
    launch_id: str = typer.Argument(..., help="Launch ID of the chain"),
    validator_account: str = typer.Option(
        DEFAULT_ACCOUNT, "--validator-account", help="Account for the chain validator",
    ),
    validator_website: Optional[str] = typer.Option(
        None, "--validator-website", help="Associate a website with the validator",
    ),
    validator_details: Optional[str] = typer.Option(
        None, "--validator-details", help="Details about the validator",
    ),
    validator_security_contact: Optional[str] = typer.Option(
        None, "--validator-security-contact", help="Validator security contact email",
    ),
    validator_moniker: Optional[str] = typer.Option(
        None, "--validator-moniker", help="Custom validator moniker",
    ),
    validator_identity: Optional[str] = typer.Option(
        None, "--validator-identity", help="Validator identity signature (ex. UPort or Keybase)",
    ),
    validator_self_delegation: Optional[str] = typer.Option(
        None, "--validator-self-delegation", help="Validator minimum self delegation",
    ),
    validator_gas_price: Optional[str] = typer.Option(
        None, "--validator-gas-price", help="Validator gas price",
    ),
    from_account: Optional[str] = typer.Option(
        None, "--from", help="Account name to use for sending transactions",
    ),
    home: Optional[Path] = typer.Option(
        None, "--home", help="Root directory holding the chain homes",
    ),
    keyring_backend: Optional[KeyringBackend] = typer.Option(
        None, "--keyring-backend", help="Keyring backend to store your account keys",
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Answers interactive yes/no questions with yes",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml",
    ),
):
    """Initialize a chain from a published chain ID."""

    async def _run():
        config = _load_config(config_path, from_account, keyring_backend)
        options = ChainInitOptions(
            launch_id=launch_id,
            validator=ValidatorOptions(
                account=validator_account,
                website=validator_website,
                details=validator_details,
                security_contact=validator_security_contact,
                moniker=validator_moniker,
                identity=validator_identity,
                self_delegation=validator_self_delegation,
                gas_price=validator_gas_price,
            ),
            home=home,
            keyring_backend=keyring_backend,
            yes=yes,
        )
        workflow = ChainInitWorkflow(config, prompter=RichPrompter(console))
        return await workflow.run(options)

    console.print(f"[cyan]Initializing the chain for launch {launch_id}...[/]")
    try:
        result = asyncio.run(_run())
    except NetLaunchError as e:
        _fail(e)

    if result.declined:
        console.print("[yellow]said no[/] - existing chain home left untouched")
        return

    if result.resumed:
        console.print(f"[dim]Resumed existing chain home {result.home}[/]")
    console.print(f"[green]✔ Gentx generated:[/] {result.gentx_path}")


@campaign_app.command("update")
def campaign_update(
    campaign_id: str = typer.Argument(..., help="Campaign ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Update the campaign name"),
    metadata: Optional[str] = typer.Option(None, "--metadata", help="Update the campaign metadata"),
    total_supply: Optional[str] = typer.Option(
        None, "--total-supply", help="Update the total supply, e.g. 1000stake,500token",
    ),
    from_account: Optional[str] = typer.Option(
        None, "--from", help="Account name to use for sending transactions",
    ),
    keyring_backend: Optional[KeyringBackend] = typer.Option(
        None, "--keyring-backend", help="Keyring backend to store your account keys",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml",
    ),
):
    """Update the details of the campaign."""

    async def _run():
        config = _load_config(config_path, from_account, keyring_backend)
        options = CampaignUpdateOptions(
            campaign_id=campaign_id,
            name=name,
            metadata=metadata,
            total_supply=total_supply,
        )
        return await CampaignUpdateWorkflow(config).run(options)

    try:
        with console.status(f"[cyan]Updating campaign {campaign_id}...[/]"):
            result = asyncio.run(_run())
    except NetLaunchError as e:
        _fail(e)

    changes = ", ".join(p.describe() for p in result.propositions)
    console.print(f"[green]✔ Campaign updated:[/] {changes}")
    console.print(
        yaml.safe_dump(result.campaign.to_display(), sort_keys=False), markup=False,
    )


if __name__ == "__main__":
    app()
