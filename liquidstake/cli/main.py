"""liquidstake command line: withdrawal and pool balance reports."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from liquidstake.services._helpers import format_ether, now_ts
from liquidstake.services.chain_client import ChainClient
from liquidstake.services.errors import (
    BalanceFetchError,
    ChainClientError,
    WithdrawalFetchError,
)
from liquidstake.services.report import ReportService

app = typer.Typer(
    name="liquidstake",
    help="PEAQ liquid staking withdrawals and pool balances",
    add_completion=False
)

console = Console()


def _report(rpc_url: Optional[str]) -> ReportService:
    return ReportService(ChainClient(rpc_url=rpc_url))


def _short(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


@app.command()
def withdrawals(
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Override CHAIN_RPC_URL")
):
    """List every holder's withdrawal requests."""
    try:
        with console.status("Scanning stPEAQ holders..."):
            holders = _report(rpc_url).holder_withdrawals(now_ts())
    except (WithdrawalFetchError, ChainClientError) as e:
        console.print(f"[red]Failed to fetch withdrawals:[/red] {e}")
        raise typer.Exit(code=1)

    rows = [(h, r) for h in holders for r in h["requests"]]
    if not rows:
        console.print("No withdrawal requests found")
        return

    table = Table(title="All Withdrawal Requests")
    table.add_column("Address", style="cyan")
    table.add_column("Amount (PEAQ)", justify="right")
    table.add_column("Unlock Time")
    table.add_column("Status")

    for holder, request in rows:
        status = "[green]Claimable[/green]" if request["isClaimable"] else "[yellow]Pending[/yellow]"
        table.add_row(
            _short(holder["address"]),
            format_ether(int(request["amount"])),
            request["unlockTime"],
            status,
        )
    console.print(table)

    failed = [h["address"] for h in holders if "error" in h]
    if failed:
        console.print(f"\n[yellow]Skipped {len(failed)} holder(s) that could not be read[/yellow]")


@app.command()
def summary(
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Override CHAIN_RPC_URL")
):
    """Future claims, totalled per unlock date."""
    try:
        with console.status("Summarizing pending withdrawals..."):
            days = _report(rpc_url).daily_summary(now_ts())
    except (WithdrawalFetchError, ChainClientError) as e:
        console.print(f"[red]Failed to fetch withdrawals:[/red] {e}")
        raise typer.Exit(code=1)

    if not days:
        console.print("No future claims scheduled")
        return

    table = Table(title="Future Claims Summary")
    table.add_column("Date", style="cyan")
    table.add_column("Total Amount (PEAQ)", justify="right", style="green")
    table.add_column("Number of Requests", justify="right")
    for day in days:
        table.add_row(day["date"], format_ether(int(day["totalAmount"])), str(day["requestCount"]))
    console.print(table)


@app.command()
def tracking(
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Override CHAIN_RPC_URL")
):
    """All withdrawals grouped by unlock date."""
    try:
        rows = _report(rpc_url).tracking(now_ts())
    except (WithdrawalFetchError, ChainClientError) as e:
        console.print(f"[red]Failed to fetch withdrawals:[/red] {e}")
        raise typer.Exit(code=1)

    if not rows:
        console.print("No withdrawals found")
        return

    table = Table(title="Withdrawal Tracking")
    table.add_column("Date", style="cyan")
    table.add_column("Total Amount to Unstake", justify="right")
    table.add_column("Number of Withdrawals", justify="right")
    table.add_column("Status")
    for row in rows:
        table.add_row(
            row["date"],
            f"{format_ether(int(row['totalAmount']))} PEAQ",
            str(row["withdrawalCount"]),
            row["status"],
        )
    console.print(table)


@app.command()
def breakdown(
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Override CHAIN_RPC_URL")
):
    """Split the pool into staked, with collators, pending and available."""
    try:
        with console.status("Reading pool balances..."):
            b = _report(rpc_url).breakdown(now_ts())
    except (BalanceFetchError, ChainClientError) as e:
        console.print(f"[red]Failed to fetch pool balances:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="PEAQ Breakdown")
    table.add_column("Metric", style="cyan")
    table.add_column("PEAQ", justify="right", style="green")
    table.add_row("Total Staked", format_ether(int(b["totalStaked"])))
    table.add_row("With Collators", format_ether(int(b["withCollators"])))
    table.add_row("Pending Withdrawal", format_ether(int(b["pendingWithdrawal"])))
    table.add_row("Available for Staking", format_ether(int(b["availableForStaking"])))
    console.print(table)

    if not b["consistent"]:
        console.print("[yellow]Available balance is negative; on-chain reads disagree[/yellow]")


@app.command()
def balances(
    address: str = typer.Argument(..., help="Wallet address"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="Override CHAIN_RPC_URL")
):
    """stPEAQ and native PEAQ balance of one wallet."""
    try:
        a = _report(rpc_url).account_balances(address)
    except (ChainClientError, ValueError) as e:
        console.print(f"[red]Failed to fetch balances:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"Available stPEAQ: [bold]{format_ether(int(a['stPeaq']))}[/bold]")
    console.print(f"Current PEAQ:     [bold]{format_ether(int(a['peaq']))}[/bold]")


if __name__ == "__main__":
    app()
