"""
SofizPay CLI entry point.

Usage:
    sofizpay [OPTIONS] COMMAND [ARGS]...
"""
from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .client import SofizPayClient
from .config import LedgerNetwork, load_settings
from .logging_utils import configure_logging, mask_account_id
from .models.errors import SofizPayError

console = Console()


def _client(ctx: click.Context) -> SofizPayClient:
    return SofizPayClient(settings=ctx.obj["settings"])


def _fail(ctx: click.Context, error: SofizPayError) -> None:
    console.print(f"[red]Error: {error.message}[/red]")
    ctx.exit(1)


@click.group()
@click.version_option(package_name="sofizpay-sdk", message="%(prog)s %(version)s")
@click.option(
    "--network",
    type=click.Choice([n.value for n in LedgerNetwork]),
    envvar="SOFIZPAY_NETWORK",
    help="Stellar network (default: mainnet)",
)
@click.option("--api-url", envvar="SOFIZPAY_API_BASE_URL", help="Gateway API base URL")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, network: str | None, api_url: str | None, verbose: bool):
    """SofizPay CLI - DZT payments and CIB card payments."""
    ctx.ensure_object(dict)
    configure_logging(verbose)

    ctx.obj["settings"] = load_settings(network=network, api_base_url=api_url)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.pass_context
def status(ctx):
    """Show current configuration."""
    settings = ctx.obj["settings"]

    console.print("\n[bold blue]SofizPay CLI Status[/bold blue]\n")
    console.print(f"Network: [cyan]{settings.network.value}[/cyan]")
    console.print(f"Horizon: [cyan]{settings.resolved_horizon_url}[/cyan]")
    console.print(f"Gateway: [cyan]{settings.api_base_url}[/cyan]")
    console.print(f"Asset: [cyan]{settings.asset_code}[/cyan] ({mask_account_id(settings.asset_issuer)})")
    if settings.cib_public_key_pem:
        console.print("CIB public key: [green]configured[/green]")
    else:
        console.print("CIB public key: [yellow]Not configured[/yellow]")
    console.print()


@cli.command()
@click.argument("account_id")
@click.option("--all", "show_all", is_flag=True, help="Show every balance line")
@click.pass_context
def balance(ctx, account_id: str, show_all: bool):
    """Get the DZT balance of an account."""
    client = _client(ctx)
    try:
        if not show_all:
            line = client.get_dzt_balance(account_id)
            if line is None:
                console.print(f"[yellow]No {client.settings.asset_code} trustline[/yellow]")
                return
            console.print(f"Balance: [green]{line.balance}[/green] {line.asset_code}")
            return

        table = Table(title="Balances")
        table.add_column("Asset", style="cyan")
        table.add_column("Issuer")
        table.add_column("Balance", style="yellow", justify="right")
        for line in client.accounts.get_all_balances(account_id):
            table.add_row(line.asset_code, mask_account_id(line.asset_issuer), line.balance)
        console.print(table)
    except SofizPayError as e:
        _fail(ctx, e)
    finally:
        client.close()


def _payments_table(title: str, payments) -> Table:
    table = Table(title=title)
    table.add_column("Date")
    table.add_column("From", style="cyan")
    table.add_column("To", style="cyan")
    table.add_column("Amount", style="yellow", justify="right")
    table.add_column("Memo")
    table.add_column("Hash", style="dim")
    for payment in payments:
        table.add_row(
            payment.timestamp.strftime("%Y-%m-%d %H:%M"),
            mask_account_id(payment.from_address),
            mask_account_id(payment.to_address),
            payment.amount,
            payment.memo or "",
            payment.hash[:12],
        )
    return table


@cli.command()
@click.argument("account_id")
@click.option("--limit", default=20, show_default=True, help="Maximum payments to show")
@click.option("--cursor", help="Continue after this paging token")
@click.pass_context
def history(ctx, account_id: str, limit: int, cursor: str | None):
    """List the latest DZT payments of an account."""
    client = _client(ctx)
    try:
        payments = client.get_payment_history(account_id, limit=limit, cursor=cursor)
        if not payments:
            console.print("[dim]No payments found[/dim]")
            return
        console.print(_payments_table("Payments", payments))
    except SofizPayError as e:
        _fail(ctx, e)
    finally:
        client.close()


@cli.command("search-memo")
@click.argument("account_id")
@click.argument("memo")
@click.option("--limit", default=20, show_default=True, help="Maximum payments to show")
@click.pass_context
def search_memo(ctx, account_id: str, memo: str, limit: int):
    """Find DZT payments carrying a memo."""
    client = _client(ctx)
    try:
        payments = client.get_transactions_by_memo(account_id, memo, limit=limit)
        if not payments:
            console.print(f"[dim]No payments with memo '{memo}'[/dim]")
            return
        console.print(_payments_table(f"Payments with memo '{memo}'", payments))
    except SofizPayError as e:
        _fail(ctx, e)
    finally:
        client.close()


@cli.command()
@click.option(
    "--secret",
    envvar="SOFIZPAY_SOURCE_SECRET",
    prompt="Source secret key",
    hide_input=True,
    help="Secret seed of the paying account",
)
@click.option("--to", "destination", required=True, help="Destination account ID")
@click.option("--amount", required=True, help="Amount of DZT to send")
@click.option("--memo", help="Text memo (28 bytes max)")
@click.pass_context
def send(ctx, secret: str, destination: str, amount: str, memo: str | None):
    """Send DZT to another account."""
    client = _client(ctx)
    try:
        tx_hash = client.send_payment(secret, destination, amount, memo=memo)
        console.print("\n[green]✓ Payment sent[/green]")
        console.print(f"  TX: [cyan]{tx_hash}[/cyan]")
        console.print(f"  Amount: {amount} {client.settings.asset_code}")
    except SofizPayError as e:
        _fail(ctx, e)
    finally:
        client.close()


@cli.group()
def cib():
    """CIB card-payment commands."""
    pass


@cib.command("create")
@click.option("--account", required=True, help="Account to credit")
@click.option("--amount", required=True, help="Amount to charge")
@click.option("--name", "full_name", required=True, help="Customer full name")
@click.option("--phone", required=True, help="Customer phone number")
@click.option("--email", required=True, help="Customer email address")
@click.option("--return-url", help="URL the customer returns to")
@click.option("--memo", help="Memo forwarded to the gateway")
@click.option("--redirect", is_flag=True, help="Ask the gateway to redirect immediately")
@click.pass_context
def cib_create(
    ctx,
    account: str,
    amount: str,
    full_name: str,
    phone: str,
    email: str,
    return_url: str | None,
    memo: str | None,
    redirect: bool,
):
    """Open a CIB payment session."""
    client = _client(ctx)
    try:
        session = client.create_cib_transaction(
            account=account,
            amount=amount,
            full_name=full_name,
            phone=phone,
            email=email,
            return_url=return_url,
            memo=memo,
            redirect=redirect,
        )
        console.print("\n[green]✓ CIB transaction created[/green]")
        console.print(f"  Transaction: [cyan]{session.merchant_transaction_id}[/cyan]")
        console.print(f"  CIB transaction: [cyan]{session.gateway_transaction_id}[/cyan]")
        console.print(f"  Payment URL: {session.payment_url}")
        console.print(f"  Status: {session.status}")
    except SofizPayError as e:
        _fail(ctx, e)
    finally:
        client.close()


@cib.command("verify")
@click.argument("return_url")
@click.option(
    "--public-key-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="PEM file with the gateway public key (default: SOFIZPAY_CIB_PUBLIC_KEY_PEM)",
)
@click.pass_context
def cib_verify(ctx, return_url: str, public_key_file: Path | None):
    """Verify the signature of a CIB return URL."""
    key = public_key_file.read_text() if public_key_file else None
    client = _client(ctx)
    try:
        result = client.verify_cib_signature(return_url, key)
    except SofizPayError as e:
        _fail(ctx, e)
        return
    finally:
        client.close()

    if not result.valid:
        console.print(f"[red]✗ {result.error}[/red]")
        ctx.exit(1)

    console.print("[green]✓ Signature valid[/green]")
    console.print(f"  Status: {result.payment_status}")
    console.print(f"  Transaction: [cyan]{result.transaction_id}[/cyan]")
    console.print(f"  CIB transaction: [cyan]{result.gateway_transaction_id}[/cyan]")
    console.print(f"  Amount: {result.amount}")


if __name__ == "__main__":
    cli()
