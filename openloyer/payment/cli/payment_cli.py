"""Payment matching CLI commands.

Runs the matching engine on JSON exports of bank transactions and open rent
calls, and shows proposals, ambiguous candidates and unmatched transactions.
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from ...exceptions import ValidationError, wrap_exception
from ...utils.logging import get_logger
from ..application.services import PaymentMatchingService
from ..domain.enums import ConfidenceLevel
from ..domain.value_objects import MatchingResult, RentCallCandidate, Transaction

app = typer.Typer(name="payment", help="💶 Rent payment matching")
console = Console()
logger = get_logger(__name__)

CONFIDENCE_STYLES = {
    ConfidenceLevel.HIGH: "green",
    ConfidenceLevel.MEDIUM: "yellow",
    ConfidenceLevel.LOW: "red",
}


@app.callback()
def payment_callback() -> None:
    """Reconcile bank transactions with open rent calls."""


def _format_amount(cents: int) -> str:
    return f"{cents / 100:,.2f}"


def _format_confidence(confidence: ConfidenceLevel) -> str:
    style = CONFIDENCE_STYLES[confidence]
    return f"[{style}]{confidence.value.upper()}[/]"


def _tenant_label(rent_call: RentCallCandidate) -> str:
    if rent_call.company_name:
        return rent_call.company_name
    parts = [rent_call.tenant_first_name, rent_call.tenant_last_name]
    return " ".join(part for part in parts if part) or "-"


def load_records(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of objects.

    Raises:
        ValidationError: If the file is not valid JSON or not a list of objects
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise wrap_exception(
            e, "Invalid JSON document", exception_class=ValidationError, path=str(path)
        ) from e

    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ValidationError("Expected a JSON array of objects", field=path.name)
    return payload


def load_transactions(path: Path) -> list[Transaction]:
    return [Transaction.from_dict(item) for item in load_records(path)]


def load_rent_calls(path: Path) -> list[RentCallCandidate]:
    return [RentCallCandidate.from_dict(item) for item in load_records(path)]


def render_result(result: MatchingResult) -> None:
    """Print matching result as Rich tables."""
    if result.matches:
        table = Table(title="✅ Proposed Matches", show_header=True)
        table.add_column("Transaction", style="cyan")
        table.add_column("Amount", justify="right")
        table.add_column("Rent call", style="cyan")
        table.add_column("Tenant")
        table.add_column("Score", justify="right")
        table.add_column("Confidence")

        for proposal in result.matches:
            table.add_row(
                proposal.transaction_id,
                _format_amount(proposal.transaction.amount_cents),
                proposal.rent_call_id,
                _tenant_label(proposal.rent_call),
                f"{proposal.score:.2f}",
                _format_confidence(proposal.confidence),
            )
        console.print(table)

    if result.ambiguous:
        table = Table(title="⚠️  Needs Review", show_header=True)
        table.add_column("Transaction", style="cyan")
        table.add_column("Amount", justify="right")
        table.add_column("Candidates")

        for entry in result.ambiguous:
            candidates = "\n".join(
                f"{c.rent_call_id} ({_tenant_label(c.rent_call)}) {c.score:.2f}"
                for c in entry.candidates
            )
            table.add_row(
                entry.transaction_id,
                _format_amount(entry.transaction.amount_cents),
                candidates,
            )
        console.print(table)

    if result.unmatched:
        table = Table(title="❌ Unmatched", show_header=True)
        table.add_column("Transaction", style="cyan")
        table.add_column("Amount", justify="right")
        table.add_column("Payer")
        table.add_column("Reference")

        for entry in result.unmatched:
            tx = entry.transaction
            table.add_row(
                entry.transaction_id,
                _format_amount(tx.amount_cents),
                tx.payer_name or "-",
                tx.reference or "-",
            )
        console.print(table)

    summary = result.summary
    summary_table = Table(title="📊 Summary", show_header=True)
    summary_table.add_column("Metric", style="cyan", width=20)
    summary_table.add_column("Count", justify="right", style="bold")
    summary_table.add_row("✅ Matched", f"[green]{summary.matched}[/]")
    summary_table.add_row("⚠️  Ambiguous", f"[yellow]{summary.ambiguous}[/]")
    summary_table.add_row("❌ Unmatched", f"[red]{summary.unmatched}[/]")
    summary_table.add_row("━" * 20, "━" * 10)
    summary_table.add_row("🧾 Rent calls", f"[bold]{summary.rent_call_count}[/]")
    console.print(summary_table)


@app.command("match")
def match_command(
    transactions_file: Path = typer.Argument(
        ..., help="JSON array of bank transactions", exists=True, dir_okay=False
    ),
    rent_calls_file: Path = typer.Argument(
        ..., help="JSON array of open rent calls", exists=True, dir_okay=False
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Rent call ID to leave out (repeatable)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """🔗 Match bank transactions against open rent calls.

    Examples:
        # Review proposals in a table
        openloyer payment match transactions.json rent_calls.json

        # Skip rent calls already settled, export for the reconciliation workflow
        openloyer payment match tx.json rc.json -x rc-12 -x rc-13 --json > result.json
    """
    try:
        transactions = load_transactions(transactions_file)
        rent_calls = load_rent_calls(rent_calls_file)
    except ValidationError as e:
        logger.warning("payment_match_input_invalid", error=str(e))
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)

    service = PaymentMatchingService()
    result = service.match(transactions, rent_calls, excluded_rent_call_ids=exclude or ())

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    render_result(result)
