"""Main CLI entry point for OpenLoyer."""

import typer
from rich.console import Console

from openloyer import __version__
from openloyer.utils.logging import configure_logging

# Payment CLI lives in the payment package to keep the top-level commands lean.
from ..payment.cli import app as payment_app
from ..payment.metrics import start_metrics_server

app = typer.Typer(
    name="openloyer",
    help="🏠 Rent management back office: payment reconciliation",
    add_completion=True,
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()

app.add_typer(payment_app, name="payment")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]OpenLoyer[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
) -> None:
    """OpenLoyer command line."""
    configure_logging(
        log_level="DEBUG" if verbose else "INFO",
        json_logs=json_logs,
        dev_mode=not json_logs,
    )
    start_metrics_server()


if __name__ == "__main__":
    app()
