"""Payment matching CLI."""

__all__ = ["app"]

from .payment_cli import app
