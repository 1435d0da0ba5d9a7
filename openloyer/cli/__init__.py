"""Command-line interface for OpenLoyer."""
