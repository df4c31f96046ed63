"""CLI commands for modular."""
