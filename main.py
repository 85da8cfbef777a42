"""Command Line Entry Point - Root Module.

This is the root-level entry point for running the alert engine from a
checkout. It imports from the hazard_alerts package.
"""

from hazard_alerts.main import cli, main

__all__ = [
    "cli",
    "main",
]


if __name__ == "__main__":
    cli()
