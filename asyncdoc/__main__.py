"""Entry point for running asyncdoc as a module (python -m asyncdoc)."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from asyncdoc.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
