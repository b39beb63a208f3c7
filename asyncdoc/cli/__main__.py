#!/usr/bin/env python3
"""Entry point for asyncdoc CLI when run as python -m asyncdoc.cli."""

if __name__ == "__main__":
    from asyncdoc.cli.main import main

    main()
