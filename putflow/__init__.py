"""Top-level CLI package for the put flow conviction signals."""

from __future__ import annotations

from typing import Sequence

from .cli import main as cli_main

__all__ = ["main"]


def main(argv: Sequence[str] | None = None) -> int:
    """Dispatch to the conviction signals CLI."""

    return cli_main(argv)
