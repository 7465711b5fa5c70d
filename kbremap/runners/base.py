"""Command runner interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class CommandRunner(Protocol):
    def run(self, program: str, args: Sequence[str]) -> str:
        """Run `program` with `args` to completion and return its standard output."""
