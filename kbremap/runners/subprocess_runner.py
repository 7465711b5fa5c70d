"""Command runner implementation using the `subprocess` module."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from kbremap.core.errors import CommandError

LOGGER = logging.getLogger(__name__)


class SubprocessRunner:
    def run(self, program: str, args: Sequence[str]) -> str:
        cmd = [program, *args]
        cmdline = shlex.join(cmd)
        LOGGER.debug("Running `%s`", cmdline)
        try:
            result = subprocess.run(cmd, check=False, capture_output=True)
        except OSError as exc:
            raise CommandError(f"could not execute subprocess: `{cmdline}`: {exc}") from exc

        if result.returncode != 0:
            raise CommandError(format_error_message(cmdline, result))

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CommandError(f"failed to decode stdout of `{cmdline}` as UTF-8") from exc


def format_error_message(cmdline: str, result: subprocess.CompletedProcess[bytes]) -> str:
    stdout = (result.stdout or b"").decode("utf-8", errors="replace")
    stderr = (result.stderr or b"").decode("utf-8", errors="replace")
    msg = f"subprocess didn't exit successfully `{cmdline}` (exit status: {result.returncode})"
    if stdout.strip():
        msg += f"\n--- stdout\n{stdout}"
    if stderr.strip():
        msg += f"\n--- stderr\n{stderr}"
    return msg
