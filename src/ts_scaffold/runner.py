"""Run external commands with the terminal attached."""

from __future__ import annotations

import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Protocol

from ts_scaffold.errors import CommandError
from ts_scaffold.output import info


class Runner(Protocol):
    def run(self, *command: str) -> None: ...


class CommandRunner:
    """Runs one command at a time in ``cwd``.

    The child inherits this process's stdin, stdout and stderr, so its output
    shows up as it is produced and interactive npm prompts can still be
    answered. Nothing is left open once ``run`` returns or raises.
    """

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd

    def run(self, *command: str) -> None:
        info(f"running: {shlex.join(command)}")
        sys.stdout.flush()
        sys.stderr.flush()

        # npm is a .cmd shim on Windows, which only resolves through PATHEXT
        executable = shutil.which(command[0]) or command[0]
        try:
            result = subprocess.run([executable, *command[1:]], cwd=self.cwd, check=False)
        except OSError as exc:
            raise CommandError(command, 127) from exc

        returncode = result.returncode
        if returncode < 0:
            # Killed by signal N: report 128 + N, as shells do
            returncode = 128 - returncode
        if returncode != 0:
            raise CommandError(command, returncode)
