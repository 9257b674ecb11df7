"""Exceptions raised while scaffolding a package."""

from __future__ import annotations

import shlex
from collections.abc import Sequence


class ScaffoldError(RuntimeError):
    pass


class SetupError(ScaffoldError):
    """The run cannot go on with the answers or directory it was given."""


class CommandError(ScaffoldError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        super().__init__(f"command exited with code {returncode}: {shlex.join(self.command)}")
