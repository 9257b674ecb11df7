"""Prefixed console output shared by every ts-scaffold step."""

from __future__ import annotations

import sys

PREFIX = "ts-scaffold"


def info(message: str) -> None:
    print(f"{PREFIX}: {message}")


def warn(message: str) -> None:
    print(f"{PREFIX}: WARNING: {message}", file=sys.stderr)


def error(message: str) -> None:
    print(f"{PREFIX}: ERROR: {message}", file=sys.stderr)
