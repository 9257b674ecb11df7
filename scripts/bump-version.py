#!/usr/bin/env python3
"""Bump the project version in setup.py and README.md.

Usage: python scripts/bump-version.py <new-version>
Example: python scripts/bump-version.py 0.2.0

Validate with: pytest tests/test_version.py
"""

from __future__ import annotations

import re
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def read_current_version() -> str:
    text = (ROOT / "setup.py").read_text()
    match = re.search(r'^\s*version="(.+?)"', text, re.MULTILINE)
    if not match:
        sys.exit("Error: could not find version in setup.py")
    return match.group(1)


def update_setup(old: str, new: str) -> None:
    path = ROOT / "setup.py"
    text = path.read_text()
    path.write_text(text.replace(f'version="{old}"', f'version="{new}"', 1))
    print("  Updated setup.py")


def update_readme(old: str, new: str) -> None:
    path = ROOT / "README.md"
    text = path.read_text()
    count = text.count(f"ts-scaffold=={old}")
    path.write_text(text.replace(f"ts-scaffold=={old}", f"ts-scaffold=={new}"))
    print(f"  Updated README.md ({count} occurrence{'s' if count != 1 else ''})")


def fail(message: str) -> None:
    print(f"Current version: {read_current_version()}", file=sys.stderr)
    sys.exit(message)


def main() -> None:
    if len(sys.argv) != 2:
        fail(f"Usage: {sys.argv[0]} <new-version>  (e.g. 0.2.0)")

    new_version = sys.argv[1]
    if not re.fullmatch(r"\d+\.\d+\.\d+", new_version):
        fail("Error: version must be in X.Y.Z format")

    old_version = read_current_version()
    if old_version == new_version:
        fail(f"Version is already {new_version}")

    print(f"Bumping version: {old_version} -> {new_version}")
    update_setup(old_version, new_version)
    update_readme(old_version, new_version)

    print("\nDone. Validate with:\n  pytest tests/test_version.py")


if __name__ == "__main__":
    main()
