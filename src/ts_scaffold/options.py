"""Command-line options, parsed once per invocation."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATES_ENV = "TS_SCAFFOLD_TEMPLATES"


@dataclass(frozen=True)
class Options:
    """Resolved flags. Empty strings mean the flag was not given."""

    yes: bool = False
    monorepo: bool = False
    workspace: str = ""
    scope: str = ""
    cwd: Path = field(default_factory=Path.cwd)
    templates_dir: Path = TEMPLATES_DIR


def parse_args(argv: list[str] | None = None, *, version: str = "0.0.0") -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ts-scaffold",
        description="Scaffold a TypeScript package, a workspace member, or a whole monorepo.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Accept npm init defaults without asking.",
    )
    parser.add_argument(
        "-m",
        "--monorepo",
        action="store_true",
        help="Create a monorepo with a library and an application workspace.",
    )
    parser.add_argument(
        "-w",
        "--workspace",
        default="",
        metavar="PATH",
        help="Add a workspace at PATH (e.g. packages/demoLib) to the repository in the current directory.",
    )
    parser.add_argument(
        "--scope",
        default="",
        help="npm scope for new packages. A leading '@' is added when missing.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {version}")
    return parser.parse_args(argv)


def build_options(
    argv: list[str] | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
    version: str = "0.0.0",
) -> Options:
    args = parse_args(argv, version=version)
    env = os.environ if environ is None else environ

    templates_override = env.get(TEMPLATES_ENV)
    templates_dir = Path(templates_override).resolve() if templates_override else TEMPLATES_DIR

    return Options(
        yes=args.yes,
        monorepo=args.monorepo,
        workspace=args.workspace.strip(),
        scope=args.scope.strip(),
        cwd=(cwd or Path.cwd()).resolve(),
        templates_dir=templates_dir,
    )
