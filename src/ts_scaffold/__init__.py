"""ts-scaffold: scaffold a TypeScript package, a workspace member, or a monorepo."""

from __future__ import annotations

import sys
from importlib.metadata import PackageNotFoundError, version

from ts_scaffold.errors import CommandError, SetupError
from ts_scaffold.options import build_options
from ts_scaffold.output import PREFIX, error
from ts_scaffold.prompts import Prompter
from ts_scaffold.runner import CommandRunner
from ts_scaffold.scaffold import Scaffolder


def get_version() -> str:
    try:
        return version("ts-scaffold")
    except PackageNotFoundError:
        return "0.0.0"


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ts-scaffold command."""
    current = get_version()
    options = build_options(argv, version=current)
    print(f"{PREFIX} {current}")

    scaffolder = Scaffolder(options, CommandRunner(options.cwd), Prompter())
    try:
        return scaffolder.run()
    except CommandError as exc:
        error(str(exc))
        return exc.returncode
    except SetupError as exc:
        error(str(exc))
        return 1
    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
