"""Nox sessions for CI and local development."""

from __future__ import annotations

import shutil
from pathlib import Path

import nox

nox.options.default_venv_backend = "uv"
nox.options.reuse_existing_virtualenvs = True

PYTHON_VERSIONS = ["3.10", "3.11", "3.12", "3.13"]
LINT_PATHS = ["src", "tests", "scripts", "noxfile.py", "setup.py"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite against an installed ts-scaffold."""
    session.install(".[test]")
    session.run("pytest", *session.posargs)


@nox.session
def lint(session: nox.Session) -> None:
    """Run ruff linter."""
    session.install("ruff")
    session.run("ruff", "check", *LINT_PATHS)


@nox.session
def format_check(session: nox.Session) -> None:
    """Check code formatting with ruff."""
    session.install("ruff")
    session.run("ruff", "format", "--check", *LINT_PATHS)


@nox.session
def package(session: nox.Session) -> None:
    """Build a wheel and make sure the template store is inside it."""
    session.install("build")
    tmp = session.create_tmp()
    session.run("python", "-m", "build", "--wheel", "--outdir", tmp)
    session.run(
        "python",
        "-c",
        "import glob, sys, zipfile; "
        "names = zipfile.ZipFile(glob.glob(sys.argv[1] + '/*.whl')[0]).namelist(); "
        "missing = [n for n in sys.argv[2:] if n not in names]; "
        "sys.exit(f'missing from wheel: {missing}' if missing else 0)",
        tmp,
        "ts_scaffold/templates/root/doteslintrc.cjs",
        "ts_scaffold/templates/common/tsconfig.json",
        "ts_scaffold/templates/package/tsconfig.build.json",
        "ts_scaffold/templates/code/src/main.ts",
        "ts_scaffold/templates/code/test/main.test.ts",
    )


@nox.session
def smoke(session: nox.Session) -> None:
    """Scaffold a throwaway project with the real CLI and npm.

    Arguments after ``--`` go to ts-scaffold, e.g. ``nox -s smoke -- -y -m --scope=@demo``.
    The project is left in place for inspection and wiped on the next run.
    """
    session.install(".")
    workdir = Path(session.create_tmp()) / "smoke"
    if workdir.exists():
        shutil.rmtree(workdir)
    workdir.mkdir(parents=True)

    with session.chdir(workdir):
        session.run("ts-scaffold", *(session.posargs or ["--yes", "--scope=@smoke"]))
    session.log(f"scaffolded into {workdir}")
