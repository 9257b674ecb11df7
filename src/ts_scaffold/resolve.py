"""Decide each setup question from flags first, then from the user."""

from __future__ import annotations

from pathlib import Path

from ts_scaffold.errors import SetupError
from ts_scaffold.options import Options
from ts_scaffold.output import warn
from ts_scaffold.prompts import Prompter

SCOPE_MARKER = "@"


def normalize_scope(scope: str) -> str:
    """'' stays '', '@acme' stays '@acme', 'acme' becomes '@acme'."""
    if not scope or scope.startswith(SCOPE_MARKER):
        return scope
    return SCOPE_MARKER + scope


def is_empty_directory(path: Path) -> bool:
    return not any(path.iterdir())


def confirm_continue(options: Options, prompter: Prompter, *, is_empty: bool) -> bool:
    """Only a non-empty directory without ``--workspace`` needs the user's go-ahead."""
    if is_empty or options.workspace:
        return True
    return prompter.confirm("Current directory is not empty, continue?")


def resolve_workspace(options: Options, prompter: Prompter, *, is_empty: bool, has_manifest: bool) -> str:
    """Path of the workspace to add, or '' when not adding one.

    Adding a workspace needs an existing repository: a non-empty directory
    with a package.json.
    """
    if is_empty:
        if options.workspace:
            warn("ignoring --workspace since the current directory is empty")
        return ""

    if not has_manifest:
        if options.workspace:
            warn("ignoring --workspace since no package.json was found")
        return ""

    if options.workspace:
        return options.workspace

    return prompter.text("Workspace to create (e.g. packages/demoLib)")


def resolve_monorepo(options: Options, prompter: Prompter, *, is_creating_workspace: bool) -> bool:
    if is_creating_workspace:
        if options.monorepo:
            warn("ignoring --monorepo since a workspace is being created")
        return False

    if options.monorepo:
        return True

    return prompter.confirm("Create monorepo?")


def resolve_scope(options: Options, prompter: Prompter, *, optional: bool) -> str:
    if options.scope:
        return normalize_scope(options.scope)

    answer = prompter.text("Scope (optional)" if optional else "Scope")
    if not answer and not optional:
        raise SetupError("Scope is required")
    return normalize_scope(answer)
