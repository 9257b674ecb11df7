"""Patches applied to the generated tsconfig and eslint configuration."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ts_scaffold import jsonc

Patch = tuple[Sequence[str], Any]

OUT_DIR = "dist"
INCLUDE = ["src"]
PATHS_TARGET = ["../*/src"]

INTERNAL_REGEX_PLACEHOLDER = '// "import/internal-regex": "^@scope/*",'


def tsconfig_patches(scope: str = "", *, skip_setup: bool = False) -> list[Patch]:
    """Edits for a tsconfig document.

    ``outDir`` and ``include`` go on the document tsc builds from; ``skip_setup``
    leaves them out for a tsconfig.json that extends tsconfig.build.json. The
    ``paths`` mapping for ``<scope>/*`` is only added when there is a scope.
    """
    patches: list[Patch] = []
    if not skip_setup:
        patches.append((("compilerOptions", "outDir"), OUT_DIR))
        patches.append((("include",), INCLUDE))
    if scope:
        patches.append((("compilerOptions", "paths", f"{scope}/*"), PATHS_TARGET))
    return patches


def apply_patches(text: str, patches: Iterable[Patch]) -> str:
    # Each patch is computed against the already edited text
    for path, value in patches:
        text = jsonc.set_value(text, path, value)
    return text


def patch_tsconfig(text: str, scope: str = "", *, skip_setup: bool = False) -> str:
    return apply_patches(text, tsconfig_patches(scope, skip_setup=skip_setup))


def enable_internal_regex(text: str, scope: str) -> str:
    """Uncomment the ``import/internal-regex`` setting for ``scope``.

    Returns ``text`` unchanged when there is no scope or the commented line is absent.
    """
    if not scope:
        return text
    return text.replace(INTERNAL_REGEX_PLACEHOLDER, f'"import/internal-regex": "^{scope}/*",', 1)
