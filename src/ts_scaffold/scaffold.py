"""Scaffold a TypeScript package, a workspace member, or a whole monorepo.

A run first resolves a :class:`Setup` from flags and prompts, without touching
the disk. It then builds one ordered list of :class:`Step` objects and executes
them one after the other. Any failing step stops the run: nothing is retried
or rolled back.
"""

from __future__ import annotations

import enum
import json
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import NamedTuple

from ts_scaffold.config_patch import enable_internal_regex, patch_tsconfig
from ts_scaffold.copier import copy_files
from ts_scaffold.errors import SetupError
from ts_scaffold.options import Options
from ts_scaffold.output import error, info
from ts_scaffold.prompts import Prompter
from ts_scaffold.resolve import (
    confirm_continue,
    is_empty_directory,
    resolve_monorepo,
    resolve_scope,
    resolve_workspace,
)
from ts_scaffold.runner import Runner

NPM = "npm"
MANIFEST = "package.json"
ESLINT_CONFIG = ".eslintrc.cjs"
SCOPE_PLACEHOLDER = "{{SCOPEPREFIX}}"

LINT_PLUGINS = (
    "eslint-plugin-prettier",
    "eslint-config-prettier",
    "eslint-config-xo",
    "eslint-config-xo-typescript",
    "@typescript-eslint/parser",
    "@typescript-eslint/eslint-plugin",
    "eslint-plugin-unicorn",
    "eslint-plugin-import",
    "eslint-import-resolver-typescript",
)
BASE_TSCONFIG = "@sindresorhus/tsconfig"

LINT_SCRIPT = "npx eslint ."
BUILD_SCRIPT = "tsc"
WORKSPACE_BUILD_SCRIPT = "tsc --project tsconfig.build.json"
TEST_SCRIPT = "vitest run"
TEST_WATCH_SCRIPT = "vitest watch"
MAIN_ENTRY = "dist/src/index.js"
TYPES_ENTRY = "dist/src/index.d.ts"

# Order matters: build before lint and test at the repository root
ROOT_SCRIPTS = ("build", "lint", "test")


class Mode(enum.Enum):
    SINGLE = "single"
    ADD_WORKSPACE = "add-workspace"
    MONOREPO = "monorepo"


@dataclass(frozen=True)
class Setup:
    mode: Mode
    scope: str = ""
    workspace: str = ""


@dataclass(frozen=True)
class CodeTemplates:
    """Source and test template paths, relative to the ``code`` template region."""

    source: str
    test: str


LIBRARY = CodeTemplates("src/index.ts", "test/index.test.ts")
APPLICATION = CodeTemplates("src/main.ts", "test/main.test.ts")

MONOREPO_MEMBERS = (
    ("packages/lib", LIBRARY),
    ("packages/app", APPLICATION),
)


@dataclass(frozen=True)
class Package:
    """One package to provision. ``workspace`` is '' outside a multi-package repository."""

    directory: Path
    workspace: str = ""
    source_file: str = LIBRARY.source
    test_file: str = LIBRARY.test
    license: str = ""

    @property
    def selector(self) -> tuple[str, ...]:
        return ("-w", self.workspace) if self.workspace else ()


class Step(NamedTuple):
    name: str
    action: Callable[[], object]


def read_license(manifest: Path) -> str:
    """The ``license`` field of a package.json, or '' when it has none."""
    try:
        data = json.loads(manifest.read_text())
    except (OSError, ValueError):
        error(
            "There was an error copying license from the root package.json, "
            "please check child packages manually if needed"
        )
        return ""
    value = data.get("license") if isinstance(data, dict) else None
    return value if isinstance(value, str) else ""


class Scaffolder:
    def __init__(self, options: Options, runner: Runner, prompter: Prompter) -> None:
        self.options = options
        self.runner = runner
        self.prompter = prompter
        self.cwd = options.cwd
        self.templates = options.templates_dir
        self.root_license = ""

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def resolve(self) -> Setup | None:
        """Ask every question up front. Returns None when the user chose not to continue."""
        is_empty = is_empty_directory(self.cwd)
        if not confirm_continue(self.options, self.prompter, is_empty=is_empty):
            return None

        workspace = resolve_workspace(
            self.options,
            self.prompter,
            is_empty=is_empty,
            has_manifest=(self.cwd / MANIFEST).is_file(),
        )
        is_creating_workspace = bool(workspace)
        if is_creating_workspace:
            self.check_root_tooling()

        is_monorepo = resolve_monorepo(self.options, self.prompter, is_creating_workspace=is_creating_workspace)
        scope = resolve_scope(self.options, self.prompter, optional=is_monorepo or is_creating_workspace)

        if is_creating_workspace:
            return Setup(Mode.ADD_WORKSPACE, scope, workspace)
        if is_monorepo:
            return Setup(Mode.MONOREPO, scope)
        return Setup(Mode.SINGLE, scope)

    def check_root_tooling(self) -> None:
        if not (self.cwd / ESLINT_CONFIG).is_file():
            raise SetupError(
                f"no {ESLINT_CONFIG} in {self.cwd}, so the shared lint and format tooling is missing. "
                "Run ts-scaffold without --workspace in the repository root first."
            )

    # ------------------------------------------------------------------
    # Plan
    # ------------------------------------------------------------------

    def steps(self, setup: Setup) -> list[Step]:
        steps = [Step("ensure package.json", partial(self.ensure_manifest, setup.scope))]
        if setup.mode is not Mode.ADD_WORKSPACE:
            steps.extend(self.root_tooling_steps())
        steps.append(Step("read root license", self.read_root_license))

        if setup.mode is Mode.SINGLE:
            steps.append(Step("provision package", partial(self.provision_root, setup.scope)))
            return steps

        if setup.mode is Mode.MONOREPO:
            steps.extend(self.monorepo_steps(setup))
        else:
            steps.extend(self.add_workspace_steps(setup))
        steps.append(Step("report missing license", self.report_missing_license))
        return steps

    def root_tooling_steps(self) -> list[Step]:
        return [
            Step("copy root files", partial(copy_files, self.templates / "root", self.cwd)),
            Step("install lint and format plugins", partial(self.npm, "install", "--save-dev", *LINT_PLUGINS)),
            Step("install prettier", partial(self.npm, "install", "--save-dev", "--save-exact", "prettier")),
            Step("install base tsconfig", partial(self.npm, "install", "--save-dev", BASE_TSCONFIG)),
        ]

    def add_workspace_steps(self, setup: Setup) -> list[Step]:
        path = setup.workspace
        return [
            Step(f"create workspace {path}", partial(self.create_member, path, setup.scope)),
            Step(f"provision {path}", partial(self.provision_member, path, LIBRARY, setup.scope)),
            *self.root_check_steps(),
        ]

    def monorepo_steps(self, setup: Setup) -> list[Step]:
        steps = [
            Step("enable import/internal-regex", partial(self.patch_eslint_config, setup.scope)),
            Step(
                "install shared tooling",
                partial(self.npm, "install", "--save-dev", "typescript", BASE_TSCONFIG),
            ),
        ]
        for path, templates in MONOREPO_MEMBERS:
            steps.append(Step(f"create workspace {path}", partial(self.create_member, path, setup.scope)))
            steps.append(Step(f"provision {path}", partial(self.provision_member, path, templates, setup.scope)))
        for script in ROOT_SCRIPTS:
            steps.append(
                Step(
                    f"set root {script} script",
                    partial(self.npm, "pkg", "set", f"scripts.{script}=npm run {script} -ws"),
                )
            )
        steps.extend(self.root_check_steps())
        return steps

    def root_check_steps(self) -> list[Step]:
        return [Step(f"run root {script}", partial(self.npm, "run", script)) for script in ROOT_SCRIPTS]

    def package_steps(self, package: Package, scope: str) -> list[Step]:
        """Ordered steps that provision one package, ending with its own lint, build and test."""
        ws = package.selector
        build_script = WORKSPACE_BUILD_SCRIPT if package.workspace else BUILD_SCRIPT

        steps: list[Step] = []
        if package.license:
            steps.append(Step("set license", partial(self.npm, "pkg", "set", f"license={package.license}", *ws)))
        steps.extend(
            [
                Step(
                    "install typescript and eslint",
                    partial(self.npm, "install", *ws, "--save-dev", "typescript", "eslint"),
                ),
                Step(
                    "install test dependencies",
                    partial(self.npm, "install", *ws, "--save-dev", "vitest", "vite-tsconfig-paths"),
                ),
                Step("copy common files", partial(copy_files, self.templates / "common", package.directory)),
            ]
        )
        if package.workspace:
            steps.append(Step("copy package files", partial(copy_files, self.templates / "package", package.directory)))
        steps.extend(
            [
                Step("copy source and test files", partial(self.copy_code, package, scope)),
                Step("patch tsconfig", partial(self.patch_tsconfigs, package, scope)),
                Step("set lint script", partial(self.npm, "pkg", "set", f"scripts.lint={LINT_SCRIPT}", *ws)),
                Step("set build script", partial(self.npm, "pkg", "set", f"scripts.build={build_script}", *ws)),
                Step("set test script", partial(self.npm, "pkg", "set", f"scripts.test={TEST_SCRIPT}", *ws)),
                Step(
                    "set test:watch script",
                    partial(self.npm, "pkg", "set", f"scripts.test:watch={TEST_WATCH_SCRIPT}", *ws),
                ),
                Step("set main", partial(self.npm, "pkg", "set", f"main={MAIN_ENTRY}", *ws)),
                Step("set types", partial(self.npm, "pkg", "set", f"types={TYPES_ENTRY}", *ws)),
                Step("set module type", partial(self.set_module_type, *ws)),
                Step("run lint", partial(self.npm, "run", "lint", *ws)),
                Step("run build", partial(self.npm, "run", "build", *ws)),
                Step("run test", partial(self.npm, "run", "test", *ws)),
            ]
        )
        return steps

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self) -> int:
        setup = self.resolve()
        if setup is None:
            info("Exiting...")
            return 0

        for step in self.steps(setup):
            step.action()
        return 0

    def provision(self, package: Package, scope: str) -> None:
        info(f"provisioning {package.workspace or package.directory}")
        for step in self.package_steps(package, scope):
            step.action()

    def provision_root(self, scope: str) -> None:
        self.provision(Package(self.cwd, license=self.root_license), scope)

    def provision_member(self, path: str, templates: CodeTemplates, scope: str) -> None:
        package = Package(
            directory=self.cwd / path,
            workspace=path,
            source_file=templates.source,
            test_file=templates.test,
            license=self.root_license,
        )
        self.provision(package, scope)

    def npm(self, *args: str) -> None:
        self.runner.run(NPM, *args)

    def set_module_type(self, *selector: str) -> None:
        self.npm("pkg", "set", "type=module", *selector)

    def ensure_manifest(self, scope: str) -> None:
        if (self.cwd / MANIFEST).is_file():
            info(f"{MANIFEST} found, continuing...")
        else:
            scope_args = (f"--scope={scope}",) if scope else ()
            yes_args = ("-y",) if self.options.yes else ()
            self.npm("init", *scope_args, *yes_args)
        self.set_module_type()

    def read_root_license(self) -> None:
        self.root_license = read_license(self.cwd / MANIFEST)

    def report_missing_license(self) -> None:
        if not self.root_license:
            error("No license found in root package.json, please check child packages manually if needed")

    def create_member(self, path: str, scope: str) -> None:
        scope_args = (f"--scope={scope}",) if scope else ()
        self.npm("init", "-y", "-w", path, *scope_args)

    def patch_eslint_config(self, scope: str) -> None:
        config = self.cwd / ESLINT_CONFIG
        config.write_text(enable_internal_regex(config.read_text(), scope))

    def copy_code(self, package: Package, scope: str) -> None:
        code_dir = self.templates / "code"
        src_dir = package.directory / "src"
        test_dir = package.directory / "test"
        src_dir.mkdir(parents=True, exist_ok=True)
        test_dir.mkdir(parents=True, exist_ok=True)

        index = src_dir / "index.ts"
        shutil.copyfile(code_dir / package.source_file, index)
        shutil.copyfile(code_dir / package.test_file, test_dir / "index.test.ts")

        prefix = f"{scope}/" if scope else ""
        index.write_text(index.read_text().replace(SCOPE_PLACEHOLDER, prefix))

    def patch_tsconfigs(self, package: Package, scope: str) -> None:
        if package.workspace:
            # tsconfig.json extends tsconfig.build.json: build settings go on the
            # build file, the paths mapping on the extending file
            self._rewrite_tsconfig(package.directory / "tsconfig.build.json")
            if scope:
                self._rewrite_tsconfig(package.directory / "tsconfig.json", scope, skip_setup=True)
        else:
            self._rewrite_tsconfig(package.directory / "tsconfig.json", scope)

    def _rewrite_tsconfig(self, path: Path, scope: str = "", *, skip_setup: bool = False) -> None:
        path.write_text(patch_tsconfig(path.read_text(), scope, skip_setup=skip_setup))
