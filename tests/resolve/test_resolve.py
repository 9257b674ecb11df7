"""Setup decisions taken from flags first, then from prompts."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes import ScriptedPrompter
from ts_scaffold.errors import SetupError
from ts_scaffold.options import Options
from ts_scaffold.prompts import Prompter
from ts_scaffold.resolve import (
    confirm_continue,
    is_empty_directory,
    normalize_scope,
    resolve_monorepo,
    resolve_scope,
    resolve_workspace,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ""),
        ("@acme", "@acme"),
        ("acme", "@acme"),
        ("@", "@"),
        ("my-org", "@my-org"),
    ],
)
def test_normalize_scope(raw: str, expected: str) -> None:
    assert normalize_scope(raw) == expected


def test_is_empty_directory(tmp_path: Path) -> None:
    assert is_empty_directory(tmp_path)
    (tmp_path / "sub").mkdir()
    assert not is_empty_directory(tmp_path)


class TestContinue_1:
    def test_1_empty_directory_needs_no_confirmation(self) -> None:
        assert confirm_continue(Options(), ScriptedPrompter(), is_empty=True)

    def test_2_workspace_flag_needs_no_confirmation(self) -> None:
        assert confirm_continue(Options(workspace="packages/a"), ScriptedPrompter(), is_empty=False)

    @pytest.mark.parametrize("answer", [True, False])
    def test_3_non_empty_directory_asks(self, answer: bool) -> None:
        prompter = ScriptedPrompter(answer)
        assert confirm_continue(Options(), prompter, is_empty=False) is answer
        assert prompter.questions == ["Current directory is not empty, continue?"]


class TestWorkspace_2:
    def test_1_empty_directory_ignores_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        result = resolve_workspace(
            Options(workspace="packages/a"), ScriptedPrompter(), is_empty=True, has_manifest=False
        )

        assert result == ""
        assert "ignoring --workspace since the current directory is empty" in capsys.readouterr().err

    def test_2_no_manifest_ignores_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        result = resolve_workspace(
            Options(workspace="packages/a"), ScriptedPrompter(), is_empty=False, has_manifest=False
        )

        assert result == ""
        assert "no package.json was found" in capsys.readouterr().err

    def test_3_no_manifest_does_not_prompt(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert resolve_workspace(Options(), ScriptedPrompter(), is_empty=False, has_manifest=False) == ""
        assert capsys.readouterr().err == ""

    def test_4_flag_wins_over_prompt(self) -> None:
        result = resolve_workspace(
            Options(workspace="packages/a"), ScriptedPrompter(), is_empty=False, has_manifest=True
        )
        assert result == "packages/a"

    def test_5_prompted_when_repository_exists(self) -> None:
        prompter = ScriptedPrompter("packages/b")
        assert resolve_workspace(Options(), prompter, is_empty=False, has_manifest=True) == "packages/b"
        assert prompter.questions == ["Workspace to create (e.g. packages/demoLib)"]


class TestMonorepo_3:
    def test_1_creating_workspace_forces_false(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert not resolve_monorepo(Options(monorepo=True), ScriptedPrompter(), is_creating_workspace=True)
        assert "ignoring --monorepo" in capsys.readouterr().err

    def test_2_flag(self) -> None:
        assert resolve_monorepo(Options(monorepo=True), ScriptedPrompter(), is_creating_workspace=False)

    def test_3_prompted(self) -> None:
        prompter = ScriptedPrompter(True)
        assert resolve_monorepo(Options(), prompter, is_creating_workspace=False)
        assert prompter.questions == ["Create monorepo?"]


class TestScope_4:
    def test_1_flag_is_normalized_and_not_prompted(self) -> None:
        assert resolve_scope(Options(scope="acme"), ScriptedPrompter(), optional=False) == "@acme"

    def test_2_required_scope_declined(self) -> None:
        with pytest.raises(SetupError, match="Scope is required"):
            resolve_scope(Options(), ScriptedPrompter(""), optional=False)

    def test_3_optional_scope_declined(self) -> None:
        prompter = ScriptedPrompter("")
        assert resolve_scope(Options(), prompter, optional=True) == ""
        assert prompter.questions == ["Scope (optional)"]

    def test_4_prompted_scope_is_normalized(self) -> None:
        assert resolve_scope(Options(), ScriptedPrompter("acme"), optional=False) == "@acme"


class TestPrompter_5:
    @pytest.mark.parametrize(
        ("answer", "expected"),
        [("y", True), ("YES", True), (" y ", True), ("", False), ("n", False)],
    )
    def test_1_confirm(self, answer: str, expected: bool) -> None:
        assert Prompter(lambda _: answer).confirm("Continue?") is expected

    def test_2_text_is_stripped(self) -> None:
        assert Prompter(lambda _: "  packages/a \n").text("Workspace") == "packages/a"

    def test_3_end_of_input_declines(self, capsys: pytest.CaptureFixture[str]) -> None:
        def closed(_: str) -> str:
            raise EOFError

        assert Prompter(closed).confirm("Continue?") is False
        assert Prompter(closed).text("Scope") == ""

    def test_4_question_is_shown(self) -> None:
        asked: list[str] = []

        def record(question: str) -> str:
            asked.append(question)
            return ""

        Prompter(record).confirm("Create monorepo?")
        Prompter(record).text("Scope (optional)")
        assert asked == ["? Create monorepo? [y/N] ", "? Scope (optional): "]
