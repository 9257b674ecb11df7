"""Interactive questions, answered on the terminal."""

from __future__ import annotations

from collections.abc import Callable


class Prompter:
    """Asks yes/no and free-text questions. End of input counts as declining."""

    def __init__(self, input_func: Callable[[str], str] = input) -> None:
        self._input = input_func

    def confirm(self, question: str) -> bool:
        try:
            answer = self._input(f"? {question} [y/N] ")
        except EOFError:
            print()
            return False
        return answer.strip().lower() in ("y", "yes")

    def text(self, question: str) -> str:
        try:
            answer = self._input(f"? {question}: ")
        except EOFError:
            print()
            return ""
        return answer.strip()
