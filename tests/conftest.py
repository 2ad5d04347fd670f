from __future__ import annotations

from typing import Iterable, List, Optional

import click
import pytest

from claude_translator.console import ConsoleIO


class ScriptedConsole(ConsoleIO):
    """Console double that replays canned answers and records everything echoed."""

    def __init__(
        self,
        answers: Iterable[str] = (),
        lines: Iterable[object] = (),
        confirmations: Iterable[bool] = (),
    ) -> None:
        self.answers: List[str] = list(answers)
        self.lines: List[object] = list(lines)
        self.confirmations: List[bool] = list(confirmations)
        self.asked: List[str] = []
        self.output: List[str] = []
        self.errors: List[str] = []

    def echo(self, message: str = "", err: bool = False, fg: Optional[str] = None, bold: bool = False) -> None:
        (self.errors if err else self.output).append(message)

    def ask(self, label: str) -> str:
        self.asked.append(label)
        if not self.answers:
            raise click.Abort()
        return self.answers.pop(0).strip()

    def read_line(self) -> Optional[str]:
        if not self.lines:
            return None
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    def confirm(self, question: str, default: bool = False) -> bool:
        self.asked.append(question)
        return self.confirmations.pop(0) if self.confirmations else default

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture()
def scripted_console():
    return ScriptedConsole
