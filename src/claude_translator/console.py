"""Line-oriented console input and output shared by the interactive commands."""

from __future__ import annotations

import sys
from typing import Optional

import click


class ConsoleIO:
    """Blocking prompts and styled output on top of click."""

    def echo(self, message: str = "", err: bool = False, fg: Optional[str] = None, bold: bool = False) -> None:
        if fg or bold:
            message = click.style(message, fg=fg, bold=bold)
        click.echo(message, err=err)

    def ask(self, label: str) -> str:
        """Prompt for a single trimmed line; an empty answer is allowed."""
        value = click.prompt(label, default="", show_default=False)
        return value.strip()

    def read_line(self) -> Optional[str]:
        """
        Read one raw line of free-form text, or ``None`` at end of input.

        Ctrl-C is not treated as end of input: ``KeyboardInterrupt`` propagates so the
        caller can cancel instead of sending partial text.
        """
        line = sys.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def confirm(self, question: str, default: bool = False) -> bool:
        return click.confirm(question, default=default)


__all__ = ["ConsoleIO"]
