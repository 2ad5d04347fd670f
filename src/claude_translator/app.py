from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import click

from .config import AppConfig
from .console import ConsoleIO
from .files import read_source, translated_output_path, write_translation
from .schemas import TranslationResult
from .sdk.claude_client import ClaudeClient


LOGGER = logging.getLogger("claude_translator.app")

MENU_TITLE = "===== CLAUDE API TRANSLATOR ====="
MENU_OPTIONS = ("1. Translate text", "2. Translate a file", "3. Exit")


@dataclass
class LanguageChoice:
    """Languages and optional context collected from the operator."""

    source_language: str
    target_language: str
    context: Optional[str]


@dataclass
class TranslatorApp:
    """Application context for one interactive session."""

    config: AppConfig
    client: ClaudeClient
    console: ConsoleIO

    def run(self) -> None:
        """Show the menu until the operator exits or input ends."""
        while True:
            self._print_menu()
            try:
                choice = self.console.ask("\nChoose an action (1-3)")
                if choice == "1":
                    self._run_action(self.translate_interactive)
                elif choice == "2":
                    self._run_action(self.translate_file)
                elif choice == "3":
                    self.console.echo("Closing the translator.")
                    break
                else:
                    self.console.echo("Invalid choice. Try again.")
            except click.Abort:
                self.console.echo("")
                break

    def translate_interactive(self) -> Optional[TranslationResult]:
        self.console.echo("\n----- TRANSLATE TEXT -----", bold=True)
        languages = self._ask_languages()

        self.console.echo("\nEnter the text to translate (an empty line finishes):")
        lines = []
        while True:
            line = self.console.read_line()
            if not line:
                break
            lines.append(line)
        source_text = "\n".join(lines).strip()

        if not source_text:
            self.console.echo("Text is empty. Nothing to translate.")
            return None

        self.console.echo("\nTranslating text...")
        result = self._translate(source_text, languages)
        if result.ok:
            self.console.echo("\n----- TRANSLATION -----", bold=True)
            self.console.echo(result.text or "")
        else:
            self._report_failure(result)
        return result

    def translate_file(self) -> Optional[Path]:
        """Translate a whole file and write the result beside it. Returns the written path."""
        self.console.echo("\n----- TRANSLATE FILE -----", bold=True)
        raw_path = self.console.ask("Path to the file")
        path = Path(raw_path).expanduser()
        if not raw_path or not path.is_file():
            self.console.echo(f"File not found: {raw_path}")
            return None

        source_text = read_source(path)
        languages = self._ask_languages()

        self.console.echo("\nTranslating file...")
        result = self._translate(source_text, languages)
        if not result.ok:
            self._report_failure(result)
            return None

        output_path = translated_output_path(path, languages.target_language)
        written = write_translation(output_path, result.text or "", self.config.on_existing, self.console)
        if written is None:
            self.console.echo(f"Translation not saved; {output_path} was left unchanged.")
            return None
        self.console.echo(f"\nTranslation saved to: {written}", fg="green")
        return written

    def _ask_languages(self) -> LanguageChoice:
        source_language = self.console.ask("Source language")
        target_language = self.console.ask("Target language")
        context = self.console.ask("Industry context (leave empty to skip)")
        return LanguageChoice(source_language, target_language, context or None)

    def _translate(self, text: str, languages: LanguageChoice) -> TranslationResult:
        LOGGER.info(
            "Requesting translation %s -> %s (%d characters)",
            languages.source_language,
            languages.target_language,
            len(text),
        )
        return self.client.translate(
            text,
            languages.source_language,
            languages.target_language,
            languages.context,
        )

    def _report_failure(self, result: TranslationResult) -> None:
        kind = result.error.kind.value if result.error else "unknown"
        self.console.echo(f"Translation failed ({kind}): {result}", err=True, fg="red")

    def _run_action(self, action: Callable[[], object]) -> None:
        try:
            action()
        except click.Abort:
            raise
        except KeyboardInterrupt:
            self.console.echo("\nAction cancelled.")
        except Exception as exc:
            LOGGER.exception("Action failed: %s", exc)

    def _print_menu(self) -> None:
        self.console.echo(f"\n{MENU_TITLE}", bold=True)
        for option in MENU_OPTIONS:
            self.console.echo(option)
