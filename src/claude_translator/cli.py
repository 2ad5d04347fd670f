from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from .app import TranslatorApp
from .config import DEFAULT_CONFIG_FILE, OverwritePolicy, build_config, resolve_credentials
from .console import ConsoleIO
from .errors import TranslatorError
from .logging_config import configure_logging
from .sdk import ClaudeClientFactory


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="claude-translator", message="Claude Translator %(version)s")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="Properties file holding claude.api.key and claude.model.",
)
@click.option("--skip-self-test", is_flag=True, default=False, help="Do not probe the API before showing the menu.")
@click.option(
    "--on-existing",
    type=click.Choice([policy.value for policy in OverwritePolicy]),
    default=OverwritePolicy.OVERWRITE.value,
    show_default=True,
    help="What to do when the configuration file or a translated file already exists.",
)
@click.option(
    "--strict-parsing",
    is_flag=True,
    default=False,
    help="Report unrecognised API responses as errors instead of scanning the raw body for text.",
)
@click.option("--verbose", is_flag=True, default=False, help="Increase logging verbosity.")
def main(
    config_path: Optional[Path],
    skip_self_test: bool,
    on_existing: str,
    strict_parsing: bool,
    verbose: bool,
) -> None:
    """Translate typed text or files with the Claude API from an interactive menu."""

    logger = configure_logging(verbose=verbose, logger_name="claude_translator.cli")
    config = build_config(
        config_path=config_path,
        on_existing=OverwritePolicy(on_existing),
        self_test=not skip_self_test,
        strict_parsing=strict_parsing,
        verbose=verbose,
    )
    console = ConsoleIO()

    try:
        credentials = resolve_credentials(config, console)
    except (TranslatorError, OSError, ValueError) as exc:
        logger.error("Could not start the translator: %s", exc)
        return
    except click.Abort:
        logger.error("Start-up cancelled before an API key was entered.")
        return

    console.echo(f"Using model: {credentials.model}")

    with ClaudeClientFactory.create(config.claude, credentials) as client:
        if config.self_test:
            client.probe()
        app = TranslatorApp(config=config, client=client, console=console)
        app.run()


if __name__ == "__main__":  # pragma: no cover
    main()
