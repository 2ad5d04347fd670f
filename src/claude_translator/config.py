from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from .console import ConsoleIO
from .errors import ConfigError
from .properties import load_properties, save_properties


LOGGER = logging.getLogger("claude_translator.config")

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_MAX_TOKENS = 1000
DEFAULT_CONNECT_TIMEOUT = 30.0
PROBE_MAX_TOKENS = 100
PROBE_CONNECT_TIMEOUT = 10.0
DEFAULT_CONFIG_FILE = "config.properties"
CONFIG_FILE_COMMENT = "Claude API Configuration"
API_KEY_PROPERTY = "claude.api.key"
MODEL_PROPERTY = "claude.model"


class OverwritePolicy(str, Enum):
    """What to do when a file we are about to write already exists."""

    OVERWRITE = "overwrite"
    PROMPT = "prompt"
    SKIP = "skip"


@dataclass
class ClaudeConfig:
    """Configuration describing how the client calls the Claude Messages API."""

    max_tokens: int = DEFAULT_MAX_TOKENS
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    probe_model: str = DEFAULT_MODEL
    probe_max_tokens: int = PROBE_MAX_TOKENS
    probe_connect_timeout: float = PROBE_CONNECT_TIMEOUT
    lenient_parsing: bool = True
    api_key_env: str = "CLAUDE_API_KEY"
    model_env: str = "CLAUDE_MODEL"


@dataclass
class AppConfig:
    """Top level configuration consumed by the CLI and the interactive session."""

    config_path: Path = field(default_factory=lambda: Path(DEFAULT_CONFIG_FILE))
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    on_existing: OverwritePolicy = OverwritePolicy.OVERWRITE
    self_test: bool = True
    verbose: bool = False


@dataclass(frozen=True)
class Credentials:
    """API key and model resolved for the lifetime of the process."""

    api_key: str
    model: str
    source: str


def build_config(
    config_path: Optional[Path] = None,
    on_existing: OverwritePolicy = OverwritePolicy.OVERWRITE,
    self_test: bool = True,
    strict_parsing: bool = False,
    verbose: bool = False,
) -> AppConfig:
    """Return an :class:`AppConfig` with CLI overrides applied on top of the defaults."""
    config = AppConfig(on_existing=OverwritePolicy(on_existing), self_test=self_test, verbose=verbose)
    if config_path is not None:
        config.config_path = Path(config_path).expanduser()
    config.claude.lenient_parsing = not strict_parsing
    return config


def resolve_credentials(
    config: AppConfig,
    console: ConsoleIO,
    environ: Optional[Mapping[str, str]] = None,
) -> Credentials:
    """
    Resolve the API key and model.

    The key comes from the environment, then the properties file, then an
    interactive prompt; a prompted key is written back to the properties file.
    The model comes from the environment, then the file, then the default.
    """
    env = os.environ if environ is None else environ
    properties = load_properties(config.config_path)

    model = (
        _non_empty(env.get(config.claude.model_env))
        or _non_empty(properties.get(MODEL_PROPERTY))
        or DEFAULT_MODEL
    )

    api_key = _non_empty(env.get(config.claude.api_key_env))
    source = "environment"
    if api_key is None:
        api_key = _non_empty(properties.get(API_KEY_PROPERTY))
        source = "file"
    if api_key is None:
        console.echo("No API key found. Enter your Claude API key:")
        api_key = _non_empty(console.ask("API key"))
        if api_key is None:
            raise ConfigError("An API key is required to call the Claude API.")
        source = "prompt"
        properties[API_KEY_PROPERTY] = api_key
        persist_properties(config, properties, console)

    LOGGER.debug("API key resolved from %s", source)
    return Credentials(api_key=api_key, model=model, source=source)


def persist_properties(config: AppConfig, properties: Dict[str, str], console: ConsoleIO) -> bool:
    """Write *properties* to the configured file, honouring the overwrite policy."""
    path = config.config_path
    if path.exists():
        if config.on_existing is OverwritePolicy.SKIP:
            LOGGER.warning("Configuration file %s exists; leaving it unchanged.", path)
            return False
        if config.on_existing is OverwritePolicy.PROMPT and not console.confirm(
            f"Overwrite configuration file {path}?"
        ):
            LOGGER.info("Configuration file %s left unchanged.", path)
            return False
    save_properties(path, properties, comment=CONFIG_FILE_COMMENT)
    LOGGER.info("API key saved to %s", path)
    return True


def _non_empty(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
