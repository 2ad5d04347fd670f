from __future__ import annotations

from pathlib import Path

import pytest

from claude_translator.config import (
    API_KEY_PROPERTY,
    DEFAULT_MODEL,
    MODEL_PROPERTY,
    ClaudeConfig,
    OverwritePolicy,
    build_config,
    resolve_credentials,
)
from claude_translator.errors import ConfigError
from claude_translator.properties import load_properties, save_properties


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.properties"


def test_environment_takes_precedence(config_path: Path, scripted_console) -> None:
    save_properties(config_path, {API_KEY_PROPERTY: "file-key", MODEL_PROPERTY: "file-model"})
    console = scripted_console()
    config = build_config(config_path=config_path)

    credentials = resolve_credentials(
        config, console, environ={"CLAUDE_API_KEY": "env-key", "CLAUDE_MODEL": "env-model"}
    )

    assert credentials.api_key == "env-key"
    assert credentials.model == "env-model"
    assert credentials.source == "environment"
    assert console.asked == []


def test_properties_file_used_when_environment_empty(config_path: Path, scripted_console) -> None:
    save_properties(config_path, {API_KEY_PROPERTY: "file-key", MODEL_PROPERTY: "file-model"})
    config = build_config(config_path=config_path)

    credentials = resolve_credentials(
        config, scripted_console(), environ={"CLAUDE_API_KEY": "", "CLAUDE_MODEL": "  "}
    )

    assert credentials.api_key == "file-key"
    assert credentials.model == "file-model"
    assert credentials.source == "file"


def test_model_defaults_when_unset(config_path: Path, scripted_console) -> None:
    config = build_config(config_path=config_path)

    credentials = resolve_credentials(config, scripted_console(), environ={"CLAUDE_API_KEY": "env-key"})

    assert credentials.model == DEFAULT_MODEL


def test_resolving_credentials_leaves_client_config_alone(config_path: Path, scripted_console) -> None:
    save_properties(config_path, {API_KEY_PROPERTY: "file-key", MODEL_PROPERTY: "file-model"})
    config = build_config(config_path=config_path)

    credentials = resolve_credentials(config, scripted_console(), environ={})

    assert credentials.model == "file-model"
    assert config.claude == ClaudeConfig()
    assert not hasattr(config.claude, "model")


def test_prompted_key_is_persisted_for_next_run(config_path: Path, scripted_console) -> None:
    config = build_config(config_path=config_path)

    first = resolve_credentials(config, scripted_console(answers=["  typed-key  "]), environ={})

    assert first.api_key == "typed-key"
    assert first.source == "prompt"
    assert load_properties(config_path)[API_KEY_PROPERTY] == "typed-key"

    second_console = scripted_console()
    second = resolve_credentials(build_config(config_path=config_path), second_console, environ={})
    assert second.api_key == "typed-key"
    assert second.source == "file"
    assert second_console.asked == []


def test_prompted_key_keeps_other_properties(config_path: Path, scripted_console) -> None:
    save_properties(config_path, {MODEL_PROPERTY: "claude-custom"})
    config = build_config(config_path=config_path)

    credentials = resolve_credentials(config, scripted_console(answers=["typed-key"]), environ={})

    stored = load_properties(config_path)
    assert stored == {MODEL_PROPERTY: "claude-custom", API_KEY_PROPERTY: "typed-key"}
    assert credentials.model == "claude-custom"


def test_skip_policy_leaves_existing_file_untouched(config_path: Path, scripted_console) -> None:
    save_properties(config_path, {MODEL_PROPERTY: "claude-custom"})
    before = config_path.read_text(encoding="utf-8")
    config = build_config(config_path=config_path, on_existing=OverwritePolicy.SKIP)

    credentials = resolve_credentials(config, scripted_console(answers=["typed-key"]), environ={})

    assert credentials.api_key == "typed-key"
    assert config_path.read_text(encoding="utf-8") == before


@pytest.mark.parametrize(("confirmed", "expect_saved"), [(True, True), (False, False)])
def test_prompt_policy_asks_before_overwriting(config_path: Path, scripted_console, confirmed, expect_saved) -> None:
    save_properties(config_path, {MODEL_PROPERTY: "claude-custom"})
    config = build_config(config_path=config_path, on_existing=OverwritePolicy.PROMPT)
    console = scripted_console(answers=["typed-key"], confirmations=[confirmed])

    resolve_credentials(config, console, environ={})

    assert any("Overwrite configuration file" in question for question in console.asked)
    assert (API_KEY_PROPERTY in load_properties(config_path)) is expect_saved


def test_empty_prompted_key_is_rejected(config_path: Path, scripted_console) -> None:
    config = build_config(config_path=config_path)

    with pytest.raises(ConfigError):
        resolve_credentials(config, scripted_console(answers=[""]), environ={})

    assert not config_path.exists()


def test_build_config_applies_cli_overrides(tmp_path: Path) -> None:
    config = build_config(
        config_path=tmp_path / "custom.properties",
        on_existing=OverwritePolicy.PROMPT,
        self_test=False,
        strict_parsing=True,
        verbose=True,
    )

    assert config.config_path == tmp_path / "custom.properties"
    assert config.on_existing is OverwritePolicy.PROMPT
    assert config.self_test is False
    assert config.claude.lenient_parsing is False
    assert config.verbose is True
