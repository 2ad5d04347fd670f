"""Exception types raised by the translator outside of the client result channel."""

from __future__ import annotations


class TranslatorError(Exception):
    """Base class for failures the CLI reports instead of a translation."""


class ConfigError(TranslatorError):
    """Raised when credentials or configuration cannot be resolved."""


__all__ = ["TranslatorError", "ConfigError"]
