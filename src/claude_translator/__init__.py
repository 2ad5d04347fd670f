"""
Claude Translator - interactive command-line translator backed by the Claude Messages API.

This package exposes the CLI entrypoint, the translation client and the
credential handling used by the interactive menu.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("claude-translator")
except PackageNotFoundError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.0.0"

__all__ = ["__version__"]
