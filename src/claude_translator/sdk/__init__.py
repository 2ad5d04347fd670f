"""
HTTP glue for the Claude Messages API.

The client returns tagged :class:`~claude_translator.schemas.TranslationResult`
values instead of raising, so the interactive menu can branch on the outcome.
"""

from .claude_client import ClaudeClient, ClaudeClientFactory, extract_text_marker

__all__ = ["ClaudeClient", "ClaudeClientFactory", "extract_text_marker"]
