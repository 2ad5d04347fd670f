"""Prompt templates for translation requests."""

from __future__ import annotations

from typing import Optional


CONTEXT_GUIDANCE = (
    "Use terminology appropriate to this field. "
    "Preserve the tone and style of the original text. "
    "Translate all specialist terms precisely."
)
CLOSING_INSTRUCTION = (
    "Reply with the translated text only, without any additional explanations or comments."
)


def build_translation_prompt(
    text: str,
    source_language: str,
    target_language: str,
    context: Optional[str] = None,
) -> str:
    """Assemble the user message sent to the model for a single translation."""
    parts = [f"Translate the following text from {source_language} to {target_language}.\n\n"]

    if context and context.strip():
        parts.append(f"Context: {context}\n\n")
        parts.append(f"{CONTEXT_GUIDANCE}\n\n")

    parts.append(f"Text to translate:\n{text}\n\n")
    parts.append(CLOSING_INSTRUCTION)
    return "".join(parts)


__all__ = ["build_translation_prompt", "CLOSING_INSTRUCTION", "CONTEXT_GUIDANCE"]
