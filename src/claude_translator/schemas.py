"""Wire models for the Claude Messages API and the translation result envelope."""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranslationRequest(BaseModel):
    """Operator-supplied inputs for one translation."""

    text: str = Field(..., description="Source text, any length.")
    source_language: str = Field(..., description="Free-text source language name.")
    target_language: str = Field(..., description="Free-text target language name.")
    context: Optional[str] = Field(
        default=None,
        description="Optional industry or style hint appended to the prompt.",
    )


class Message(BaseModel):
    role: str = "user"
    content: str


class MessagesRequest(BaseModel):
    """Request body POSTed to the Messages endpoint."""

    model: str
    max_tokens: int
    messages: List[Message]


class MessagesResponse(BaseModel):
    """
    Successful Messages API response.

    Only ``content`` drives parsing. Metadata fields are typed loosely so an odd value
    there never hides a usable translation.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    type: Optional[Any] = None
    role: Optional[Any] = None
    model: Optional[Any] = None
    stop_reason: Optional[Any] = None
    usage: Optional[Any] = None
    content: Optional[List[Any]] = None

    def first_text(self) -> Optional[str]:
        """Return the text of the first content element, or ``None`` if the shape is unrecognised."""
        if not self.content:
            return None
        first = self.content[0]
        if isinstance(first, dict):
            # Content block: only its text field matters.
            text = first.get("text")
            if text is None:
                return None
            return text if isinstance(text, str) else str(text)
        if isinstance(first, str):
            return first
        return None


class ErrorKind(str, Enum):
    """Why a translation did not produce text."""

    HTTP_STATUS = "http_status"
    TRANSPORT = "transport"
    PARSE = "parse"


class TranslationError(BaseModel):
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    body: Optional[str] = None


class TranslationResult(BaseModel):
    """Outcome of one translation call: either text or a typed error."""

    text: Optional[str] = None
    error: Optional[TranslationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "TranslationResult":
        return cls(text=text)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> "TranslationResult":
        return cls(error=TranslationError(kind=kind, message=message, status_code=status_code, body=body))

    def __str__(self) -> str:
        if self.error is not None:
            return self.error.message
        return self.text or ""


class ProbeResult(BaseModel):
    """Outcome of the start-up connectivity check."""

    status_code: Optional[int] = None
    body_preview: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code is not None and 200 <= self.status_code < 300
