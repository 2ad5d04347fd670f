from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx
from pydantic import ValidationError

from ..config import (
    DEFAULT_API_URL,
    DEFAULT_API_VERSION,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    PROBE_CONNECT_TIMEOUT,
    PROBE_MAX_TOKENS,
    ClaudeConfig,
    Credentials,
)
from ..prompts import build_translation_prompt
from ..schemas import (
    ErrorKind,
    Message,
    MessagesRequest,
    MessagesResponse,
    ProbeResult,
    TranslationRequest,
    TranslationResult,
)


LOGGER = logging.getLogger("claude_translator.claude")

PARSE_FAILURE_MESSAGE = "Could not parse the API response. Check the API call and response structure."
PROBE_PROMPT = "Say 'hello'"
PROBE_PREVIEW_CHARS = 200
_TEXT_MARKER = '"text"'


@dataclass
class ClaudeClient:
    """Thin synchronous wrapper around the Claude Messages API used for translations."""

    api_key: str
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    lenient_parsing: bool = True
    probe_model: str = DEFAULT_MODEL
    probe_max_tokens: int = PROBE_MAX_TOKENS
    probe_connect_timeout: float = PROBE_CONNECT_TIMEOUT
    http_client: Optional[httpx.Client] = field(default=None, repr=False)
    _owns_client: bool = field(default=False, init=False, repr=False)

    def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        context: Optional[str] = None,
    ) -> TranslationResult:
        request = TranslationRequest(
            text=text,
            source_language=source_language,
            target_language=target_language,
            context=context,
        )
        return self.translate_request(request)

    def translate_request(self, request: TranslationRequest) -> TranslationResult:
        """Send one translation request. Failures come back as tagged results, never as exceptions."""
        prompt = build_translation_prompt(
            request.text,
            request.source_language,
            request.target_language,
            request.context,
        )
        body = MessagesRequest(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[Message(role="user", content=prompt)],
        )

        LOGGER.debug("Sending translation request to %s with model %s", self.api_url, self.model)
        LOGGER.debug("API key (first 5 characters): %s...", self.api_key[:5])
        try:
            response = self._post(body, timeout=self._timeout(self.connect_timeout))
        except Exception as exc:
            LOGGER.exception("Claude API call failed: %s", exc)
            return TranslationResult.failure(ErrorKind.TRANSPORT, f"Error calling the API: {exc}")

        LOGGER.debug("API response status: %s", response.status_code)
        if not response.is_success:
            LOGGER.error("API call failed: %s - %s", response.status_code, response.text)
            return TranslationResult.failure(
                ErrorKind.HTTP_STATUS,
                f"API call failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return self._parse_response(response.text)
        except Exception as exc:
            LOGGER.exception("Error processing the API response: %s", exc)
            return TranslationResult.failure(
                ErrorKind.PARSE,
                f"Error processing the API response: {exc}",
                status_code=response.status_code,
                body=response.text,
            )

    def probe(self) -> ProbeResult:
        """Issue the fixed start-up request against ``probe_model`` and log what came back."""
        body = MessagesRequest(
            model=self.probe_model,
            max_tokens=self.probe_max_tokens,
            messages=[Message(role="user", content=PROBE_PROMPT)],
        )
        LOGGER.info("Testing the API connection...")
        try:
            response = self._post(body, timeout=self._timeout(self.probe_connect_timeout))
        except Exception as exc:
            LOGGER.error("API self-test failed: %s", exc)
            LOGGER.debug("Self-test failure details", exc_info=True)
            return ProbeResult(error=str(exc))

        preview = response.text[:PROBE_PREVIEW_CHARS]
        LOGGER.info("API self-test status: %s", response.status_code)
        LOGGER.info("API self-test response (first %d characters): %s", PROBE_PREVIEW_CHARS, preview)
        return ProbeResult(status_code=response.status_code, body_preview=preview)

    def close(self) -> None:
        if self._owns_client and self.http_client is not None:
            self.http_client.close()
            self.http_client = None
            self._owns_client = False

    def __enter__(self) -> "ClaudeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(self, body: MessagesRequest, timeout: httpx.Timeout) -> httpx.Response:
        client = self._ensure_client()
        return client.post(
            self.api_url,
            content=body.model_dump_json(),
            headers=self._headers(),
            timeout=timeout,
        )

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    def _ensure_client(self) -> httpx.Client:
        if self.http_client is None:
            self.http_client = httpx.Client(timeout=self._timeout(self.connect_timeout))
            self._owns_client = True
        return self.http_client

    @staticmethod
    def _timeout(connect: float) -> httpx.Timeout:
        # Only connection establishment is bounded; reads wait for the model.
        return httpx.Timeout(None, connect=connect)

    def _parse_response(self, raw: str) -> TranslationResult:
        try:
            parsed: Optional[MessagesResponse] = MessagesResponse.model_validate_json(raw)
        except ValidationError as exc:
            LOGGER.debug("Response did not match the Messages schema: %s", exc)
            parsed = None

        if parsed is not None:
            LOGGER.debug("API response keys: %s", sorted(parsed.model_dump(exclude_none=True)))
            if parsed.content is not None:
                LOGGER.debug("Content list size: %d", len(parsed.content))
                if parsed.content:
                    LOGGER.debug("First content element type: %s", type(parsed.content[0]).__name__)
            text = parsed.first_text()
            if text is not None:
                return TranslationResult.success(text)

        LOGGER.debug("Raw API response: %s", raw)
        if self.lenient_parsing:
            scraped = extract_text_marker(raw)
            if scraped is not None:
                LOGGER.warning("Unrecognised response shape; text extracted from the raw body.")
                return TranslationResult.success(scraped)

        return TranslationResult.failure(ErrorKind.PARSE, PARSE_FAILURE_MESSAGE, body=raw)


def extract_text_marker(raw: str) -> Optional[str]:
    """Return the value between the two quotes following the first ``"text"`` marker in *raw*."""
    marker = raw.find(_TEXT_MARKER)
    if marker == -1:
        return None
    opening = raw.find('"', marker + len(_TEXT_MARKER))
    if opening == -1:
        return None
    closing = raw.find('"', opening + 1)
    if closing <= opening + 1:
        return None
    return raw[opening + 1 : closing]


class ClaudeClientFactory:
    """Factory for creating `ClaudeClient` instances from configuration."""

    @staticmethod
    def create(
        config: ClaudeConfig,
        credentials: Credentials,
        http_client: Optional[httpx.Client] = None,
    ) -> ClaudeClient:
        return ClaudeClient(
            api_key=credentials.api_key,
            model=credentials.model,
            max_tokens=config.max_tokens,
            api_url=config.api_url,
            api_version=config.api_version,
            connect_timeout=config.connect_timeout,
            lenient_parsing=config.lenient_parsing,
            probe_model=config.probe_model,
            probe_max_tokens=config.probe_max_tokens,
            probe_connect_timeout=config.probe_connect_timeout,
            http_client=http_client,
        )
