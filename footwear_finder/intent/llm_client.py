"""Gemini `generateContent` client.

The user's text is sent as-is; the model is expected to answer with prose that contains one JSON
object describing the product query. This module only performs the call and returns the reply text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from footwear_finder.config.settings import (
    DEFAULT_GEMINI_API_BASE,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_LLM_TIMEOUT_S,
    Settings,
)


class AnalysisError(RuntimeError):
    """Base class for Analysis Gateway failures."""


class EmptyInputError(AnalysisError):
    """Raised when there is no text to analyze."""


class UpstreamError(AnalysisError):
    """Base class for failures attributable to the generation service."""


class UpstreamCallError(UpstreamError):
    """Raised when the outbound call fails (network, auth, non-2xx)."""


class UpstreamParseError(UpstreamError):
    """Raised when the service reply does not contain a usable JSON object."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the Gemini API call."""

    api_key: str
    model: str = DEFAULT_GEMINI_MODEL
    api_base: str = DEFAULT_GEMINI_API_BASE
    timeout_s: float = DEFAULT_LLM_TIMEOUT_S


def llm_config_from_settings(settings: Settings) -> LLMConfig:
    """Build the Gemini config from application settings."""

    return LLMConfig(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        api_base=settings.gemini_api_base,
        timeout_s=settings.llm_timeout_s,
    )


def _generate_content_url(config: LLMConfig) -> str:
    return f"{config.api_base.rstrip('/')}/models/{config.model}:generateContent"


def _reply_text(decoded: Any) -> str:
    try:
        text = decoded["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamParseError("Unexpected Gemini response format") from exc
    if not isinstance(text, str):
        raise UpstreamParseError("Gemini reply text is not a string")
    return text


async def generate_text(user_text: str, *, client: httpx.AsyncClient, config: LLMConfig) -> str:
    """Send `user_text` to Gemini and return the first candidate's text.

    Raises:
        UpstreamCallError: On transport errors, timeouts and non-2xx responses.
        UpstreamParseError: If the response body does not have the expected shape.
    """

    payload = {"contents": [{"parts": [{"text": user_text}]}]}

    try:
        resp = await client.post(
            _generate_content_url(config),
            json=payload,
            headers={"x-goog-api-key": config.api_key},
            timeout=config.timeout_s,
        )
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise UpstreamCallError(f"Gemini HTTP error: {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise UpstreamCallError(f"Gemini connection error: {type(exc).__name__}") from exc

    try:
        decoded = resp.json()
    except ValueError as exc:
        raise UpstreamParseError("Gemini response is not JSON") from exc

    return _reply_text(decoded)
