"""Analysis Gateway: free text -> Gemini -> `QueryIntent`."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from footwear_finder.intent.extract import extract_json_object
from footwear_finder.intent.llm_client import (
    EmptyInputError,
    LLMConfig,
    UpstreamParseError,
    generate_text,
)
from footwear_finder.intent.schema import QueryIntent, intent_from_obj

logger = logging.getLogger(__name__)


async def analyze_text(
        text: str | None,
        *,
        client: httpx.AsyncClient,
        config: LLMConfig,
) -> QueryIntent:
    """Turn the user's free text into a validated `QueryIntent`.

    Steps:
        1) Reject missing/blank input before any outbound call.
        2) Ask Gemini about the text and take the first JSON object in its reply.
        3) Decode that object tolerantly (missing fields -> absent/defaults).

    Raises:
        EmptyInputError: If `text` is missing or blank.
        UpstreamCallError: If the Gemini call fails.
        UpstreamParseError: If the reply has no usable JSON object.
    """

    if text is None or not text.strip():
        raise EmptyInputError("No text provided")

    reply = await generate_text(text, client=client, config=config)

    obj = extract_json_object(reply)
    if obj is None:
        raise UpstreamParseError("Gemini reply contains no JSON object")

    try:
        intent = intent_from_obj(obj)
    except ValidationError as exc:
        raise UpstreamParseError(f"Gemini JSON has invalid fields: {exc.error_count()} error(s)") from exc

    logger.debug("parsed intent %s", intent.model_dump())
    return intent
