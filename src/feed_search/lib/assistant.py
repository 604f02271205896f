"""Chat-completion helpers for content analysis and post ideas."""

import json
import logging
from typing import Any

from ..config import get_chat_model
from ..errors import (
    EmptyProviderResponse,
    InvalidInput,
    ProviderUnconfigured,
    translate_provider_error,
)

logger = logging.getLogger(__name__)

NO_ANALYSIS = "No analysis available"


def _message_content(resp: Any) -> str | None:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


def _flatten_strings(values) -> list[str]:
    out: list[str] = []
    for value in values:
        if isinstance(value, list):
            out.extend(_flatten_strings(value))
        elif isinstance(value, str):
            out.append(value)
    return out


def parse_suggestions(content: str) -> list[str]:
    """Read suggestions from ``suggestions``, ``ideas`` or any list of strings."""
    try:
        parsed = json.loads(content)
    except ValueError:
        logger.warning("Suggestion reply is not valid JSON")
        return []

    if isinstance(parsed, list):
        return _flatten_strings(parsed)
    if not isinstance(parsed, dict):
        return []
    for key in ("suggestions", "ideas"):
        if isinstance(parsed.get(key), list):
            return _flatten_strings(parsed[key])
    return _flatten_strings(parsed.values())


async def analyze_content(client: Any | None, content: str, *, model: str | None = None) -> str:
    """Summarize *content* and list its key topics."""
    if client is None:
        raise ProviderUnconfigured()
    if not isinstance(content, str) or not content.strip():
        raise InvalidInput("Content is required")

    try:
        resp = await client.chat.completions.create(
            model=model or get_chat_model(),
            messages=[
                {
                    "role": "system",
                    "content": "You are a content analyzer that provides insights about text content.",
                },
                {
                    "role": "user",
                    "content": (
                        "Analyze the following content and provide a brief summary "
                        f"and key topics:\n\n{content}"
                    ),
                },
            ],
            temperature=0.5,
            max_tokens=300,
        )
    except Exception as exc:
        logger.exception("Content analysis failed")
        raise translate_provider_error(exc, "Error analyzing content") from exc

    return _message_content(resp) or NO_ANALYSIS


async def generate_content_suggestions(
    client: Any | None, topic: str, *, model: str | None = None
) -> list[str]:
    """Ask for five post ideas about *topic*."""
    if client is None:
        raise ProviderUnconfigured()
    if not isinstance(topic, str) or not topic.strip():
        raise InvalidInput("Topic is required")

    try:
        resp = await client.chat.completions.create(
            model=model or get_chat_model(),
            messages=[
                {"role": "system", "content": "You are a creative content suggestion assistant."},
                {
                    "role": "user",
                    "content": (
                        f"Generate 5 engaging post ideas about: {topic.strip()}. "
                        'Return a JSON object with a "suggestions" array of strings.'
                    ),
                },
            ],
            temperature=0.8,
            max_tokens=500,
            response_format={"type": "json_object"},
        )
    except Exception as exc:
        logger.exception("Suggestion generation failed")
        raise translate_provider_error(exc, "Error generating suggestions") from exc

    content = _message_content(resp)
    if not content:
        raise EmptyProviderResponse("No response from AI")
    return parse_suggestions(content)
