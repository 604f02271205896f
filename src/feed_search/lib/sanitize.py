"""Text sanitization for caller queries and AI provider output.

``sanitize_query`` is strict: it validates length, strips all markup and
HTML-escapes what is left, because the result is echoed back and stored.
``sanitize_api_text`` is lenient: it never raises and only removes control
characters and ``<script>`` blocks, because provider text is display content.
"""

import re

from ..errors import InvalidInput, QueryTooLong, QueryTooShort

MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 500

DEFAULT_TEXT_LENGTH = 2000
TRUNCATION_MARKER = "..."

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_SCRIPT_BLOCKS = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE)
_TAGS = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")

# Order matters: "&" must be escaped first.
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
)


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def sanitize_query(value) -> str:
    """Validate and clean a caller-supplied search query.

    Raises ``InvalidInput`` for non-string or empty input, ``QueryTooShort``
    and ``QueryTooLong`` when the trimmed query is outside 2..500 characters.
    """
    if not value or not isinstance(value, str):
        raise InvalidInput()

    text = value.strip()
    if len(text) < MIN_QUERY_LENGTH:
        raise QueryTooShort()
    if len(text) > MAX_QUERY_LENGTH:
        raise QueryTooLong()

    text = _CONTROL_CHARS.sub("", text)
    text = _SCRIPT_BLOCKS.sub("", text)
    text = _TAGS.sub("", text)
    text = _collapse_whitespace(text)

    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def sanitize_api_text(value, max_length: int = DEFAULT_TEXT_LENGTH) -> str:
    """Clean a piece of provider output for display.

    Non-string or empty values become ``""``.  Text longer than *max_length*
    is cut and suffixed with ``...``.
    """
    if not value or not isinstance(value, str):
        return ""

    text = value.strip()
    if len(text) > max_length:
        text = text[:max_length] + TRUNCATION_MARKER

    text = _CONTROL_CHARS.sub("", text)
    text = _SCRIPT_BLOCKS.sub("", text)
    return _collapse_whitespace(text)
