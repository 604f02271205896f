"""Error taxonomy for the search engine.

Every failure that reaches a caller is a :class:`SearchError` subclass with a
stable, user-facing message and the HTTP status the routers should use.  Raw
provider exceptions are never surfaced directly.
"""


class SearchError(Exception):
    """Base class for all search-engine failures."""

    status_code: int = 500
    default_message: str = "Search failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(SearchError):
    status_code = 400
    default_message = "Invalid input: query must be a non-empty string"


class QueryTooShort(InvalidInput):
    default_message = "Query too short: minimum 2 characters required"


class QueryTooLong(InvalidInput):
    default_message = "Query too long: maximum 500 characters allowed"


class ProviderUnconfigured(SearchError):
    status_code = 503
    default_message = "OpenAI API key not configured"


class DimensionMismatch(SearchError, ValueError):
    default_message = "Vectors must have the same length"


class EmbeddingFailed(SearchError):
    status_code = 502
    default_message = "Failed to generate embedding"


class EmptyProviderResponse(SearchError):
    status_code = 502
    default_message = "No response from OpenAI Web Search"


class ProviderAuthFailed(SearchError):
    status_code = 502
    default_message = "Invalid API key. Please check your OpenAI API key configuration."


class ProviderRateLimited(SearchError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class ModelUnavailable(SearchError):
    status_code = 502
    default_message = (
        "Model not available. Please ensure your OpenAI API key has access "
        "to the configured model."
    )


class ProviderError(SearchError):
    status_code = 502
    default_message = "Error calling the AI provider"


def translate_provider_error(exc: Exception, fallback: str) -> SearchError:
    """Map an exception raised by the AI provider onto the error taxonomy.

    Errors that are already part of the taxonomy pass through unchanged.
    Otherwise the HTTP status reported by the SDK decides (401, 429, 404),
    then a mention of "model" in the message, then a generic
    :class:`ProviderError` carrying the provider's message.
    """
    if isinstance(exc, SearchError):
        return exc

    status = getattr(exc, "status_code", None)
    message = str(exc)
    if status == 401:
        return ProviderAuthFailed()
    if status == 429:
        return ProviderRateLimited()
    if status == 404 or "model" in message.lower():
        return ModelUnavailable()
    return ProviderError(message or fallback)
