"""Environment-driven configuration.

Values are read from ``os.environ`` at call time (``.env`` is loaded when the
package is imported), so tests can patch the environment per case.
"""

import os

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_SEARCH_MODEL = "gpt-4o-mini"
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_OPENAI_TIMEOUT = 60.0
DEFAULT_ELASTICSEARCH_URL = "http://localhost:9200"


def get_openai_api_key() -> str | None:
    return os.environ.get("OPENAI_API_KEY") or None


def get_embedding_model() -> str:
    return os.environ.get("OPENAI_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL)


def get_search_model() -> str:
    return os.environ.get("OPENAI_SEARCH_MODEL", DEFAULT_SEARCH_MODEL)


def get_chat_model() -> str:
    return os.environ.get("OPENAI_CHAT_MODEL", DEFAULT_CHAT_MODEL)


def get_openai_timeout() -> float:
    return float(os.environ.get("OPENAI_TIMEOUT", DEFAULT_OPENAI_TIMEOUT))


def get_elasticsearch_url() -> str:
    return os.environ.get("ELASTICSEARCH_URL", DEFAULT_ELASTICSEARCH_URL)


def get_elasticsearch_api_key() -> str | None:
    return os.environ.get("ELASTICSEARCH_API_KEY") or None
