"""Semantic search and AI news aggregation for the social feed."""

from dotenv import load_dotenv

# Load .env before any submodule reads provider or Elasticsearch settings.
load_dotenv()
