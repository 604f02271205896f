from contextlib import asynccontextmanager

from elasticsearch import AsyncElasticsearch
from fastapi import Depends, FastAPI
from openai import AsyncOpenAI

from .config import (
    get_elasticsearch_api_key,
    get_elasticsearch_url,
    get_openai_api_key,
    get_openai_timeout,
)
from .lib.history import ensure_history_index
from .routers import health, search
from .security import verify_api_key


def build_openai_client() -> AsyncOpenAI | None:
    """Create the shared provider client, or ``None`` without an API key."""
    api_key = get_openai_api_key()
    if api_key is None:
        return None
    return AsyncOpenAI(api_key=api_key, timeout=get_openai_timeout())


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.es = AsyncElasticsearch(
        get_elasticsearch_url(), api_key=get_elasticsearch_api_key()
    )
    app.state.openai = build_openai_client()
    try:
        await ensure_history_index(app.state.es)
        yield
    finally:
        await app.state.es.close()
        if app.state.openai is not None:
            await app.state.openai.close()


app = FastAPI(
    title="Feed Search API",
    description="Semantic post/user search and AI news aggregation for the social feed",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(search.router)


@app.get("/", dependencies=[Depends(verify_api_key)])
async def root():
    return {"message": "Feed Search API"}
