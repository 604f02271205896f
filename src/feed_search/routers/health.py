from fastapi import APIRouter
from pydantic import BaseModel

from ..config import get_openai_api_key

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    ai_configured: bool


@router.get("/health", response_model=HealthResponse, status_code=200)
async def healthcheck():
    return {"status": "ok", "ai_configured": get_openai_api_key() is not None}
