"""GET /health — Liveness check."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "session_store": request.app.state.session_store_kind,
    }
