from __future__ import annotations

from fastapi import APIRouter

from ..services.session import session_manager

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "sessions": len(session_manager)}
