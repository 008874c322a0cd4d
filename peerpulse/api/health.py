"""
Health check and live presentation status endpoints
"""
from fastapi import APIRouter

from peerpulse import state
from peerpulse.api.deps import get_broadcaster


router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


@router.get("/api/status")
async def presentation_status():
    """Current presentation status plus transport info"""
    broadcaster = get_broadcaster()
    return {
        **broadcaster.status.to_payload(),
        **(state.TRANSPORT.describe() if state.TRANSPORT else {}),
        "strict_transitions": broadcaster.strict,
    }
