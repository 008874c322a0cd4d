"""
Pusher channel authorization endpoint (hosted transport binding only)
"""
import logging

from fastapi import APIRouter, HTTPException, Request

from peerpulse import state
from peerpulse.exceptions import TransportNotConfiguredError
from peerpulse.transport.pusher_channel import PusherTransport


router = APIRouter(prefix="/api", tags=["pusher"])
logger = logging.getLogger(__name__)


def _pusher_transport() -> PusherTransport:
    if not isinstance(state.TRANSPORT, PusherTransport):
        raise TransportNotConfiguredError("Pusher transport is not configured")
    return state.TRANSPORT


@router.post("/pusher-auth")
async def pusher_auth(request: Request):
    """
    Sign a channel subscription for a Pusher client

    Request (JSON or form-encoded, as pusher-js sends it):
        {"socket_id": "1234.5678", "channel_name": "private-presentation"}

    Response:
        {"auth": "<key>:<signature>"}
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            body = await request.json()
        else:
            body = dict(await request.form())
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid request body")

    socket_id = body.get("socket_id") if isinstance(body, dict) else None
    channel_name = body.get("channel_name") if isinstance(body, dict) else None
    if not socket_id or not channel_name:
        raise HTTPException(status_code=400, detail="socket_id and channel_name required")

    try:
        return _pusher_transport().authorize(socket_id, channel_name)
    except Exception as e:
        logger.error(f"❌ Pusher auth error for {channel_name}: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
