"""
WebSocket relay endpoint (self-hosted transport binding)

Frames in both directions: {"event": "<name>", "data": <payload>}
"""
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from peerpulse import state
from peerpulse.core import events
from peerpulse.exceptions import InvalidTransitionError, UnknownEventError
from peerpulse.normalizer import normalize_evaluation
from peerpulse.transport.websocket import WebSocketTransport


router = APIRouter(tags=["socket"])
logger = logging.getLogger(__name__)


async def handle_message(transport: WebSocketTransport, ws: WebSocket, raw: str) -> None:
    """Dispatch one inbound frame; errors are reported to the sending socket only"""
    try:
        message = json.loads(raw)
    except ValueError:
        logger.warning("⚠️ Ignoring non-JSON socket frame")
        return
    if not isinstance(message, dict):
        logger.warning("⚠️ Ignoring socket frame without an event")
        return

    event = message.get("event")
    data = message.get("data")
    if not isinstance(event, str):
        logger.warning("⚠️ Ignoring socket frame without an event name")
        return

    if event == events.EVALUATION_SUBMITTED:
        try:
            submission = normalize_evaluation(data)
            await state.AGGREGATOR.submit(
                submission.team_name,
                submission.evaluator_usn,
                submission.ratings,
                submission.feedback,
            )
        except Exception as e:
            logger.error(f"❌ Error storing evaluation: {type(e).__name__}: {e}", exc_info=True)
            await transport.send(ws, events.EVALUATION_ERROR, {"message": "Failed to store evaluation"})
        return

    try:
        await state.BROADCASTER.relay(event, data)
    except UnknownEventError as e:
        logger.warning(f"⚠️ {e}")
    except InvalidTransitionError as e:
        logger.warning(f"⚠️ Rejected: {e}")
        await transport.send(ws, events.EVENT_ERROR, {"message": str(e)})


@router.websocket("/api/socket")
async def socket_endpoint(ws: WebSocket) -> None:
    transport = state.TRANSPORT
    if not isinstance(transport, WebSocketTransport) or state.BROADCASTER is None:
        await ws.close(code=1008)
        return

    await transport.register(ws)
    try:
        while True:
            raw = await ws.receive_text()
            await handle_message(transport, ws, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await transport.unregister(ws)
