"""
Admin event and evaluation submission endpoints
"""
import logging

from fastapi import APIRouter, HTTPException, Request

from peerpulse.api.deps import get_aggregator, get_broadcaster
from peerpulse.core import events
from peerpulse.exceptions import InvalidTransitionError, UnknownEventError
from peerpulse.models import Evaluation
from peerpulse.normalizer import normalize_evaluation


router = APIRouter(prefix="/api", tags=["events"])
logger = logging.getLogger(__name__)


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")


async def _submit(body) -> Evaluation:
    try:
        submission = normalize_evaluation(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    aggregator = get_aggregator()
    try:
        return await aggregator.submit(
            submission.team_name,
            submission.evaluator_usn,
            submission.ratings,
            submission.feedback,
        )
    except Exception as e:
        logger.error(
            f"❌ Error storing evaluation for {submission.team_name} "
            f"from {submission.evaluator_usn}: {type(e).__name__}: {e}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Failed to store evaluation")


@router.post("/events")
async def trigger_event(request: Request):
    """
    Admin: relay a lifecycle event to every subscriber

    Request:
        {"event": "presentationStarting", "data": {"team": "Team Alpha"}}
        {"event": "timeSync", "data": {"time": 42, "team": "Team Alpha"}}
        {"event": "presentationReset"}

    "evaluationSubmitted" is also accepted, with data shaped like POST /api/evaluations.
    """
    body = await _read_json(request)
    if not isinstance(body, dict) or not body.get("event"):
        raise HTTPException(status_code=400, detail="event required")

    event = body["event"]
    data = body.get("data")

    if event == events.EVALUATION_SUBMITTED:
        evaluation = await _submit(data)
        return {"message": "Event processed successfully", "evaluationId": evaluation.id}

    if event not in events.LIFECYCLE_EVENTS:
        raise HTTPException(status_code=400, detail=str(UnknownEventError(event)))

    broadcaster = get_broadcaster()
    try:
        status = await broadcaster.relay(event, data)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error relaying {event}: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"message": "Event processed successfully", "status": status.to_payload()}


@router.post("/evaluations")
async def submit_evaluation(request: Request):
    """
    Peer: submit an evaluation for the presenting team

    Request:
        {
            "teamName": "Team Alpha",
            "evaluatorUSN": "1XX21CS001",
            "evaluation": {
                "ratings": [{"criterionId": "content", "label": "Content Quality", "score": 8}],
                "feedback": "..."
            }
        }

    Response:
        {"message": "Evaluation submitted", "evaluation": {...stored record...}}
    """
    body = await _read_json(request)
    evaluation = await _submit(body)
    return {"message": "Evaluation submitted", "evaluation": evaluation.to_payload()}
