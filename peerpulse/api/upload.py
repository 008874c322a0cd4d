"""
Roster upload endpoint (participants / teams CSV rows)
"""
import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request

from peerpulse.api.deps import get_store
from peerpulse.core.roster import load_participants, load_teams
from peerpulse.normalizer import normalize_upload


router = APIRouter(prefix="/api", tags=["upload"])
logger = logging.getLogger(__name__)


@router.post("/upload")
async def upload_roster(request: Request):
    """
    Upload pre-parsed CSV rows

    Request:
        {
            "type": "participants",          # or "teams"
            "data": [["1XX21CS001"], ...]     # teams: [["Team Alpha", "usn1", "usn2"], ...]
        }

    Response:
        {"message": "Participants uploaded successfully", "count": 12}
    """
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")

    try:
        upload = normalize_upload(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    store = get_store()

    try:
        if upload.type == "participants":
            count = await asyncio.to_thread(load_participants, store, upload.data)
            message = "Participants uploaded successfully"
        else:
            count = await asyncio.to_thread(load_teams, store, upload.data)
            message = "Teams uploaded successfully"
    except Exception as e:
        logger.error(f"❌ Upload error ({upload.type}): {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info(f"📥 {upload.type} upload: {count}/{len(upload.data)} rows created")
    return {"message": message, "count": count}
