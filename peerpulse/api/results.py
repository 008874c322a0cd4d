"""
Roster and results endpoints for the admin dashboard
"""
import asyncio

from fastapi import APIRouter

from peerpulse import state
from peerpulse.api.deps import get_aggregator, get_store


router = APIRouter(prefix="/api", tags=["results"])


@router.get("/teams")
async def list_teams():
    """All uploaded teams, sorted by name"""
    teams = await asyncio.to_thread(get_store().list_teams)
    return {
        "teams": [{"name": t.name, "members": t.members} for t in teams],
        "total_teams": len(teams),
    }


@router.get("/teams/{team_name}/evaluations")
async def team_evaluations(team_name: str):
    """Evaluations submitted for one team with its average score (out of 10)"""
    return await get_aggregator().team_results(team_name)


@router.get("/criteria")
async def list_criteria():
    """Default evaluation criteria for the admin's evaluation form"""
    return {"criteria": [c.model_dump() for c in state.SETTINGS.criteria]}
