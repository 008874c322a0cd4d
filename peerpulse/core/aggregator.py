"""
Evaluation aggregator: persist a submission, then rebroadcast the team's evaluations
"""
import asyncio
import logging
from typing import Dict, List

from pymongo.errors import PyMongoError

from peerpulse.core import events
from peerpulse.db import MongoStore
from peerpulse.models import Evaluation, Rating
from peerpulse.transport.base import Transport


logger = logging.getLogger(__name__)


class EvaluationAggregator:
    """Keeps every client's view of a team's results current"""

    def __init__(self, store: MongoStore, transport: Transport):
        self.store = store
        self.transport = transport

    async def submit(
        self,
        team_name: str,
        evaluator_usn: str,
        ratings: List[Rating],
        feedback: str = "",
    ) -> Evaluation:
        """
        Store a peer evaluation and broadcast the updates

        Order:
            1. insert a new Evaluation (never overwrites)
            2. broadcast evaluationSubmitted with the stored record
            3. read back all evaluations for the team and broadcast teamEvaluations

        A failure in step 1 propagates to the caller before anything is broadcast.
        A failure reading back in step 3 is logged; step 2 is not retracted.

        Returns:
            The stored Evaluation (with id)
        """
        evaluation = Evaluation(
            team_name=team_name,
            evaluator_usn=evaluator_usn,
            ratings=ratings,
            feedback=feedback,
        )
        stored = await asyncio.to_thread(self.store.insert_evaluation, evaluation)
        logger.info(f"📝 Evaluation {stored.id} | team={team_name} evaluator={evaluator_usn}")

        await self.transport.broadcast(events.EVALUATION_SUBMITTED, stored.to_payload())

        try:
            team_evaluations = await asyncio.to_thread(self.store.find_evaluations, team_name)
        except PyMongoError as e:
            logger.error(f"❌ Could not read evaluations for {team_name}: {e}", exc_info=True)
            return stored

        await self.transport.broadcast(events.TEAM_EVALUATIONS, {
            "team": team_name,
            "evaluations": [ev.to_payload() for ev in team_evaluations],
        })
        return stored

    async def team_results(self, team_name: str) -> Dict:
        """Evaluations for a team plus the average of per-evaluation mean scores"""
        team_evaluations = await asyncio.to_thread(self.store.find_evaluations, team_name)
        return {
            "team": team_name,
            "evaluations": [ev.to_payload() for ev in team_evaluations],
            "total_evaluations": len(team_evaluations),
            "average_score": average_score(team_evaluations),
        }


def average_score(evaluations: List[Evaluation]) -> float:
    """
    Mean over evaluations of each evaluation's mean rating score

    Example:
        ratings [8, 6] and [10] -> (7.0 + 10.0) / 2 = 8.5
    """
    if not evaluations:
        return 0.0
    total = sum(ev.average_score for ev in evaluations)
    return round(total / len(evaluations), 1)
