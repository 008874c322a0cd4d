"""
Accessors for startup-wired state, raising 503 until the server is ready
"""
from fastapi import HTTPException

from peerpulse import state
from peerpulse.core.aggregator import EvaluationAggregator
from peerpulse.core.lifecycle import PresentationBroadcaster
from peerpulse.db import MongoStore


def get_store() -> MongoStore:
    if state.STORE is None:
        raise HTTPException(status_code=503, detail="Database is not connected")
    return state.STORE


def get_broadcaster() -> PresentationBroadcaster:
    if state.BROADCASTER is None:
        raise HTTPException(status_code=503, detail="Presentation broadcaster is not ready")
    return state.BROADCASTER


def get_aggregator() -> EvaluationAggregator:
    if state.AGGREGATOR is None:
        raise HTTPException(status_code=503, detail="Evaluation aggregator is not ready")
    return state.AGGREGATOR
