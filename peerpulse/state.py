"""
Global application state
Shared resources wired once at startup and accessible across all routers
"""
from typing import Optional

from peerpulse.core.aggregator import EvaluationAggregator
from peerpulse.core.lifecycle import PresentationBroadcaster
from peerpulse.db import MongoStore
from peerpulse.models import Settings
from peerpulse.transport.base import Transport


SETTINGS: Settings = Settings()

# Document store (None until MongoDB is reachable)
STORE: Optional[MongoStore] = None

# Broadcast binding chosen by SETTINGS.transport
TRANSPORT: Optional[Transport] = None

# Owns the live PresentationStatus
BROADCASTER: Optional[PresentationBroadcaster] = None

AGGREGATOR: Optional[EvaluationAggregator] = None


def wire(settings: Settings, store: MongoStore, transport: Transport) -> None:
    """Build the single broadcaster/aggregator pair around a store and transport"""
    global SETTINGS, STORE, TRANSPORT, BROADCASTER, AGGREGATOR
    SETTINGS = settings
    STORE = store
    TRANSPORT = transport
    BROADCASTER = PresentationBroadcaster(transport, strict=settings.strict_transitions)
    AGGREGATOR = EvaluationAggregator(store, transport)


def reset() -> None:
    """Drop all wiring (shutdown and tests)"""
    global SETTINGS, STORE, TRANSPORT, BROADCASTER, AGGREGATOR
    SETTINGS = Settings()
    STORE = None
    TRANSPORT = None
    BROADCASTER = None
    AGGREGATOR = None
