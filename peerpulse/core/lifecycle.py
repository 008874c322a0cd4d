"""
Presentation lifecycle broadcaster

Owns the single live PresentationStatus and relays admin lifecycle events
verbatim to every subscriber of the transport.

State machine (as observed by receivers):
    idle --presentationStarting--> starting --presentationStarted--> active
    active --presentationEnded--> evaluation
    any --presentationReset--> idle
timeSync / evaluationForm carry auxiliary payload and do not change state.
"""
import logging
from typing import Any, Dict, FrozenSet, Optional

from peerpulse.core import events
from peerpulse.exceptions import InvalidTransitionError, UnknownEventError
from peerpulse.models import PresentationStatus
from peerpulse.transport.base import Transport


logger = logging.getLogger(__name__)


# event -> states it may be applied in
ALLOWED_FROM: Dict[str, FrozenSet[str]] = {
    events.PRESENTATION_STARTING: frozenset({"idle"}),
    events.PRESENTATION_STARTED: frozenset({"starting"}),
    events.PRESENTATION_ENDED: frozenset({"active"}),
    events.TIME_SYNC: frozenset({"active", "evaluation"}),
    events.EVALUATION_FORM: frozenset({"active", "evaluation"}),
    events.PRESENTATION_RESET: frozenset({"idle", "starting", "active", "evaluation"}),
}

# event -> resulting state (absent: unchanged)
NEXT_STATE: Dict[str, str] = {
    events.PRESENTATION_STARTING: "starting",
    events.PRESENTATION_STARTED: "active",
    events.PRESENTATION_ENDED: "evaluation",
    events.PRESENTATION_RESET: "idle",
}


def _payload_get(payload: Any, key: str) -> Optional[Any]:
    if isinstance(payload, dict):
        return payload.get(key)
    return None


class PresentationBroadcaster:
    """
    Single-instance relay built once at startup

    Status is updated synchronously before the broadcast is awaited, so
    events handled on the event loop are applied in arrival order.
    """

    def __init__(self, transport: Transport, strict: bool = False):
        self.transport = transport
        self.strict = strict
        self.status = PresentationStatus()

    def is_valid_transition(self, event: str) -> bool:
        return self.status.status in ALLOWED_FROM[event]

    def apply(self, event: str, payload: Any = None) -> PresentationStatus:
        """
        Update the live status for a lifecycle event (no broadcast)

        Raises:
            UnknownEventError: If event is not a lifecycle event
            InvalidTransitionError: If strict and the event is out of order
        """
        if not isinstance(event, str) or event not in ALLOWED_FROM:
            raise UnknownEventError(event)

        if not self.is_valid_transition(event):
            if self.strict:
                raise InvalidTransitionError(event, self.status.status)
            logger.warning(f"⚠️ {event} received while {self.status.status}; relaying anyway")

        if event == events.PRESENTATION_RESET:
            self.status = PresentationStatus()
            return self.status

        if event in NEXT_STATE:
            self.status.status = NEXT_STATE[event]

        team = _payload_get(payload, "team")
        if event in (events.PRESENTATION_STARTING, events.PRESENTATION_STARTED) and team is not None:
            self.status.current_team = str(team)

        if event == events.TIME_SYNC:
            seconds = _payload_get(payload, "time")
            if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
                self.status.current_time = int(seconds)

        return self.status

    async def relay(self, event: str, payload: Any = None) -> PresentationStatus:
        """
        Apply a lifecycle event and forward it unchanged to all subscribers

        Args:
            event: One of the six lifecycle event names
            payload: Forwarded as-is (None for presentationReset)

        Returns:
            Status after the event
        """
        status = self.apply(event, payload)
        if event != events.TIME_SYNC:
            logger.info(f"📣 {event} | status={status.status} team={status.current_team or '-'}")
        await self.transport.broadcast(event, payload)
        return status
