"""
Tests for the presentation lifecycle broadcaster
"""
import asyncio

import pytest

from peerpulse.core import events
from peerpulse.core.lifecycle import PresentationBroadcaster
from peerpulse.exceptions import InvalidTransitionError, UnknownEventError


def run_events(broadcaster, *sequence):
    async def _run():
        for event, payload in sequence:
            await broadcaster.relay(event, payload)
    asyncio.run(_run())
    return broadcaster.status


def test_full_lifecycle(transport):
    """idle -> starting -> active -> evaluation"""
    broadcaster = PresentationBroadcaster(transport)
    status = run_events(
        broadcaster,
        (events.PRESENTATION_STARTING, {"team": "Team Alpha"}),
    )
    assert status.status == "starting"
    assert status.current_team == "Team Alpha"

    run_events(broadcaster, (events.PRESENTATION_STARTED, {"team": "Team Alpha"}))
    assert broadcaster.status.status == "active"

    run_events(broadcaster, (events.TIME_SYNC, {"time": 5, "team": "Team Alpha"}))
    assert broadcaster.status.status == "active"
    assert broadcaster.status.current_time == 5

    run_events(broadcaster, (events.PRESENTATION_ENDED, {"team": "Team Alpha"}))
    assert broadcaster.status.status == "evaluation"
    assert transport.events == [
        events.PRESENTATION_STARTING,
        events.PRESENTATION_STARTED,
        events.TIME_SYNC,
        events.PRESENTATION_ENDED,
    ]


def test_time_sync_relayed_unchanged(transport):
    """timeSync {time: 42} reaches subscribers exactly as sent"""
    broadcaster = PresentationBroadcaster(transport)
    payload = {"time": 42}
    run_events(broadcaster, (events.TIME_SYNC, payload))
    assert transport.sent == [(events.TIME_SYNC, {"time": 42})]


@pytest.mark.parametrize("prefix", [
    [],
    [(events.PRESENTATION_STARTING, {"team": "Team Alpha"})],
    [(events.PRESENTATION_STARTING, {"team": "Team Alpha"}),
     (events.PRESENTATION_STARTED, {"team": "Team Alpha"}),
     (events.TIME_SYNC, {"time": 90})],
    [(events.PRESENTATION_STARTING, {"team": "Team Alpha"}),
     (events.PRESENTATION_STARTED, {"team": "Team Alpha"}),
     (events.PRESENTATION_ENDED, {"team": "Team Alpha"})],
])
def test_reset_from_any_state(transport, prefix):
    """presentationReset always returns to idle, no team, zero time"""
    broadcaster = PresentationBroadcaster(transport)
    status = run_events(broadcaster, *prefix, (events.PRESENTATION_RESET, None))
    assert status.status == "idle"
    assert status.current_team == ""
    assert status.current_time == 0
    assert transport.sent[-1] == (events.PRESENTATION_RESET, None)


def test_duplicate_event_relayed_twice(transport):
    """No idempotence: a repeated presentationStarting is broadcast twice"""
    broadcaster = PresentationBroadcaster(transport)
    run_events(
        broadcaster,
        (events.PRESENTATION_STARTING, {"team": "Team Alpha"}),
        (events.PRESENTATION_STARTING, {"team": "Team Alpha"}),
    )
    assert transport.events == [events.PRESENTATION_STARTING, events.PRESENTATION_STARTING]


def test_permissive_out_of_order_event(transport):
    """Default mode relays out-of-order events"""
    broadcaster = PresentationBroadcaster(transport)
    status = run_events(broadcaster, (events.PRESENTATION_ENDED, {"team": "Team Alpha"}))
    assert status.status == "evaluation"
    assert transport.events == [events.PRESENTATION_ENDED]


def test_strict_rejects_out_of_order_event(transport):
    """Strict mode rejects presentationEnded while idle and broadcasts nothing"""
    broadcaster = PresentationBroadcaster(transport, strict=True)
    with pytest.raises(InvalidTransitionError):
        run_events(broadcaster, (events.PRESENTATION_ENDED, {"team": "Team Alpha"}))
    assert broadcaster.status.status == "idle"
    assert transport.sent == []


def test_strict_allows_reset_anywhere(transport):
    """Strict mode still accepts reset from any state"""
    broadcaster = PresentationBroadcaster(transport, strict=True)
    status = run_events(
        broadcaster,
        (events.PRESENTATION_STARTING, {"team": "Team Alpha"}),
        (events.PRESENTATION_RESET, None),
    )
    assert status.status == "idle"


def test_unknown_event_rejected(transport):
    """Only the six lifecycle events can be relayed"""
    broadcaster = PresentationBroadcaster(transport)
    with pytest.raises(UnknownEventError):
        run_events(broadcaster, (events.TEAM_EVALUATIONS, {"team": "Team Alpha"}))
    assert transport.sent == []


def test_non_dict_payload_relayed(transport):
    """Payloads are not validated, only forwarded"""
    broadcaster = PresentationBroadcaster(transport)
    run_events(broadcaster, (events.EVALUATION_FORM, ["anything"]))
    assert transport.sent == [(events.EVALUATION_FORM, ["anything"])]
    assert broadcaster.status.status == "idle"
