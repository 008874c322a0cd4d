"""
Roster bulk loader for uploaded participant and team rows
"""
import logging
from typing import List, Sequence

from pymongo.errors import DuplicateKeyError

from peerpulse.db import MongoStore
from peerpulse.models import Participant, Team


logger = logging.getLogger(__name__)


def parse_participants(rows: Sequence[Sequence[str]]) -> List[Participant]:
    """First cell of each row is the USN; blank USNs are dropped"""
    participants = []
    for row in rows:
        if not row:
            continue
        usn = (row[0] or "").strip()
        if usn:
            participants.append(Participant(usn=usn))
    return participants


def parse_teams(rows: Sequence[Sequence[str]]) -> List[Team]:
    """
    Convert rows to teams

    Row format: [team_name, usn1, usn2, ...]
    Rows with an empty name are dropped, blank member cells are skipped.

    Example:
        >>> parse_teams([["Team Alpha", "usn1", " usn2 ", ""]])[0].members
        ['usn1', 'usn2']
    """
    teams = []
    for row in rows:
        if not row:
            continue
        name = (row[0] or "").strip()
        if not name:
            continue
        members = [m.strip() for m in row[1:] if m and m.strip()]
        teams.append(Team(name=name, members=members))
    return teams


def load_participants(store: MongoStore, rows: Sequence[Sequence[str]]) -> int:
    """
    Create participants one by one

    Duplicate USNs are skipped and not counted. Any other storage error
    propagates and aborts the rest of the batch.

    Returns:
        Number of participants created
    """
    count = 0
    for participant in parse_participants(rows):
        try:
            store.create_participant(participant)
        except DuplicateKeyError:
            logger.info(f"↩️ Participant {participant.usn} already exists, skipped")
            continue
        count += 1
    return count


def load_teams(store: MongoStore, rows: Sequence[Sequence[str]]) -> int:
    """
    Create teams one by one

    Unlike participants, any error for a row (duplicate name or otherwise)
    is logged and the row skipped; loading continues.
    TODO: confirm with the organisers whether non-duplicate storage errors
    should abort the batch like participant uploads do.

    Returns:
        Number of teams created
    """
    count = 0
    for team in parse_teams(rows):
        try:
            store.create_team(team)
        except Exception as e:
            logger.warning(f"⚠️ Error creating team {team.name}: {e}")
            continue
        count += 1
    return count
