"""
MongoDB document store for participants, teams and evaluations
"""
import asyncio
import logging
from typing import List

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from peerpulse.models import Evaluation, Participant, Team


logger = logging.getLogger(__name__)


class MongoStore:
    """
    Roster and evaluation collections on one database

    Participants and teams carry unique indexes (usn, name) so that duplicate
    inserts raise pymongo.errors.DuplicateKeyError. Evaluations have no
    uniqueness constraint: every submission is a new document.
    """

    def __init__(self, db: Database):
        self.db = db
        self.participants = db["participants"]
        self.teams = db["teams"]
        self.evaluations = db["evaluations"]

    def ensure_indexes(self) -> None:
        self.participants.create_index([("usn", ASCENDING)], unique=True)
        self.teams.create_index([("name", ASCENDING)], unique=True)
        self.evaluations.create_index([("teamName", ASCENDING)])

    # ---- roster ----

    def create_participant(self, participant: Participant) -> str:
        result = self.participants.insert_one({
            "usn": participant.usn,
            "createdAt": participant.created_at,
        })
        return str(result.inserted_id)

    def create_team(self, team: Team) -> str:
        result = self.teams.insert_one({
            "name": team.name,
            "members": list(team.members),
            "createdAt": team.created_at,
        })
        return str(result.inserted_id)

    def list_teams(self) -> List[Team]:
        return [
            Team(name=doc["name"], members=doc.get("members", []), created_at=doc["createdAt"])
            for doc in self.teams.find().sort("name", ASCENDING)
        ]

    # ---- evaluations ----

    def insert_evaluation(self, evaluation: Evaluation) -> Evaluation:
        """Insert a new evaluation and return it with its generated id"""
        result = self.evaluations.insert_one(evaluation.to_document())
        return evaluation.model_copy(update={"id": str(result.inserted_id)})

    def find_evaluations(self, team_name: str) -> List[Evaluation]:
        """All evaluations for a team, oldest first"""
        cursor = self.evaluations.find({"teamName": team_name}).sort("_id", ASCENDING)
        return [Evaluation.from_document(doc) for doc in cursor]


async def connect_with_retry(uri: str, db_name: str, retry_delay: float = 5.0) -> MongoStore:
    """
    Connect to MongoDB, retrying forever on a fixed delay

    Args:
        uri: MongoDB connection string
        db_name: Database name
        retry_delay: Seconds to wait between attempts

    Returns:
        MongoStore with indexes ensured
    """
    attempt = 0
    while True:
        attempt += 1
        client = None
        try:
            client = MongoClient(uri, serverSelectionTimeoutMS=5000)
            await asyncio.to_thread(client.admin.command, "ping")
            store = MongoStore(client[db_name])
            await asyncio.to_thread(store.ensure_indexes)
            logger.info(f"✅ MongoDB connected ({db_name}) after {attempt} attempt(s)")
            return store
        except PyMongoError as e:
            if client is not None:
                client.close()
            logger.error(f"❌ MongoDB connection error (attempt {attempt}): {e}. Retrying in {retry_delay}s")
            await asyncio.sleep(retry_delay)
