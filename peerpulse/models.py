"""
Data models for the presentation evaluation server
"""
from datetime import datetime, timezone
from typing import List, Dict, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, AliasChoices


class Participant(BaseModel):
    """Peer evaluator identified by USN"""
    usn: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Team(BaseModel):
    """Presenting team: unique name plus ordered member USNs"""
    name: str
    members: List[str] = []
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Rating(BaseModel):
    """One labeled criterion score (1-10)"""
    model_config = ConfigDict(populate_by_name=True)

    criterion_id: str = Field(
        serialization_alias="criterionId",
        validation_alias=AliasChoices("criterionId", "criterion", "criterion_id", "id"),
    )
    label: str = ""
    score: int = Field(ge=1, le=10)


class Evaluation(BaseModel):
    """Stored peer evaluation of one team"""
    id: Optional[str] = None      # Mongo ObjectId as string, set after insert
    team_name: str
    evaluator_usn: str
    ratings: List[Rating]
    feedback: str = ""
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> Dict:
        """Shape stored in the evaluations collection"""
        return {
            "teamName": self.team_name,
            "evaluatorUSN": self.evaluator_usn,
            "ratings": [r.model_dump(by_alias=True) for r in self.ratings],
            "feedback": self.feedback,
            "submittedAt": self.submitted_at,
        }

    @classmethod
    def from_document(cls, doc: Dict) -> "Evaluation":
        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            team_name=doc["teamName"],
            evaluator_usn=doc["evaluatorUSN"],
            ratings=[Rating.model_validate(r) for r in doc.get("ratings", [])],
            feedback=doc.get("feedback", ""),
            submitted_at=doc["submittedAt"],
        )

    def to_payload(self) -> Dict:
        """Wire shape broadcast to subscribers (JSON-safe)"""
        return {
            "evaluationId": self.id,
            "teamName": self.team_name,
            "evaluatorUSN": self.evaluator_usn,
            "ratings": [r.model_dump(by_alias=True) for r in self.ratings],
            "feedback": self.feedback,
            "submittedAt": self.submitted_at.isoformat(),
        }

    @property
    def average_score(self) -> float:
        if not self.ratings:
            return 0.0
        return sum(r.score for r in self.ratings) / len(self.ratings)


PresentationState = Literal["idle", "starting", "active", "evaluation"]


class PresentationStatus(BaseModel):
    """Live-session cursor shared by all handlers (never persisted)"""
    status: PresentationState = "idle"
    current_team: str = ""
    current_time: int = 0

    def to_payload(self) -> Dict:
        return {
            "status": self.status,
            "currentTeam": self.current_team,
            "currentTime": self.current_time,
        }


class Criterion(BaseModel):
    """Default evaluation criterion offered to the admin form"""
    id: str
    label: str
    description: str = ""


class Settings(BaseModel):
    """Server configuration (YAML defaults + environment overrides)"""
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "peerpulse"
    db_retry_delay: float = 5.0       # Seconds between startup connection attempts

    transport: Literal["websocket", "pusher"] = "websocket"
    channel_name: str = "presentation"
    strict_transitions: bool = False  # Reject out-of-order lifecycle events

    pusher_app_id: Optional[str] = None
    pusher_key: Optional[str] = None
    pusher_secret: Optional[str] = None
    pusher_cluster: Optional[str] = None

    criteria: List[Criterion] = []


class EvaluationSubmission(BaseModel):
    """Normalized evaluation submission from a peer"""
    team_name: str
    evaluator_usn: str
    ratings: List[Rating]
    feedback: str = ""


class RosterUpload(BaseModel):
    """Normalized roster upload: pre-parsed CSV rows"""
    type: Literal["participants", "teams"]
    data: List[List[str]]
