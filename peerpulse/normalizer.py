"""
Normalizer for incoming request bodies and socket messages
"""
from typing import Any, Dict

from pydantic import ValidationError

from peerpulse.models import EvaluationSubmission, Rating, RosterUpload


UPLOAD_TYPES = ("participants", "teams")


def _first(body: Dict, *keys: str) -> Any:
    for key in keys:
        value = body.get(key)
        if value not in (None, ""):
            return value
    return None


def normalize_evaluation(body: Any) -> EvaluationSubmission:
    """
    Normalize an evaluation submission

    Body format (HTTP):
    {
        "teamName": "Team Alpha",
        "evaluatorUSN": "1XX21CS001",
        "evaluation": {
            "ratings": [{"criterionId": "content", "label": "Content Quality", "score": 8}],
            "feedback": "Clear demo"
        }
    }

    The socket form uses "team" / "evaluator" instead of "teamName" / "evaluatorUSN",
    and ratings may name the criterion "criterion".

    Returns:
        EvaluationSubmission

    Raises:
        ValueError: If a required field is missing or a rating is malformed
    """
    if not isinstance(body, dict):
        raise ValueError("Evaluation body must be an object")

    team_name = str(_first(body, "teamName", "team") or "").strip()
    evaluator_usn = str(_first(body, "evaluatorUSN", "evaluator") or "").strip()
    evaluation = body.get("evaluation")

    if not team_name:
        raise ValueError("teamName required")
    if not evaluator_usn:
        raise ValueError("evaluatorUSN required")
    if not isinstance(evaluation, dict):
        raise ValueError("evaluation required")

    raw_ratings = evaluation.get("ratings")
    if not isinstance(raw_ratings, list) or not raw_ratings:
        raise ValueError("evaluation.ratings required")

    try:
        ratings = [Rating.model_validate(r) for r in raw_ratings]
    except ValidationError as e:
        raise ValueError(f"Invalid rating: {e.errors()[0]['msg']}") from e

    feedback = evaluation.get("feedback") or ""

    return EvaluationSubmission(
        team_name=team_name,
        evaluator_usn=evaluator_usn,
        ratings=ratings,
        feedback=str(feedback),
    )


def normalize_upload(body: Any) -> RosterUpload:
    """
    Normalize a roster upload

    Body format:
        {"type": "participants" | "teams", "data": [["cell", ...], ...]}

    Raises:
        ValueError: If type is unknown or data is not a list of rows
    """
    if not isinstance(body, dict):
        raise ValueError("Upload body must be an object")

    upload_type = body.get("type")
    if upload_type not in UPLOAD_TYPES:
        raise ValueError("Invalid upload type")

    data = body.get("data")
    if not isinstance(data, list):
        raise ValueError("data required")

    rows = []
    for row in data:
        if not isinstance(row, list):
            raise ValueError("data must be a list of rows")
        rows.append(["" if cell is None else str(cell) for cell in row])

    return RosterUpload(type=upload_type, data=rows)
