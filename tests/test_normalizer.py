"""
Tests for request normalization
"""
import pytest

from peerpulse.normalizer import normalize_evaluation, normalize_upload


def test_evaluation_http_shape():
    """teamName / evaluatorUSN / criterionId"""
    submission = normalize_evaluation({
        "teamName": " Team Alpha ",
        "evaluatorUSN": "usn1",
        "evaluation": {
            "ratings": [{"criterionId": "content", "label": "Content Quality", "score": 8}],
            "feedback": "Clear",
        },
    })
    assert submission.team_name == "Team Alpha"
    assert submission.evaluator_usn == "usn1"
    assert submission.ratings[0].criterion_id == "content"
    assert submission.feedback == "Clear"


def test_evaluation_socket_shape():
    """team / evaluator / criterion aliases; feedback optional"""
    submission = normalize_evaluation({
        "team": "Team Alpha",
        "evaluator": "usn2",
        "evaluation": {"ratings": [{"criterion": "teamwork", "label": "Team Coordination", "score": 10}]},
    })
    assert submission.team_name == "Team Alpha"
    assert submission.ratings[0].criterion_id == "teamwork"
    assert submission.feedback == ""


@pytest.mark.parametrize("body", [
    None,
    {},
    {"teamName": "Team Alpha", "evaluatorUSN": "usn1"},
    {"teamName": "Team Alpha", "evaluatorUSN": "usn1", "evaluation": {"ratings": []}},
    {"teamName": "Team Alpha", "evaluatorUSN": "usn1",
     "evaluation": {"ratings": [{"criterionId": "content", "score": 0}]}},
    {"teamName": "", "evaluatorUSN": "usn1",
     "evaluation": {"ratings": [{"criterionId": "content", "score": 5}]}},
    {"teamName": "   ", "evaluatorUSN": "usn1",
     "evaluation": {"ratings": [{"criterionId": "content", "score": 5}]}},
    {"teamName": "Team Alpha", "evaluatorUSN": " \t ",
     "evaluation": {"ratings": [{"criterionId": "content", "score": 5}]}},
])
def test_evaluation_invalid(body):
    """Missing or malformed fields raise ValueError"""
    with pytest.raises(ValueError):
        normalize_evaluation(body)


def test_upload_teams():
    """Cells are stringified, None becomes blank"""
    upload = normalize_upload({"type": "teams", "data": [["Team Alpha", "usn1", None]]})
    assert upload.type == "teams"
    assert upload.data == [["Team Alpha", "usn1", ""]]


@pytest.mark.parametrize("body", [
    {"type": "judges", "data": []},
    {"type": "teams"},
    {"type": "teams", "data": ["not-a-row"]},
    [],
])
def test_upload_invalid(body):
    """Unknown type or malformed rows raise ValueError"""
    with pytest.raises(ValueError):
        normalize_upload(body)
