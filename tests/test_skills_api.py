import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from skillhub.core.exceptions import InvalidInputError, NotFoundError
from skillhub.models.skill import Skill
from skillhub.models.skill_evaluation import SkillEvaluation
from skillhub.services import skills as skills_service

def _python_scores(db_session):
    db_session.expire_all()
    rows = (
        db_session.query(SkillEvaluation)
        .filter(SkillEvaluation.skill_id == 1)
        .order_by(SkillEvaluation.id)
        .all()
    )
    return [(row.score, row.max_score) for row in rows]

def test_all_skills_empty_is_204(client, auth_headers):
    response = client.get("/api/skills/all", headers=auth_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

def test_all_skills(client, auth_headers, seeded):
    response = client.get("/api/skills/all", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    skills = {row["skill_name"]: row for row in response.json()}
    assert len(skills) == 5
    assert skills["Python"]["skill_category"] == "Technical"
    assert skills["Python"]["employee_count"] == 2
    assert skills["Python"]["max_score"] == 10

def test_uncategorized_skill(client, auth_headers):
    client.post("/api/skills/add", json={"skillName": "Rust"}, headers=auth_headers)
    skills = client.get("/api/skills/all", headers=auth_headers).json()
    assert skills[0]["skill_category"] == "Uncategorized"
    assert skills[0]["employee_count"] == 0

def test_add_skill_is_idempotent(client, auth_headers, seeded):
    """Adding an existing name is accepted and changes nothing."""
    response = client.post("/api/skills/add", json={"skillName": "Python", "skillCategory": "Other"}, headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["message"] == "Skill added successfully"
    assert len(client.get("/api/skills/all", headers=auth_headers).json()) == 5

def test_add_skill_creates_category(client, auth_headers, seeded):
    client.post("/api/skills/add", json={"skillName": "Go", "skillCategory": "Programming"}, headers=auth_headers)
    categories = {c["category_name"]: c["skill_count"] for c in client.get("/api/skills/categories", headers=auth_headers).json()}
    assert categories == {"Leadership": 1, "Programming": 1, "Soft Skills": 2, "Technical": 2}

def test_average_score(client, auth_headers, seeded):
    data = client.get("/api/skills/average", headers=auth_headers).json()
    assert data == {"average_score": 7.0, "high_score": 10.0}

def test_employee_skills(client, auth_headers, seeded):
    response = client.get("/api/skills/employee-skills?empId=1", headers=auth_headers)
    assert [s["skill_name"] for s in response.json()] == ["Communication", "Python"]

def test_employee_skills_none(client, auth_headers, seeded):
    response = client.get("/api/skills/employee-skills?empId=999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_remove_skill_cascades(client, auth_headers, seeded):
    response = client.delete("/api/skills/remove/1", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Skill deleted successfully"
    data = client.get("/api/evaluations/details?limit=1", headers=auth_headers).json()
    assert data["total"] == 8

def test_remove_missing_skill(client, auth_headers):
    response = client.delete("/api/skills/remove/999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_rescale_max_score(client, auth_headers, db_session, seeded):
    """Doubling the max score doubles every stored score of the skill."""
    response = client.put("/api/skills/edit/1", json={"max_score": 20}, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["evaluations_updated"] == 5
    assert data["old_max_score"] == 10
    assert data["max_score"] == 20

    assert _python_scores(db_session) == [
        (pytest.approx(10), 20), (pytest.approx(14), 20), (pytest.approx(16), 20),
        (pytest.approx(18), 20), (pytest.approx(20), 20),
    ]
    assert db_session.get(Skill, 1).max_score == 20

def test_rescale_keeps_levels_and_normalized_reports(client, auth_headers, seeded):
    before = client.get("/api/analytics/skilllevel-wise", headers=auth_headers).json()
    average_before = client.get("/api/skills/average", headers=auth_headers).json()
    client.put("/api/skills/edit/1", json={"max_score": 7}, headers=auth_headers)
    assert client.get("/api/analytics/skilllevel-wise", headers=auth_headers).json() == before
    assert client.get("/api/skills/average", headers=auth_headers).json() == average_before

def test_new_evaluation_after_rescale_uses_new_max(client, auth_headers, seeded):
    client.put("/api/skills/edit/1", json={"max_score": 20}, headers=auth_headers)
    response = client.post(
        "/api/evaluations/add?empId=3&skillId=1",
        json={"score": 15, "quarter": "Q2", "year": 2024},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["skill_level"] == "Advanced"

def test_rescale_rejects_non_positive(client, auth_headers, seeded):
    response = client.put("/api/skills/edit/1", json={"max_score": 0}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_rescale_unknown_skill(client, auth_headers, seeded):
    response = client.put("/api/skills/edit/999", json={"max_score": 20}, headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_rescale_without_evaluations_is_noop(client, auth_headers, db_session, seeded):
    client.post("/api/skills/add", json={"skillName": "Go"}, headers=auth_headers)
    go = db_session.query(Skill).filter(Skill.name == "Go").one()
    response = client.put(f"/api/skills/edit/{go.id}", json={"max_score": 20}, headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    db_session.expire_all()
    assert db_session.get(Skill, go.id).max_score == 10

def test_rescale_is_all_or_nothing(db_session, seeded, monkeypatch):
    """A failure part-way through leaves every score and max_score unchanged."""
    before = _python_scores(db_session)
    calls = []

    def failing_rescale(score, old_max, new_max):
        calls.append(score)
        if len(calls) == 3:
            raise RuntimeError("simulated failure")
        return score * new_max / old_max

    monkeypatch.setattr(skills_service, "rescale_score", failing_rescale)
    with pytest.raises(RuntimeError):
        skills_service.rescale_skill_max_score(db_session, 1, 20)

    assert len(calls) == 3
    assert _python_scores(db_session) == before
    assert db_session.get(Skill, 1).max_score == 10

def test_rescale_database_failure_is_500(client, auth_headers, db_session, seeded, monkeypatch):
    before = _python_scores(db_session)

    def failing_rescale(score, old_max, new_max):
        raise OperationalError("UPDATE skill_evaluations", {}, Exception("disk I/O error"))

    monkeypatch.setattr(skills_service, "rescale_score", failing_rescale)
    response = client.put("/api/skills/edit/1", json={"max_score": 20}, headers=auth_headers)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["code"] == "DATABASE_ERROR"
    assert _python_scores(db_session) == before

def test_rescale_service_no_evaluations(db_session):
    skill, created = skills_service.add_skill(db_session, "Go")
    assert created
    with pytest.raises(NotFoundError):
        skills_service.rescale_skill_max_score(db_session, skill.id, 20)

@pytest.mark.parametrize("raw", ["Infinity", "-Infinity", "NaN"])
def test_rescale_rejects_non_finite(client, auth_headers, db_session, seeded, raw):
    """Non-finite JSON literals never reach the stored scores."""
    before = _python_scores(db_session)
    response = client.put(
        "/api/skills/edit/1",
        content='{"max_score": %s}' % raw,
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert _python_scores(db_session) == before
    assert db_session.get(Skill, 1).max_score == 10

@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_rescale_service_rejects_non_finite(db_session, seeded, value):
    before = _python_scores(db_session)
    with pytest.raises(InvalidInputError):
        skills_service.rescale_skill_max_score(db_session, 1, value)
    assert _python_scores(db_session) == before
