from datetime import date
from fastapi import status

from skillhub.models.employee import Employee
from skillhub.services.analytics import quarter_of, quarters_from
from skillhub.models.skill_evaluation import Quarter

def test_quarter_helpers():
    assert quarter_of(date(2023, 1, 9)) == Quarter.Q1
    assert quarter_of(date(2023, 6, 30)) == Quarter.Q2
    assert quarter_of(date(2023, 12, 1)) == Quarter.Q4
    assert quarters_from(Quarter.Q3) == [Quarter.Q3, Quarter.Q4]

def test_skill_level_distribution(client, auth_headers, seeded):
    response = client.get("/api/analytics/skilllevel-wise", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {"name": "Beginner", "value": 1},
        {"name": "Intermediate", "value": 3},
        {"name": "Advanced", "value": 6},
        {"name": "Expert", "value": 3},
    ]

def test_skill_level_distribution_reports_empty_buckets(client, auth_headers, seeded):
    """Removing every Expert evaluation still leaves an Expert entry with value 0."""
    for eval_id in (6, 7, 10):
        client.delete(f"/api/evaluations/remove/{eval_id}", headers=auth_headers)
    buckets = {b["name"]: b["value"] for b in client.get("/api/analytics/skilllevel-wise", headers=auth_headers).json()}
    assert buckets["Expert"] == 0

def test_skill_level_distribution_no_data(client, auth_headers):
    data = client.get("/api/analytics/skilllevel-wise", headers=auth_headers).json()
    assert [b["value"] for b in data] == [0, 0, 0, 0]

def test_top_performers(client, auth_headers, seeded):
    response = client.get("/api/analytics/top-performers", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    rows = response.json()
    assert len(rows) <= 5
    scores = [row["score"] for row in rows]
    assert scores == sorted(scores, reverse=True)
    assert [(row["emp_name"], row["skill_name"], row["score"]) for row in rows] == [
        ("Daniel Okafor", "Python", 10),
        ("Daniel Okafor", "Python", 9),
        ("Maria Lopez", "Communication", 9),
        ("Asha Verma", "Python", 8),
        ("Kenji Sato", "Team Leadership", 8),
    ]

def test_top_performers_empty(client, auth_headers):
    response = client.get("/api/analytics/top-performers", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_quarter_wise(client, auth_headers, seeded):
    data = client.get("/api/analytics/quarter-wise?year=2023", headers=auth_headers).json()
    assert [(row["quarter"], row["average_score"]) for row in data] == [
        ("Q1", 7.0), ("Q2", 7.0), ("Q3", 7.0), ("Q4", 6.5),
    ]

def test_quarter_wise_requires_year(client, auth_headers, seeded):
    response = client.get("/api/analytics/quarter-wise", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_department_wise(client, auth_headers, seeded):
    data = client.get("/api/analytics/department-wise", headers=auth_headers).json()
    assert data == [
        {"dept_name": "Engineering", "average_score": 7.0},
        {"dept_name": "People", "average_score": 7.5},
        {"dept_name": "Sales", "average_score": 6.7},
    ]

def test_employee_growth_from_join_date(client, auth_headers, seeded):
    """Asha joined in 2023 Q1 and was assessed on Python in 2023Q1, 2023Q3 and 2024Q1."""
    response = client.get("/api/analytics/employee-growth/1", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    points = response.json()
    assert [(p["year"], p["quarter"], p["score"]) for p in points] == [
        (2023, "Q1", 5), (2023, "Q3", 7), (2024, "Q1", 8),
    ]
    assert {p["skill_name"] for p in points} == {"Python"}

def test_employee_growth_for_year(client, auth_headers, seeded):
    points = client.get("/api/analytics/employee-growth/1?year=2024", headers=auth_headers).json()
    assert [(p["year"], p["quarter"]) for p in points] == [(2024, "Q1")]

def test_employee_growth_for_skill(client, auth_headers, seeded):
    points = client.get("/api/analytics/employee-growth/1?skill_id=2", headers=auth_headers).json()
    assert [(p["year"], p["quarter"], p["score"]) for p in points] == [(2023, "Q2", 6), (2024, "Q1", 7)]

def test_employee_growth_skips_evaluations_before_joining(client, auth_headers, db_session, seeded):
    employee = db_session.get(Employee, 1)
    employee.date_joined = date(2023, 8, 1)
    db_session.commit()
    points = client.get("/api/analytics/employee-growth/1", headers=auth_headers).json()
    assert [(p["year"], p["quarter"]) for p in points] == [(2023, "Q3"), (2024, "Q1")]

def test_employee_growth_averages_same_quarter(client, auth_headers, seeded):
    client.post(
        "/api/evaluations/add?empId=1&skillId=1",
        json={"score": 6, "quarter": "Q3", "year": 2023},
        headers=auth_headers,
    )
    points = client.get("/api/analytics/employee-growth/1", headers=auth_headers).json()
    assert [(p["quarter"], p["score"]) for p in points if p["year"] == 2023] == [("Q1", 5), ("Q3", 6.5)]

def test_employee_growth_unknown_employee(client, auth_headers, seeded):
    response = client.get("/api/analytics/employee-growth/999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_employee_growth_empty_year(client, auth_headers, seeded):
    response = client.get("/api/analytics/employee-growth/1?year=2019", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_employee_growth_default_skill_within_year(client, auth_headers, seeded):
    """Maria's lowest skill (Communication) has no 2024 evaluations; the 2024 series falls to Negotiation."""
    response = client.get("/api/analytics/employee-growth/3?year=2024", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    points = response.json()
    assert [(p["year"], p["quarter"], p["skill_name"], p["score"]) for p in points] == [
        (2024, "Q1", "Negotiation", 3),
    ]

def test_employee_growth_default_skill_after_joining(client, auth_headers, db_session, seeded):
    """Evaluations before the join quarter do not decide the default skill."""
    employee = db_session.get(Employee, 3)
    employee.date_joined = date(2024, 1, 2)
    db_session.commit()
    points = client.get("/api/analytics/employee-growth/3", headers=auth_headers).json()
    assert [(p["skill_name"], p["year"], p["quarter"]) for p in points] == [("Negotiation", 2024, "Q1")]
