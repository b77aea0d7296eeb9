from __future__ import annotations

from datetime import date
from itertools import count
from typing import Any, Callable

import pytest
from starlette.testclient import TestClient

from dashboard.main import app
from dashboard.models.employee import (
    Department,
    Employee,
    Role,
    RoleCategory,
    RoleLevel,
    Skill,
    SkillCategory,
)

DEPT_A = Department(id="1", name="A", description="Department A")
DEPT_B = Department(id="2", name="B", description="Department B")

ROLE_ENGINEER = Role(id="1", title="Engineer", level=RoleLevel.MID, category=RoleCategory.ENGINEERING)
ROLE_SCIENTIST = Role(id="2", title="Scientist", level=RoleLevel.SENIOR, category=RoleCategory.RESEARCH)

SKILL_PYTHON = Skill(id="7", name="Python", category=SkillCategory.TECHNICAL, proficiency=4)
SKILL_LEADERSHIP = Skill(id="10", name="Leadership", category=SkillCategory.SOFT, proficiency=3)


@pytest.fixture
def make_employee() -> Callable[..., Employee]:
    ids = count(1)

    def _make(**overrides: Any) -> Employee:
        n = next(ids)
        data: dict[str, Any] = {
            "id": str(n),
            "first_name": f"First{n}",
            "last_name": f"Last{n}",
            "email": f"person{n}@pharma.com",
            "role": ROLE_ENGINEER,
            "department": DEPT_A,
            "experience_years": 3,
            "specialization": ["Oncology"],
            "salary": 70_000,
            "location": "Boston, MA",
            "start_date": date(2020, 1, 15),
            "skills": [SKILL_PYTHON],
            "performance_rating": 3.5,
            "is_active": True,
        }
        data.update(overrides)
        return Employee(**data)

    return _make


@pytest.fixture
def valid_form() -> dict[str, Any]:
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada.lovelace@pharma.com",
        "role_id": "1",
        "department_id": "1",
        "experience_years": 6,
        "specialization": ["Oncology", "Immunotherapy"],
        "salary": 95_000,
        "location": "Boston, MA",
        "start_date": "2021-03-01",
        "skills": ["7", "9"],
        "performance_rating": 4.2,
        "is_active": True,
    }


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
