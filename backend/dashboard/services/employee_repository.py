"""In-memory employee record source seeded with mock organization data."""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import date
from typing import Any, Mapping

from pydantic import ValidationError

from dashboard.core.config import Settings
from dashboard.models.employee import (
    Department,
    Employee,
    Role,
    RoleCategory,
    RoleLevel,
    Skill,
    SkillCategory,
)
from dashboard.models.form import REQUIRED_MESSAGES, EmployeeFormData, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeValidationError(Exception):
    """Form payload or reference ids rejected; ``errors`` maps field name to message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


class EmployeeNotFoundError(Exception):
    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee with id '{employee_id}' not found")


MOCK_DEPARTMENTS: list[Department] = [
    Department(id="1", name="Research & Development", description="Drug discovery and development", head_count=45, budget=5_000_000),
    Department(id="2", name="Clinical Research", description="Clinical trials and studies", head_count=32, budget=3_500_000),
    Department(id="3", name="Regulatory Affairs", description="Compliance and regulatory submissions", head_count=18, budget=2_000_000),
    Department(id="4", name="Manufacturing", description="Production and quality control", head_count=28, budget=4_000_000),
    Department(id="5", name="Sales & Marketing", description="Commercial operations", head_count=25, budget=2_800_000),
    Department(id="6", name="Quality Assurance", description="Quality systems and compliance", head_count=22, budget=1_800_000),
]

MOCK_ROLES: list[Role] = [
    Role(id="1", title="Research Scientist", level=RoleLevel.SENIOR, category=RoleCategory.RESEARCH),
    Role(id="2", title="Clinical Research Associate", level=RoleLevel.MID, category=RoleCategory.CLINICAL),
    Role(id="3", title="Regulatory Affairs Specialist", level=RoleLevel.SENIOR, category=RoleCategory.REGULATORY),
    Role(id="4", title="Manufacturing Engineer", level=RoleLevel.MID, category=RoleCategory.ENGINEERING),
    Role(id="5", title="Sales Representative", level=RoleLevel.JUNIOR, category=RoleCategory.SALES),
    Role(id="6", title="QA Manager", level=RoleLevel.MANAGER, category=RoleCategory.ENGINEERING),
    Role(id="7", title="Principal Scientist", level=RoleLevel.LEAD, category=RoleCategory.RESEARCH),
    Role(id="8", title="Clinical Data Manager", level=RoleLevel.SENIOR, category=RoleCategory.CLINICAL),
    Role(id="9", title="Regulatory Manager", level=RoleLevel.MANAGER, category=RoleCategory.REGULATORY),
    Role(id="10", title="Production Supervisor", level=RoleLevel.LEAD, category=RoleCategory.ENGINEERING),
]

MOCK_SKILLS: list[Skill] = [
    Skill(id="1", name="Drug Discovery", category=SkillCategory.DOMAIN, proficiency=4),
    Skill(id="2", name="Clinical Trial Design", category=SkillCategory.DOMAIN, proficiency=5),
    Skill(id="3", name="FDA Regulations", category=SkillCategory.DOMAIN, proficiency=4),
    Skill(id="4", name="Good Manufacturing Practice", category=SkillCategory.DOMAIN, proficiency=3),
    Skill(id="5", name="Pharmaceutical Sales", category=SkillCategory.DOMAIN, proficiency=4),
    Skill(id="6", name="Quality Systems", category=SkillCategory.DOMAIN, proficiency=5),
    Skill(id="7", name="Python", category=SkillCategory.TECHNICAL, proficiency=4),
    Skill(id="8", name="Statistical Analysis", category=SkillCategory.TECHNICAL, proficiency=5),
    Skill(id="9", name="Project Management", category=SkillCategory.SOFT, proficiency=4),
    Skill(id="10", name="Leadership", category=SkillCategory.SOFT, proficiency=3),
]

_FIRST_NAMES = [
    "John", "Jane", "Michael", "Sarah", "David", "Emily", "Robert", "Jessica", "William",
    "Ashley", "James", "Amanda", "Christopher", "Jennifer", "Daniel", "Lisa", "Matthew",
    "Karen", "Anthony", "Nancy", "Mark", "Betty", "Donald", "Helen", "Steven", "Sandra",
    "Paul", "Donna", "Andrew", "Carol", "Joshua", "Ruth", "Kenneth", "Sharon",
]
_LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
    "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson", "White",
    "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker", "Young",
    "Allen", "King",
]
_LOCATIONS = [
    "New York, NY", "San Francisco, CA", "Boston, MA", "Chicago, IL",
    "Los Angeles, CA", "Seattle, WA", "Philadelphia, PA", "San Diego, CA",
]
_SPECIALIZATIONS = [
    ["Oncology", "Immunotherapy"],
    ["Cardiology", "Diabetes"],
    ["Neurology", "Psychiatry"],
    ["Infectious Diseases", "Vaccines"],
    ["Rare Diseases", "Pediatrics"],
    ["Women's Health", "Reproductive Medicine"],
    ["Respiratory", "Allergy"],
    ["Dermatology", "Rheumatology"],
]


def _years_before(reference: date, years: int) -> date:
    try:
        return reference.replace(year=reference.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return reference.replace(year=reference.year - years, day=28)


def generate_mock_employees(count: int, seed: int, today: date | None = None) -> list[Employee]:
    rng = random.Random(seed)
    today = today or date.today()
    employees: list[Employee] = []

    for i in range(1, count + 1):
        first_name = rng.choice(_FIRST_NAMES)
        last_name = rng.choice(_LAST_NAMES)
        experience_years = rng.randrange(20) + 1
        skills = [s for s in MOCK_SKILLS if rng.random() > 0.5 or s.category is SkillCategory.SOFT]
        skills = skills[: 3 + rng.randrange(3)]

        employees.append(
            Employee(
                id=str(i),
                first_name=first_name,
                last_name=last_name,
                email=f"{first_name.lower()}.{last_name.lower()}@pharma.com",
                role=rng.choice(MOCK_ROLES),
                department=rng.choice(MOCK_DEPARTMENTS),
                experience_years=experience_years,
                specialization=list(rng.choice(_SPECIALIZATIONS)),
                salary=50_000 + experience_years * 5_000 + rng.randrange(30_000),
                location=rng.choice(_LOCATIONS),
                start_date=_years_before(today, rng.randrange(10)),
                skills=skills,
                performance_rating=round(1 + rng.random() * 4, 1),
                is_active=rng.random() > 0.1,
            )
        )

    return employees


def _validation_messages(err: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for item in err.errors():
        loc = item.get("loc") or ()
        field = str(loc[0]) if loc else "payload"
        if item["type"] == "missing":
            message = REQUIRED_MESSAGES.get(field, item["msg"])
        elif item["type"] == "value_error":
            message = str(item["ctx"]["error"])
        else:
            message = item["msg"]
        errors.setdefault(field, message)
    return errors


def validate_employee_form(payload: EmployeeFormData | Mapping[str, Any]) -> EmployeeFormData:
    if isinstance(payload, EmployeeFormData):
        return payload
    try:
        return EmployeeFormData.model_validate(payload)
    except ValidationError as e:
        raise EmployeeValidationError(_validation_messages(e)) from e


def validate_employee_update(payload: EmployeeUpdate | Mapping[str, Any]) -> EmployeeUpdate:
    if isinstance(payload, EmployeeUpdate):
        return payload
    try:
        return EmployeeUpdate.model_validate(payload)
    except ValidationError as e:
        raise EmployeeValidationError(_validation_messages(e)) from e


class EmployeeRepository:
    def __init__(
        self,
        departments: list[Department] | None = None,
        roles: list[Role] | None = None,
        skills: list[Skill] | None = None,
        employees: list[Employee] | None = None,
        latency_ms: int = 0,
    ) -> None:
        self.departments = list(departments if departments is not None else MOCK_DEPARTMENTS)
        self.roles = list(roles if roles is not None else MOCK_ROLES)
        self.skills = list(skills if skills is not None else MOCK_SKILLS)
        self.employees: list[Employee] = list(employees or [])
        self.latency_ms = latency_ms
        self.initialized = employees is not None

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        self.latency_ms = settings.SIMULATED_LATENCY_MS
        self.employees = generate_mock_employees(settings.SEED_EMPLOYEE_COUNT, settings.SEED_RANDOM_SEED)
        self.initialized = True
        logger.info(
            "EmployeeRepository initialized (employees=%d, seed=%d)",
            len(self.employees),
            settings.SEED_RANDOM_SEED,
        )

    async def close(self) -> None:
        self.employees = []
        self.initialized = False

    async def _delay(self) -> None:
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000)

    async def get_all_employees(self) -> list[Employee]:
        await self._delay()
        return list(self.employees)

    async def get_employee_by_id(self, employee_id: str) -> Employee | None:
        await self._delay()
        return next((emp for emp in self.employees if emp.id == employee_id), None)

    async def get_departments(self) -> list[Department]:
        await self._delay()
        return list(self.departments)

    async def get_roles(self) -> list[Role]:
        await self._delay()
        return list(self.roles)

    async def get_skills(self) -> list[Skill]:
        await self._delay()
        return list(self.skills)

    async def create_employee(self, payload: EmployeeFormData | Mapping[str, Any]) -> Employee:
        form = validate_employee_form(payload)
        await self._delay()

        references = self._resolve_references(form.department_id, form.role_id, form.skills)
        employee = Employee(
            id=self._next_id(),
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            experience_years=form.experience_years,
            specialization=list(form.specialization),
            salary=form.salary,
            location=form.location,
            start_date=form.start_date,
            performance_rating=form.performance_rating,
            is_active=form.is_active,
            **references,
        )
        self.employees.append(employee)
        logger.info("Created employee %s (%s)", employee.id, employee.full_name)
        return employee

    async def update_employee(self, employee_id: str, payload: EmployeeUpdate | Mapping[str, Any]) -> Employee:
        patch = validate_employee_update(payload)
        await self._delay()

        index = self._index_of(employee_id)
        changes = patch.changes()
        references = self._resolve_references(
            changes.pop("department_id", None),
            changes.pop("role_id", None),
            changes.pop("skills", None),
        )

        updated = self.employees[index].model_copy(update={**changes, **references})
        self.employees[index] = updated
        logger.info("Updated employee %s (fields=%s)", employee_id, sorted({**changes, **references}))
        return updated

    async def delete_employee(self, employee_id: str) -> None:
        await self._delay()
        index = self._index_of(employee_id)
        del self.employees[index]
        logger.info("Deleted employee %s", employee_id)

    def _index_of(self, employee_id: str) -> int:
        for index, emp in enumerate(self.employees):
            if emp.id == employee_id:
                return index
        raise EmployeeNotFoundError(employee_id)

    def _next_id(self) -> str:
        numeric = [int(emp.id) for emp in self.employees if emp.id.isdigit()]
        return str(max(numeric, default=0) + 1)

    def _resolve_references(
        self,
        department_id: str | None,
        role_id: str | None,
        skill_ids: list[str] | None,
    ) -> dict[str, Any]:
        """Look up referenced entities; every unknown id is reported, nothing is dropped."""
        resolved: dict[str, Any] = {}
        errors: dict[str, str] = {}

        if department_id is not None:
            department = next((d for d in self.departments if d.id == department_id), None)
            if department is None:
                errors["department_id"] = f"Unknown department: {department_id}"
            resolved["department"] = department

        if role_id is not None:
            role = next((r for r in self.roles if r.id == role_id), None)
            if role is None:
                errors["role_id"] = f"Unknown role: {role_id}"
            resolved["role"] = role

        if skill_ids is not None:
            by_id = {s.id: s for s in self.skills}
            missing = [sid for sid in skill_ids if sid not in by_id]
            if missing:
                errors["skills"] = f"Unknown skill(s): {', '.join(missing)}"
            resolved["skills"] = [by_id[sid] for sid in skill_ids if sid in by_id]

        if errors:
            raise EmployeeValidationError(errors)
        return resolved
