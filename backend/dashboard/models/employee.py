"""Employee record model and the reference entities it points to."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from dashboard.models.form import FilterCriteria, SortCriteria


class RoleLevel(str, Enum):
    """Seniority of a role."""

    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    LEAD = "Lead"
    MANAGER = "Manager"
    DIRECTOR = "Director"


class RoleCategory(str, Enum):
    """Functional area a role belongs to."""

    ENGINEERING = "Engineering"
    RESEARCH = "Research"
    CLINICAL = "Clinical"
    REGULATORY = "Regulatory"
    SALES = "Sales"


class SkillCategory(str, Enum):
    TECHNICAL = "Technical"
    DOMAIN = "Domain"
    SOFT = "Soft"


class Department(BaseModel):
    id: str
    name: str
    description: str = ""
    head_count: int | None = None
    budget: float | None = None


class Role(BaseModel):
    id: str
    title: str
    level: RoleLevel
    category: RoleCategory


class Skill(BaseModel):
    id: str
    name: str
    category: SkillCategory
    proficiency: int = Field(..., ge=1, le=5)


class Employee(BaseModel):
    """A single employee with resolved role, department and skill references."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: Role
    department: Department
    experience_years: int = Field(..., ge=0)
    specialization: list[str] = Field(default_factory=list)
    salary: float = Field(..., gt=0)
    location: str
    start_date: date
    skills: list[Skill] = Field(default_factory=list)
    performance_rating: float = Field(..., ge=1.0, le=5.0)
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class EmployeeListItem(Employee):
    """Table row: the employee plus display-ready derived values."""

    experience_level: str
    salary_display: str
    start_date_display: str


class EmployeeListResponse(BaseModel):
    total: int
    filtered: int
    filters: FilterCriteria
    sort: SortCriteria
    employees: list[EmployeeListItem]
