"""Payload models for creating and editing employees, plus list criteria."""

from __future__ import annotations

import re
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_EXPERIENCE_YEARS = 0
MAX_EXPERIENCE_YEARS = 50
MIN_RATING = 1.0
MAX_RATING = 5.0

REQUIRED_MESSAGES: dict[str, str] = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "role_id": "Role is required",
    "department_id": "Department is required",
    "experience_years": "Experience years is required",
    "salary": "Salary is required",
    "location": "Location is required",
    "start_date": "Start date is required",
    "performance_rating": "Performance rating is required",
}


class EmployeeUpdate(BaseModel):
    """Partial employee payload. Only fields that are supplied get applied."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    role_id: str | None = None
    department_id: str | None = None
    experience_years: int | None = None
    specialization: list[str] | None = None
    salary: float | None = None
    location: str | None = None
    start_date: date | None = None
    skills: list[str] | None = None
    performance_rating: float | None = None
    is_active: bool | None = None

    @field_validator("first_name", "last_name", "role_id", "department_id", "location")
    @classmethod
    def _not_blank(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        if not value.strip():
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return value.strip()

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError(REQUIRED_MESSAGES["email"])
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("experience_years")
    @classmethod
    def _experience_in_range(cls, value: int | None) -> int | None:
        if value is not None and not MIN_EXPERIENCE_YEARS <= value <= MAX_EXPERIENCE_YEARS:
            raise ValueError(
                f"Experience years must be between {MIN_EXPERIENCE_YEARS} and {MAX_EXPERIENCE_YEARS}"
            )
        return value

    @field_validator("salary")
    @classmethod
    def _salary_positive(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("Salary must be greater than 0")
        return value

    @field_validator("performance_rating")
    @classmethod
    def _rating_in_range(cls, value: float | None) -> float | None:
        if value is not None and not MIN_RATING <= value <= MAX_RATING:
            raise ValueError("Performance rating must be between 1 and 5")
        return value

    def changes(self) -> dict[str, object]:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class EmployeeFormData(EmployeeUpdate):
    """Complete payload submitted by the employee form."""

    first_name: str
    last_name: str
    email: str
    role_id: str
    department_id: str
    experience_years: int
    specialization: list[str] = Field(default_factory=list)
    salary: float
    location: str
    start_date: date
    skills: list[str] = Field(default_factory=list)
    performance_rating: float
    is_active: bool = True


class FilterCriteria(BaseModel):
    """Empty strings and ``None`` mean "do not filter on this attribute"."""

    department: str = ""
    experience_level: str = ""
    search_term: str = ""
    is_active: bool | None = None


class SortCriteria(BaseModel):
    field: str | None = None
    direction: Literal["asc", "desc"] = "asc"
