"""Aggregate models for the dashboard summary cards and charts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class TopDepartment(BaseModel):
    name: str
    count: int


class SummaryMetrics(BaseModel):
    total_employees: int
    active_employees: int
    active_percentage: float
    average_salary: float
    average_experience: float
    average_rating: float
    department_counts: dict[str, int] = Field(default_factory=dict)
    top_department: TopDepartment | None = None


class DepartmentShare(BaseModel):
    name: str
    value: int
    percentage: float


class SalaryBracketShare(BaseModel):
    range: str
    count: int
    percentage: float


class DepartmentMetric(BaseModel):
    name: str
    avg_salary: int
    avg_experience: float
    avg_rating: float
    count: int


class ScatterPoint(BaseModel):
    experience: int
    salary: float
    name: str
    department: str
    rating: float


class SummaryCard(BaseModel):
    """Display-ready card derived from :class:`SummaryMetrics`."""

    title: str
    value: str
    subtitle: str


class SummaryResponse(BaseModel):
    scope: Literal["all", "filtered"]
    metrics: SummaryMetrics
    cards: list[SummaryCard]


class ChartsResponse(BaseModel):
    scope: Literal["all", "filtered"]
    departments: list[DepartmentShare]
    salary_ranges: list[SalaryBracketShare]
    department_metrics: list[DepartmentMetric]
    scatter: list[ScatterPoint]
