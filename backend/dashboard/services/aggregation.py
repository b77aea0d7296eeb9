"""Summary metrics and chart series computed from an employee collection.

Every function accepts any collection, including an empty one, in which
case counts, averages and percentages come back as zero. Percentages are
relative to the collection passed in; callers choose whether that is the
full set or the filtered view.
"""

from __future__ import annotations

import math
from typing import Sequence

from dashboard.models.dashboard import (
    DepartmentMetric,
    DepartmentShare,
    SalaryBracketShare,
    ScatterPoint,
    SummaryCard,
    SummaryMetrics,
    TopDepartment,
)
from dashboard.models.employee import Employee
from dashboard.utils.formatters import format_currency, percentage, round_half_up

SALARY_BRACKETS: list[tuple[str, float, float]] = [
    ("$40k-60k", 40_000, 60_000),
    ("$60k-80k", 60_000, 80_000),
    ("$80k-100k", 80_000, 100_000),
    ("$100k-120k", 100_000, 120_000),
    ("$120k+", 120_000, math.inf),
]


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def count_by_department(employees: Sequence[Employee]) -> dict[str, int]:
    # dict keeps first-encounter order, which decides ties for the top department
    counts: dict[str, int] = {}
    for emp in employees:
        counts[emp.department.name] = counts.get(emp.department.name, 0) + 1
    return counts


def calculate_summary_metrics(employees: Sequence[Employee]) -> SummaryMetrics:
    total = len(employees)
    active = sum(1 for emp in employees if emp.is_active)
    department_counts = count_by_department(employees)

    top_department = None
    for name, count in department_counts.items():
        if top_department is None or count > top_department.count:
            top_department = TopDepartment(name=name, count=count)

    return SummaryMetrics(
        total_employees=total,
        active_employees=active,
        active_percentage=percentage(active, total),
        average_salary=_mean([emp.salary for emp in employees]),
        average_experience=_mean([emp.experience_years for emp in employees]),
        average_rating=_mean([emp.performance_rating for emp in employees]),
        department_counts=department_counts,
        top_department=top_department,
    )


def generate_department_data(employees: Sequence[Employee]) -> list[DepartmentShare]:
    total = len(employees)
    return [
        DepartmentShare(name=name, value=count, percentage=percentage(count, total))
        for name, count in count_by_department(employees).items()
    ]


def generate_salary_data(employees: Sequence[Employee]) -> list[SalaryBracketShare]:
    total = len(employees)
    results: list[SalaryBracketShare] = []
    for label, low, high in SALARY_BRACKETS:
        count = sum(1 for emp in employees if low <= emp.salary < high)
        if count > 0:
            results.append(SalaryBracketShare(range=label, count=count, percentage=percentage(count, total)))
    return results


def generate_department_metrics(employees: Sequence[Employee]) -> list[DepartmentMetric]:
    groups: dict[str, list[Employee]] = {}
    for emp in employees:
        groups.setdefault(emp.department.name, []).append(emp)

    metrics: list[DepartmentMetric] = []
    for name, members in groups.items():
        metrics.append(
            DepartmentMetric(
                name=name,
                avg_salary=int(round_half_up(_mean([m.salary for m in members]))),
                avg_experience=round_half_up(_mean([m.experience_years for m in members]), 1),
                avg_rating=round_half_up(_mean([m.performance_rating for m in members]), 1),
                count=len(members),
            )
        )
    return metrics


def generate_scatter_data(employees: Sequence[Employee]) -> list[ScatterPoint]:
    return [
        ScatterPoint(
            experience=emp.experience_years,
            salary=emp.salary,
            name=emp.full_name,
            department=emp.department.name,
            rating=emp.performance_rating,
        )
        for emp in employees
    ]


def build_summary_cards(metrics: SummaryMetrics) -> list[SummaryCard]:
    top = metrics.top_department
    return [
        SummaryCard(
            title="Total Employees",
            value=str(metrics.total_employees),
            subtitle=f"{metrics.active_employees} active ({metrics.active_percentage:.1f}%)",
        ),
        SummaryCard(
            title="Average Salary",
            value=format_currency(metrics.average_salary),
            subtitle="Across all departments",
        ),
        SummaryCard(
            title="Avg Experience",
            value=f"{round_half_up(metrics.average_experience, 1):.1f} years",
            subtitle="Industry experience",
        ),
        SummaryCard(
            title="Avg Performance",
            value=f"{round_half_up(metrics.average_rating, 1):.1f}/5.0",
            subtitle="Performance rating",
        ),
        SummaryCard(
            title="Top Department",
            value=top.name if top else "N/A",
            subtitle=f"{top.count} employees" if top else "No data",
        ),
    ]
