from __future__ import annotations

import pytest

from conftest import DEPT_A, DEPT_B
from dashboard.models.employee import Department
from dashboard.services.aggregation import (
    build_summary_cards,
    calculate_summary_metrics,
    generate_department_data,
    generate_department_metrics,
    generate_salary_data,
    generate_scatter_data,
)

DEPT_C = Department(id="3", name="C")


def test_summary_metrics_empty_collection_is_all_zero():
    metrics = calculate_summary_metrics([])

    assert metrics.total_employees == 0
    assert metrics.active_employees == 0
    assert metrics.active_percentage == 0.0
    assert metrics.average_salary == 0.0
    assert metrics.average_experience == 0.0
    assert metrics.average_rating == 0.0
    assert metrics.department_counts == {}
    assert metrics.top_department is None


def test_chart_series_empty_collection():
    assert generate_department_data([]) == []
    assert generate_salary_data([]) == []
    assert generate_department_metrics([]) == []
    assert generate_scatter_data([]) == []


def test_summary_metrics_values(make_employee):
    employees = [
        make_employee(department=DEPT_A, salary=60_000, experience_years=2, performance_rating=3.0, is_active=True),
        make_employee(department=DEPT_B, salary=80_000, experience_years=4, performance_rating=4.0, is_active=False),
        make_employee(department=DEPT_A, salary=100_000, experience_years=6, performance_rating=5.0, is_active=True),
        make_employee(department=DEPT_B, salary=40_000, experience_years=8, performance_rating=2.0, is_active=True),
    ]

    metrics = calculate_summary_metrics(employees)

    assert metrics.total_employees == 4
    assert metrics.active_employees == 3
    assert metrics.active_percentage == 75.0
    assert metrics.average_salary == 70_000
    assert metrics.average_experience == 5.0
    assert metrics.average_rating == 3.5
    assert metrics.department_counts == {"A": 2, "B": 2}


def test_top_department_tie_goes_to_first_encountered(make_employee):
    employees = [
        make_employee(department=DEPT_B),
        make_employee(department=DEPT_A),
        make_employee(department=DEPT_A),
        make_employee(department=DEPT_B),
    ]

    metrics = calculate_summary_metrics(employees)

    assert metrics.top_department is not None
    assert metrics.top_department.name == "B"
    assert metrics.top_department.count == 2


def test_top_department_highest_count(make_employee):
    employees = [make_employee(department=DEPT_B), make_employee(department=DEPT_A), make_employee(department=DEPT_A)]

    assert calculate_summary_metrics(employees).top_department.name == "A"


def test_department_distribution(make_employee):
    employees = [make_employee(department=DEPT_A), make_employee(department=DEPT_A), make_employee(department=DEPT_B)]

    data = generate_department_data(employees)

    assert [(d.name, d.value) for d in data] == [("A", 2), ("B", 1)]
    assert [d.percentage for d in data] == [66.7, 33.3]


def test_department_percentages_sum_to_100(make_employee):
    depts = [DEPT_A, DEPT_B, DEPT_C, DEPT_A, DEPT_C, DEPT_A, DEPT_B]
    employees = [make_employee(department=d) for d in depts]

    total = sum(d.percentage for d in generate_department_data(employees))

    assert total == pytest.approx(100.0, abs=0.2)


def test_salary_brackets_omit_empty(make_employee):
    employees = [make_employee(salary=s) for s in (45_000, 65_000, 125_000)]

    data = generate_salary_data(employees)

    assert [(d.range, d.count) for d in data] == [("$40k-60k", 1), ("$60k-80k", 1), ("$120k+", 1)]
    assert all(d.percentage == 33.3 for d in data)


def test_salary_bracket_boundaries_are_half_open(make_employee):
    employees = [make_employee(salary=s) for s in (60_000, 79_999.99, 100_000, 120_000)]

    data = {d.range: d.count for d in generate_salary_data(employees)}

    assert data == {"$60k-80k": 2, "$100k-120k": 1, "$120k+": 1}


def test_salary_below_lowest_bracket_is_not_counted(make_employee):
    employees = [make_employee(salary=30_000), make_employee(salary=50_000)]

    data = generate_salary_data(employees)

    assert [(d.range, d.count, d.percentage) for d in data] == [("$40k-60k", 1, 50.0)]


def test_department_metrics_rounding(make_employee):
    employees = [
        make_employee(department=DEPT_A, salary=70_001, experience_years=3, performance_rating=3.0),
        make_employee(department=DEPT_A, salary=70_000, experience_years=4, performance_rating=4.0),
        make_employee(department=DEPT_B, salary=90_000, experience_years=10, performance_rating=4.25),
        make_employee(department=DEPT_B, salary=90_000, experience_years=10, performance_rating=4.2),
    ]

    metrics = {m.name: m for m in generate_department_metrics(employees)}

    assert metrics["A"].avg_salary == 70_001
    assert metrics["A"].avg_experience == 3.5
    assert metrics["A"].avg_rating == 3.5
    assert metrics["A"].count == 2
    assert metrics["B"].avg_salary == 90_000
    assert metrics["B"].avg_rating == 4.2
    assert metrics["B"].count == 2


def test_scatter_points(make_employee):
    emp = make_employee(first_name="Grace", last_name="Hopper", experience_years=12, salary=130_000)

    [point] = generate_scatter_data([emp])

    assert point.name == "Grace Hopper"
    assert point.experience == 12
    assert point.salary == 130_000
    assert point.department == "A"


def test_summary_cards(make_employee):
    employees = [
        make_employee(salary=85_000, experience_years=4, performance_rating=4.0),
        make_employee(salary=95_000, experience_years=6, performance_rating=3.0, is_active=False),
    ]

    cards = {c.title: c for c in build_summary_cards(calculate_summary_metrics(employees))}

    assert cards["Total Employees"].value == "2"
    assert cards["Total Employees"].subtitle == "1 active (50.0%)"
    assert cards["Average Salary"].value == "$90,000"
    assert cards["Avg Experience"].value == "5.0 years"
    assert cards["Avg Performance"].value == "3.5/5.0"
    assert cards["Top Department"].value == "A"


def test_summary_cards_empty():
    cards = {c.title: c for c in build_summary_cards(calculate_summary_metrics([]))}

    assert cards["Top Department"].value == "N/A"
    assert cards["Top Department"].subtitle == "No data"
    assert cards["Average Salary"].value == "$0"
