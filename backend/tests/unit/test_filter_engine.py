from __future__ import annotations

from datetime import date

import pytest

from conftest import DEPT_A, DEPT_B
from dashboard.models.employee import Department, Role, RoleCategory, RoleLevel
from dashboard.models.form import FilterCriteria, SortCriteria
from dashboard.services.filter_engine import (
    apply_filters_and_sort,
    get_experience_level,
)

NO_FILTERS = FilterCriteria()
NO_SORT = SortCriteria()


def _ids(employees):
    return [e.id for e in employees]


@pytest.mark.parametrize(
    ("years", "level"),
    [(0, "Junior"), (2, "Junior"), (3, "Mid"), (5, "Mid"), (6, "Senior"), (8, "Senior"), (9, "Expert"), (30, "Expert")],
)
def test_get_experience_level_thresholds(years, level):
    assert get_experience_level(years) == level


def test_empty_collection_returns_empty():
    assert apply_filters_and_sort([], FilterCriteria(department="A"), SortCriteria(field="salary")) == []


def test_no_filters_no_sort_is_identity(make_employee):
    employees = [make_employee(salary=s) for s in (90_000, 50_000, 70_000)]
    result = apply_filters_and_sort(employees, NO_FILTERS, NO_SORT)

    assert _ids(result) == _ids(employees)
    assert result is not employees


def test_department_filter_keeps_input_order(make_employee):
    a1 = make_employee(department=DEPT_A)
    b1 = make_employee(department=DEPT_B)
    a2 = make_employee(department=DEPT_A)

    result = apply_filters_and_sort([a1, b1, a2], FilterCriteria(department="A"), NO_SORT)

    assert _ids(result) == [a1.id, a2.id]


def test_experience_level_filter_senior(make_employee):
    employees = [make_employee(experience_years=y) for y in (1, 4, 7, 12)]

    result = apply_filters_and_sort(employees, FilterCriteria(experience_level="Senior"), NO_SORT)

    assert [e.experience_years for e in result] == [7]


def test_search_matches_name_email_or_role_case_insensitive(make_employee):
    by_first = make_employee(first_name="Rosalind")
    by_last = make_employee(last_name="ROSSI")
    by_email = make_employee(email="ross.geller@pharma.com")
    by_role = make_employee(role=Role(id="9", title="Crossover Lead", level=RoleLevel.LEAD, category=RoleCategory.SALES))
    no_match = make_employee(first_name="Zed")

    result = apply_filters_and_sort(
        [by_first, by_last, by_email, by_role, no_match],
        FilterCriteria(search_term="ROS"),
        NO_SORT,
    )

    assert _ids(result) == [by_first.id, by_last.id, by_email.id, by_role.id]


@pytest.mark.parametrize("active", [True, False])
def test_active_filter(make_employee, active):
    employees = [make_employee(is_active=True), make_employee(is_active=False), make_employee(is_active=True)]

    result = apply_filters_and_sort(employees, FilterCriteria(is_active=active), NO_SORT)

    assert all(e.is_active is active for e in result)
    assert len(result) == (2 if active else 1)


def test_filters_are_conjunctive(make_employee):
    employees = [
        make_employee(department=DEPT_A, is_active=True),
        make_employee(department=DEPT_A, is_active=False),
        make_employee(department=DEPT_B, is_active=True),
        make_employee(department=DEPT_B, is_active=False),
    ]

    both = apply_filters_and_sort(employees, FilterCriteria(department="A", is_active=True), NO_SORT)
    dept_only = set(_ids(apply_filters_and_sort(employees, FilterCriteria(department="A"), NO_SORT)))
    active_only = set(_ids(apply_filters_and_sort(employees, FilterCriteria(is_active=True), NO_SORT)))

    assert set(_ids(both)) == dept_only & active_only
    assert _ids(both) == [employees[0].id]


def test_sort_by_salary_both_directions(make_employee):
    employees = [make_employee(salary=s) for s in (70_000, 50_000, 90_000)]

    asc = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="salary", direction="asc"))
    desc = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="salary", direction="desc"))

    assert [e.salary for e in asc] == [50_000, 70_000, 90_000]
    assert [e.salary for e in desc] == [90_000, 70_000, 50_000]


def test_sort_strings_case_insensitive(make_employee):
    employees = [make_employee(last_name=n) for n in ("smith", "Adams", "brown")]

    result = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="last_name"))

    assert [e.last_name for e in result] == ["Adams", "brown", "smith"]


def test_sort_by_date(make_employee):
    employees = [make_employee(start_date=d) for d in (date(2022, 5, 1), date(2019, 1, 1), date(2020, 6, 30))]

    result = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="start_date", direction="desc"))

    assert [e.start_date.year for e in result] == [2022, 2020, 2019]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_sort_is_stable_for_ties(make_employee, direction):
    employees = [
        make_employee(salary=60_000),
        make_employee(salary=80_000),
        make_employee(salary=60_000),
        make_employee(salary=80_000),
        make_employee(salary=60_000),
    ]

    result = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="salary", direction=direction))

    low = [e.id for e in result if e.salary == 60_000]
    high = [e.id for e in result if e.salary == 80_000]
    assert low == ["1", "3", "5"]
    assert high == ["2", "4"]


def test_sort_by_department_uses_name_not_id(make_employee):
    # ids ordered opposite to names
    zeta = Department(id="1", name="Zeta")
    alpha = Department(id="9", name="alpha")
    employees = [make_employee(department=zeta), make_employee(department=alpha)]

    result = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="department"))

    assert [e.department.name for e in result] == ["alpha", "Zeta"]


def test_sort_by_role_uses_title_not_id(make_employee):
    zoologist = Role(id="1", title="Zoologist", level=RoleLevel.MID, category=RoleCategory.RESEARCH)
    analyst = Role(id="2", title="Analyst", level=RoleLevel.MID, category=RoleCategory.RESEARCH)
    employees = [make_employee(role=zoologist), make_employee(role=analyst)]

    result = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field="role", direction="asc"))

    assert [e.role.title for e in result] == ["Analyst", "Zoologist"]


@pytest.mark.parametrize("field", ["not_a_field", "skills", "specialization"])
def test_unknown_sort_field_keeps_order(make_employee, field):
    employees = [make_employee(salary=s) for s in (70_000, 50_000, 90_000)]

    result = apply_filters_and_sort(employees, NO_FILTERS, SortCriteria(field=field, direction="desc"))

    assert _ids(result) == _ids(employees)


def test_does_not_mutate_input(make_employee):
    employees = [make_employee(salary=s, department=d) for s, d in ((90_000, DEPT_B), (50_000, DEPT_A))]
    snapshot = [e.model_dump() for e in employees]
    original_ids = _ids(employees)

    apply_filters_and_sort(employees, FilterCriteria(department="A"), SortCriteria(field="salary"))

    assert _ids(employees) == original_ids
    assert [e.model_dump() for e in employees] == snapshot
