"""Filtering and sorting of employee collections for the table view."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from dashboard.models.employee import Employee
from dashboard.models.form import FilterCriteria, SortCriteria

logger = logging.getLogger(__name__)

EXPERIENCE_LEVELS: tuple[str, ...] = ("Junior", "Mid", "Senior", "Expert")

# Upper bounds (inclusive) in years for each level; anything above is Expert.
_EXPERIENCE_THRESHOLDS: list[tuple[int, str]] = [
    (2, "Junior"),
    (5, "Mid"),
    (8, "Senior"),
]

_SORT_KEYS: dict[str, Callable[[Employee], Any]] = {
    "id": lambda e: e.id,
    "first_name": lambda e: e.first_name,
    "last_name": lambda e: e.last_name,
    "email": lambda e: e.email,
    "role": lambda e: e.role.title,
    "department": lambda e: e.department.name,
    "experience_years": lambda e: e.experience_years,
    "salary": lambda e: e.salary,
    "location": lambda e: e.location,
    "start_date": lambda e: e.start_date,
    "performance_rating": lambda e: e.performance_rating,
    "is_active": lambda e: e.is_active,
}

SORTABLE_FIELDS: frozenset[str] = frozenset(_SORT_KEYS)


def get_experience_level(years: int) -> str:
    for upper, label in _EXPERIENCE_THRESHOLDS:
        if years <= upper:
            return label
    return "Expert"


def _matches_search(employee: Employee, term: str) -> bool:
    return (
        term in employee.first_name.lower()
        or term in employee.last_name.lower()
        or term in employee.email.lower()
        or term in employee.role.title.lower()
    )


def filter_employees(employees: Iterable[Employee], filters: FilterCriteria) -> list[Employee]:
    filtered = list(employees)

    if filters.department:
        filtered = [e for e in filtered if e.department.name == filters.department]

    if filters.experience_level:
        filtered = [
            e for e in filtered if get_experience_level(e.experience_years) == filters.experience_level
        ]

    if filters.search_term:
        term = filters.search_term.lower()
        filtered = [e for e in filtered if _matches_search(e, term)]

    if filters.is_active is not None:
        filtered = [e for e in filtered if e.is_active == filters.is_active]

    return filtered


def sort_employees(employees: Iterable[Employee], sort: SortCriteria) -> list[Employee]:
    records = list(employees)
    if not sort.field:
        return records

    key_fn = _SORT_KEYS.get(sort.field)
    if key_fn is None:
        logger.debug("Ignoring unknown sort field %s", sort.field)
        return records

    def sort_key(employee: Employee) -> Any:
        value = key_fn(employee)
        return value.lower() if isinstance(value, str) else value

    # sorted() is stable, including with reverse=True
    return sorted(records, key=sort_key, reverse=sort.direction == "desc")


def apply_filters_and_sort(
    employees: Iterable[Employee],
    filters: FilterCriteria,
    sort: SortCriteria,
) -> list[Employee]:
    """Return a new list with the filters applied (AND semantics) and then sorted.

    The input collection and its records are left untouched.
    """
    return sort_employees(filter_employees(employees, filters), sort)
