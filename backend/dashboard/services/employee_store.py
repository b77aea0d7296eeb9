"""
Employee state container.

Holds the canonical records, the current filter and sort criteria, and the
derived view (records after filtering and sorting). State changes go through
``reduce(state, action)``, a pure function over a closed set of actions.
Every action that touches records, filters or sort is followed by
``_recompute``, the only place the derived view is ever assigned.

``EmployeeStore`` wraps the reducer with the async operations that talk to
the record source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Union, assert_never

from dashboard.models.employee import Employee
from dashboard.models.form import EmployeeFormData, EmployeeUpdate, FilterCriteria, SortCriteria
from dashboard.services.employee_repository import (
    EmployeeNotFoundError,
    EmployeeRepository,
    EmployeeValidationError,
)
from dashboard.services.filter_engine import apply_filters_and_sort

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The record source failed; the store error slot has been set."""


class DuplicateEmployeeError(Exception):
    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee with id '{employee_id}' already exists")


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmployeeState:
    employees: tuple[Employee, ...] = ()
    filtered_employees: tuple[Employee, ...] = ()
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortCriteria = field(default_factory=SortCriteria)
    loading: bool = False
    error: str | None = None


def initial_state() -> EmployeeState:
    return EmployeeState()


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadRecords:
    employees: tuple[Employee, ...]


@dataclass(frozen=True)
class AddRecord:
    employee: Employee


@dataclass(frozen=True)
class UpdateRecord:
    employee: Employee


@dataclass(frozen=True)
class DeleteRecord:
    employee_id: str


@dataclass(frozen=True)
class SetFilters:
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class SetSort:
    sort: SortCriteria


@dataclass(frozen=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True)
class SetError:
    error: str | None


Action = Union[
    LoadRecords,
    AddRecord,
    UpdateRecord,
    DeleteRecord,
    SetFilters,
    SetSort,
    SetLoading,
    SetError,
]


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def _recompute(state: EmployeeState) -> EmployeeState:
    view = apply_filters_and_sort(state.employees, state.filters, state.sort)
    return replace(state, filtered_employees=tuple(view))


def _index_of(employees: tuple[Employee, ...], employee_id: str) -> int:
    for index, emp in enumerate(employees):
        if emp.id == employee_id:
            return index
    raise EmployeeNotFoundError(employee_id)


def reduce(state: EmployeeState, action: Action) -> EmployeeState:
    """Apply one action and return the new state. The input state is never modified.

    Raises EmployeeNotFoundError / DuplicateEmployeeError for record actions that
    reference a missing id or reuse an existing one; the state is left as it was.
    """
    match action:
        case LoadRecords(employees=employees):
            ids = [emp.id for emp in employees]
            if len(ids) != len(set(ids)):
                duplicate = next(i for i in ids if ids.count(i) > 1)
                raise DuplicateEmployeeError(duplicate)
            return _recompute(replace(state, employees=tuple(employees), loading=False, error=None))

        case AddRecord(employee=employee):
            if any(emp.id == employee.id for emp in state.employees):
                raise DuplicateEmployeeError(employee.id)
            return _recompute(replace(state, employees=state.employees + (employee,)))

        case UpdateRecord(employee=employee):
            index = _index_of(state.employees, employee.id)
            employees = state.employees[:index] + (employee,) + state.employees[index + 1 :]
            return _recompute(replace(state, employees=employees))

        case DeleteRecord(employee_id=employee_id):
            index = _index_of(state.employees, employee_id)
            employees = state.employees[:index] + state.employees[index + 1 :]
            return _recompute(replace(state, employees=employees))

        case SetFilters(changes=changes):
            filters = FilterCriteria.model_validate({**state.filters.model_dump(), **changes})
            return _recompute(replace(state, filters=filters))

        case SetSort(sort=sort):
            return _recompute(replace(state, sort=sort))

        case SetLoading(loading=loading):
            return replace(state, loading=loading)

        case SetError(error=error):
            return replace(state, error=error, loading=False)

        case _:
            assert_never(action)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class EmployeeStore:
    def __init__(self, repository: EmployeeRepository, state: EmployeeState | None = None) -> None:
        self.repository = repository
        self._state = state or initial_state()

    @property
    def state(self) -> EmployeeState:
        return self._state

    @property
    def employees(self) -> list[Employee]:
        return list(self._state.employees)

    @property
    def filtered_employees(self) -> list[Employee]:
        return list(self._state.filtered_employees)

    def dispatch(self, action: Action) -> EmployeeState:
        self._state = reduce(self._state, action)
        return self._state

    def set_filters(self, **changes: Any) -> EmployeeState:
        return self.dispatch(SetFilters(changes=changes))

    def clear_filters(self) -> EmployeeState:
        return self.dispatch(SetFilters(changes=FilterCriteria().model_dump()))

    def set_sort(self, sort_field: str | None, direction: str = "asc") -> EmployeeState:
        return self.dispatch(SetSort(sort=SortCriteria(field=sort_field, direction=direction)))

    def toggle_sort(self, sort_field: str) -> EmployeeState:
        """Ascending on a new field; flips direction when the same field is chosen again."""
        current = self._state.sort
        direction = "desc" if current.field == sort_field and current.direction == "asc" else "asc"
        return self.set_sort(sort_field, direction)

    def reset(self) -> EmployeeState:
        return self.dispatch(SetError(error=None))

    def _fail(self, message: str) -> StoreError:
        logger.exception("%s", message)
        self.dispatch(SetError(error=message))
        return StoreError(message)

    async def load(self) -> list[Employee]:
        self.dispatch(SetLoading(loading=True))
        try:
            employees = await self.repository.get_all_employees()
        except Exception as err:
            raise self._fail("Failed to load employee data. Please try again.") from err

        try:
            self.dispatch(LoadRecords(employees=tuple(employees)))
        except DuplicateEmployeeError as err:
            raise self._fail("Employee data contains duplicate ids. Please try again.") from err
        logger.info("Loaded %d employees", len(employees))
        return self.employees

    async def create(self, payload: EmployeeFormData | Mapping[str, Any]) -> Employee:
        try:
            employee = await self.repository.create_employee(payload)
        except EmployeeValidationError:
            raise
        except Exception as err:
            raise self._fail("Failed to create employee. Please try again.") from err

        self.dispatch(AddRecord(employee=employee))
        return employee

    async def update(self, employee_id: str, payload: EmployeeUpdate | Mapping[str, Any]) -> Employee:
        try:
            employee = await self.repository.update_employee(employee_id, payload)
        except (EmployeeValidationError, EmployeeNotFoundError):
            raise
        except Exception as err:
            raise self._fail("Failed to update employee. Please try again.") from err

        self.dispatch(UpdateRecord(employee=employee))
        return employee

    async def delete(self, employee_id: str) -> None:
        try:
            await self.repository.delete_employee(employee_id)
        except EmployeeNotFoundError:
            raise
        except Exception as err:
            raise self._fail("Failed to delete employee. Please try again.") from err

        self.dispatch(DeleteRecord(employee_id=employee_id))


def create_store(repository: EmployeeRepository) -> EmployeeStore:
    return EmployeeStore(repository)
