from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from pydantic import ValidationError

from dashboard.core.dependencies import get_ready_store, get_store
from dashboard.models.employee import Employee, EmployeeListItem, EmployeeListResponse
from dashboard.models.form import FilterCriteria, SortCriteria
from dashboard.services.employee_repository import EmployeeNotFoundError, EmployeeValidationError
from dashboard.services.employee_store import EmployeeStore, StoreError
from dashboard.services.filter_engine import get_experience_level
from dashboard.utils.formatters import format_currency, format_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def _list_item(employee: Employee) -> EmployeeListItem:
    return EmployeeListItem(
        **employee.model_dump(),
        experience_level=get_experience_level(employee.experience_years),
        salary_display=format_currency(employee.salary),
        start_date_display=format_date(employee.start_date),
    )


def _list_response(store: EmployeeStore) -> EmployeeListResponse:
    state = store.state
    return EmployeeListResponse(
        total=len(state.employees),
        filtered=len(state.filtered_employees),
        filters=state.filters,
        sort=state.sort,
        employees=[_list_item(emp) for emp in state.filtered_employees],
    )


def _validation_failed(err: EmployeeValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"message": "Validation failed", "errors": err.errors},
    )


def _store_failed(err: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(err),
    )


@router.get("", response_model=EmployeeListResponse)
async def list_employees(store: EmployeeStore = Depends(get_ready_store)):  # noqa: B008
    return _list_response(store)


@router.patch("/filters", response_model=EmployeeListResponse)
async def update_filters(
    changes: dict[str, Any] = Body(...),  # noqa: B008
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    unknown = set(changes) - set(FilterCriteria.model_fields)
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown filter(s): {', '.join(sorted(unknown))}",
        )
    try:
        store.set_filters(**changes)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
    return _list_response(store)


@router.delete("/filters", response_model=EmployeeListResponse)
async def clear_filters(store: EmployeeStore = Depends(get_ready_store)):  # noqa: B008
    store.clear_filters()
    return _list_response(store)


@router.put("/sort", response_model=EmployeeListResponse)
async def update_sort(
    sort: SortCriteria,
    toggle: bool = False,
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    """Replace the sort, or with ``toggle`` flip direction when the same field is chosen again."""
    if not toggle:
        store.set_sort(sort.field, sort.direction)
    elif sort.field is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A sort field is required to toggle",
        )
    else:
        store.toggle_sort(sort.field)
    return _list_response(store)


@router.post("/reload", response_model=EmployeeListResponse)
async def reload_employees(store: EmployeeStore = Depends(get_store)):  # noqa: B008
    """Clear the store error and load the records again from the record source."""
    store.reset()
    try:
        await store.load()
    except StoreError as e:
        raise _store_failed(e) from e
    return _list_response(store)


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    employee = next((emp for emp in store.state.employees if emp.id == employee_id), None)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )
    return employee


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: dict[str, Any] = Body(...),  # noqa: B008
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    try:
        return await store.create(payload)
    except EmployeeValidationError as e:
        logger.info("Rejected employee create: %s", e)
        raise _validation_failed(e) from e
    except StoreError as e:
        raise _store_failed(e) from e


@router.patch("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    payload: dict[str, Any] = Body(...),  # noqa: B008
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    try:
        return await store.update(employee_id, payload)
    except EmployeeValidationError as e:
        logger.info("Rejected update for employee %s: %s", employee_id, e)
        raise _validation_failed(e) from e
    except EmployeeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise _store_failed(e) from e


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    try:
        await store.delete(employee_id)
    except EmployeeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except StoreError as e:
        raise _store_failed(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
