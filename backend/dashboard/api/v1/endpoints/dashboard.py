from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends

from dashboard.core.dependencies import get_ready_store
from dashboard.models.dashboard import ChartsResponse, SummaryResponse
from dashboard.services.aggregation import (
    build_summary_cards,
    calculate_summary_metrics,
    generate_department_data,
    generate_department_metrics,
    generate_salary_data,
    generate_scatter_data,
)
from dashboard.services.employee_store import EmployeeStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

Scope = Literal["all", "filtered"]


def _records(store: EmployeeStore, scope: Scope):
    state = store.state
    return state.employees if scope == "all" else state.filtered_employees


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    scope: Scope = "all",
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    metrics = calculate_summary_metrics(_records(store, scope))
    return SummaryResponse(scope=scope, metrics=metrics, cards=build_summary_cards(metrics))


@router.get("/charts", response_model=ChartsResponse)
async def get_charts(
    scope: Scope = "all",
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    records = _records(store, scope)
    return ChartsResponse(
        scope=scope,
        departments=generate_department_data(records),
        salary_ranges=generate_salary_data(records),
        department_metrics=generate_department_metrics(records),
        scatter=generate_scatter_data(records),
    )
