from __future__ import annotations

from fastapi import APIRouter, Depends

from dashboard.core.dependencies import get_store
from dashboard.models.employee import Department, Role, Skill
from dashboard.services.employee_store import EmployeeStore

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/departments", response_model=list[Department])
async def list_departments(store: EmployeeStore = Depends(get_store)):  # noqa: B008
    return await store.repository.get_departments()


@router.get("/roles", response_model=list[Role])
async def list_roles(store: EmployeeStore = Depends(get_store)):  # noqa: B008
    return await store.repository.get_roles()


@router.get("/skills", response_model=list[Skill])
async def list_skills(store: EmployeeStore = Depends(get_store)):  # noqa: B008
    return await store.repository.get_skills()
