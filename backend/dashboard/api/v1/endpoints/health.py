from __future__ import annotations

from fastapi import APIRouter, Depends

from dashboard.core.config import settings
from dashboard.core.dependencies import get_store
from dashboard.services.employee_store import EmployeeStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(store: EmployeeStore = Depends(get_store)):  # noqa: B008
    state = store.state
    services: dict[str, str] = {
        "repository": "ok" if store.repository.initialized else "not_configured",
        "store": "error" if state.error else "ok",
    }

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
        "employees": len(state.employees),
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
