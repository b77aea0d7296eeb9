from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from dashboard.services.employee_store import EmployeeStore

logger = logging.getLogger(__name__)


def get_store(request: Request) -> EmployeeStore:
    store: EmployeeStore | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee store not initialized",
        )
    return store


def get_ready_store(store: EmployeeStore = Depends(get_store)) -> EmployeeStore:  # noqa: B008
    """Like :func:`get_store` but refuses to serve while the store error slot is set."""
    if store.state.error:
        logger.warning("Store in error state: %s", store.state.error)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=store.state.error,
        )
    return store
