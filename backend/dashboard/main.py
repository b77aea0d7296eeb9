from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.v1.router import api_router
from dashboard.core.config import settings
from dashboard.services.employee_repository import EmployeeRepository
from dashboard.services.employee_store import StoreError, create_store

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    repository = EmployeeRepository()
    await repository.initialize(settings)

    store = create_store(repository)
    try:
        await store.load()
    except StoreError:
        logger.exception("Initial employee load failed, serving in error state")
    application.state.store = store
    yield
    await repository.close()
    application.state.store = None


app = FastAPI(
    title="Employee Dashboard API",
    description="Employee listing, dashboard aggregates and exports",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Dashboard API"}
