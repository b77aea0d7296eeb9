from fastapi import APIRouter

from dashboard.api.v1.endpoints import dashboard, employees, export, health, reference

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(employees.router)
api_router.include_router(reference.router)
api_router.include_router(dashboard.router)
api_router.include_router(export.router)
