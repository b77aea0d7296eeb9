from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from dashboard.core.config import settings
from dashboard.core.dependencies import get_ready_store
from dashboard.models.export import (
    ExportFieldsResponse,
    ExportPreviewRequest,
    ExportPreviewResponse,
    ExportRequest,
)
from dashboard.services.employee_store import EmployeeStore
from dashboard.services.export_service import (
    DEFAULT_EXPORT_FIELDS,
    EXPORT_FIELDS,
    ExportError,
    export_data,
    get_export_preview,
    get_fields_by_category,
    resolve_fields,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/fields", response_model=ExportFieldsResponse)
async def list_export_fields():
    return ExportFieldsResponse(
        fields=[f.info() for f in EXPORT_FIELDS],
        default_fields=DEFAULT_EXPORT_FIELDS,
        categories={
            name: [f.info() for f in fields] for name, fields in get_fields_by_category().items()
        },
    )


@router.post("/preview", response_model=ExportPreviewResponse)
async def preview_export(
    request: ExportPreviewRequest,
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    state = store.state
    records = list(state.employees if request.scope == "all" else state.filtered_employees)
    max_rows = settings.EXPORT_PREVIEW_ROWS if request.max_rows is None else request.max_rows

    return ExportPreviewResponse(
        columns=[f.label for f in resolve_fields(request.fields)],
        rows=get_export_preview(records, request.fields, max_rows),
        total_records=len(records),
    )


@router.post("")
async def download_export(
    request: ExportRequest,
    store: EmployeeStore = Depends(get_ready_store),  # noqa: B008
):
    state = store.state
    records = list(state.employees if request.scope == "all" else state.filtered_employees)

    try:
        document = export_data(
            records,
            request.format,
            request.fields,
            prefix=settings.EXPORT_FILENAME_PREFIX,
        )
    except ExportError as e:
        logger.warning("Export rejected (format=%s, fields=%d): %s", request.format, len(request.fields), e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
