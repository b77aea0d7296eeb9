"""Pydantic models for export requests, previews and the field catalogue."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

ExportValue = Union[str, int, float, bool]


class ExportFieldInfo(BaseModel):
    key: str
    label: str


class ExportFieldsResponse(BaseModel):
    """Field catalogue grouped the way the export dialog presents it."""

    fields: list[ExportFieldInfo]
    default_fields: list[str]
    categories: dict[str, list[ExportFieldInfo]]


class ExportRequest(BaseModel):
    format: str = "csv"
    fields: list[str] = Field(default_factory=list)
    scope: Literal["all", "filtered"] = "filtered"


class ExportPreviewRequest(BaseModel):
    fields: list[str] = Field(default_factory=list)
    max_rows: int | None = Field(default=None, ge=0, le=100)
    scope: Literal["all", "filtered"] = "filtered"


class ExportPreviewResponse(BaseModel):
    columns: list[str]
    rows: list[dict[str, ExportValue]]
    total_records: int
