from __future__ import annotations

from pydantic import BaseModel, Field


class ImportReportResponse(BaseModel):
    total_rows: int
    imported_rows: int
    rejected_rows: list[str] = Field(default_factory=list)
    replaced: bool = False
