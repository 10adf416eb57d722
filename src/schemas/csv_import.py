"""CSV recipe import schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImportResultResponse(BaseModel):
    """Per-job accounting reported back to the operator."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    success_count: int = Field(..., alias="successCount")
    errors: list[str]


class CsvImportJobResponse(BaseModel):
    """Status of a background CSV import job."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int
    filename: str | None = None
    status: str  # pending, processing, completed, failed
    success_count: int = Field(..., alias="successCount")
    errors: list[str]
    error_message: str | None = None
    processed_at: datetime | None = None
    created_at: datetime
