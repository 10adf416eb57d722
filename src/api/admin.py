"""Admin API endpoints for bulk recipe import and moderation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_csv_import_service, get_current_admin, get_recipe_service
from src.config import get_settings
from src.database import get_db
from src.models.csv_import_job import CsvImportJob
from src.models.user import User
from src.schemas.csv_import import CsvImportJobResponse, ImportResultResponse
from src.schemas.recipe import PendingRecipeResponse
from src.services.csv_import import CsvImportService
from src.services.csv_source import decode_csv_payload
from src.services.import_errors import CsvStructureError
from src.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


def read_csv_upload(csv_file: UploadFile) -> bytes:
    """Read an uploaded CSV file, rejecting empty or oversized uploads."""
    max_bytes = get_settings().csv_import_max_bytes
    data = csv_file.file.read(max_bytes + 1)
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No CSV file provided",
        )
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB.",
        )
    return data


@router.post("/import-csv", response_model=ImportResultResponse)
def import_csv(
    csv_file: Annotated[UploadFile, File(description="Recipe CSV feed")],
    current_user: Annotated[User, Depends(get_current_admin)],
    service: Annotated[CsvImportService, Depends(get_csv_import_service)],
):
    """Import recipes from a CSV feed and report per-row results.

    Imported recipes are owned by the calling admin and wait for approval.
    Plain def so the row-by-row network and database work runs in the threadpool.
    """
    data = read_csv_upload(csv_file)

    try:
        result = service.import_csv_bytes(data, current_user.id)
    except CsvStructureError as e:
        logger.warning(f"Rejected CSV upload from user {current_user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to import CSV: {e}",
        ) from e

    return ImportResultResponse(
        message=f"Import completed. {result.success_count} recipes imported successfully.",
        success_count=result.success_count,
        errors=list(result.errors),
    )


@router.post(
    "/import-jobs",
    response_model=CsvImportJobResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def create_import_job(
    csv_file: Annotated[UploadFile, File(description="Recipe CSV feed")],
    current_user: Annotated[User, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Queue a CSV feed for import in the background.

    Poll the job endpoint to check when processing is complete.
    """
    from src.tasks.csv_import import process_csv_import_job

    data = read_csv_upload(csv_file)

    job = CsvImportJob(
        user_id=current_user.id,
        filename=csv_file.filename,
        raw_csv=decode_csv_payload(data),
        status="pending",
        success_count=0,
        errors=[],
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    process_csv_import_job.delay(job.id)

    return job


@router.get("/import-jobs/{job_id}", response_model=CsvImportJobResponse)
def get_import_job(
    job_id: int,
    current_user: Annotated[User, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the status and result of a CSV import job."""
    job = db.query(CsvImportJob).filter(CsvImportJob.id == job_id).first()
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Import job not found",
        )
    return job


@router.get("/recipes/pending", response_model=list[PendingRecipeResponse])
def list_pending_recipes(
    current_user: Annotated[User, Depends(get_current_admin)],
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    limit: int = 50,
):
    """List recipes waiting in the moderation queue."""
    return service.list_pending(limit=limit)
