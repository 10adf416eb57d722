"""Celery tasks for background CSV recipe imports."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.models.csv_import_job import CsvImportJob
from src.services.csv_import import CsvImportService
from src.services.image_service import ImageService
from src.services.import_errors import CsvStructureError

logger = logging.getLogger(__name__)


def run_csv_import_job(
    db: Session, import_id: int, image_service: ImageService | None = None
) -> dict:
    """Run a stored import job to completion and record its result.

    Returns:
        dict with the job outcome
    """
    job = db.query(CsvImportJob).filter(CsvImportJob.id == import_id).first()
    if not job:
        return {"error": "Import job not found"}
    if job.status != "pending":
        return {"error": f"Import job already {job.status}"}

    job.status = "processing"
    db.commit()

    logger.info(f"Processing CSV import job {import_id}")

    service = CsvImportService(db, image_service)
    try:
        result = service.import_csv(job.raw_csv, job.user_id)
    except CsvStructureError as e:
        logger.warning(f"CSV import job {import_id} rejected: {e}")
        job.status = "failed"
        job.error_message = str(e)
        job.processed_at = datetime.now(UTC)
        db.commit()
        return {"error": str(e)}

    job.status = "completed"
    job.success_count = result.success_count
    job.errors = list(result.errors)
    job.processed_at = datetime.now(UTC)
    db.commit()

    logger.info(
        f"CSV import job {import_id} completed: "
        f"{result.success_count} imported, {len(result.errors)} failed"
    )
    return {"success": True, **result.to_dict()}


@celery_app.task
def process_csv_import_job(import_id: int) -> dict:
    """Import a queued CSV feed.

    Not retried: rows already imported would be created twice.

    Args:
        import_id: ID of the CsvImportJob record to process
    """
    db = SessionLocal()
    image_service = ImageService()
    try:
        return run_csv_import_job(db, import_id, image_service)
    except Exception as e:
        logger.error(f"Error processing CSV import job {import_id}: {e}", exc_info=True)
        db.rollback()
        job = db.query(CsvImportJob).filter(CsvImportJob.id == import_id).first()
        if job:
            job.status = "failed"
            job.error_message = str(e)
            db.commit()
        return {"error": str(e)}
    finally:
        image_service.close()
        db.close()
