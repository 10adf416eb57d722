"""CsvImportJob model for background CSV imports."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


class CsvImportJob(Base, TimestampMixin):
    """Model for storing queued CSV import payloads and their results."""

    __tablename__ = "csv_import_jobs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    filename = Column(String(255), nullable=True)
    raw_csv = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    success_count = Column(Integer, nullable=False, default=0)
    errors = Column(JSON, nullable=False, default=list)
    error_message = Column(Text, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
