import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, JSON
from sqlalchemy.dialects.postgresql import UUID
from canvas_export.core.database.base import Base
from canvas_export.core.common.enums import RendererType
from .types import ExportState

def utc_now():
    return datetime.now(timezone.utc)

class ExportJobModel(Base):
    __tablename__ = "export_jobs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Caller-supplied identifier; also names the job's temp directory
    export_id = Column(String, nullable=False, unique=True, index=True)

    state = Column(SQLEnum(ExportState), default=ExportState.PENDING, nullable=False)
    renderer = Column(SQLEnum(RendererType), default=RendererType.SURFACE, nullable=False)
    webhook_url = Column(String, nullable=True)

    payload = Column(JSON, default=dict)     # The submitted scene
    result_meta = Column(JSON, default=dict) # Output pointers (frames, duration, fallback)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    error_message = Column(String, nullable=True)
