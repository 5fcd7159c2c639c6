from datetime import datetime
from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class StepStatus(str, enum.Enum):
    """Migration step status"""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class RunStatus(str, enum.Enum):
    """Overall migration run status"""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"


class AuditAction(str, enum.Enum):
    """Audit log actions"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class TimestampMixin:
    """created_at / updated_at columns shared by the catalog tables"""
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
