from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, Index
from models.base import Base, AuditAction


class AuditLog(Base):
    """
    Change record for catalogue rows.

    Written when a step rollback clears the rows it inserted; old_values
    and new_values are JSON snapshots.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(String(100), nullable=False)
    action = Column(Enum(AuditAction), nullable=False)
    old_values = Column(Text, nullable=True)
    new_values = Column(Text, nullable=True)
    user_id = Column(String(100), nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_audit_logs_entity", "entity_type", "entity_id"),
    )
