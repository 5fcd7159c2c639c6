"""
Health check endpoint with database and migration status
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from api.dependencies import get_db
from schemas.api import HealthCheckResponse, LastMigrationInfo
from ingestion.reporting import load_latest_report
from core.config import settings
from pydantic import ValidationError
from datetime import datetime
from typing import Optional
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


def latest_migration_info() -> Optional[LastMigrationInfo]:
    """Summarise the newest report file, or None when there is none"""
    try:
        report = load_latest_report(settings)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Failed to read latest migration report: {e}")
        return None

    if report is None:
        return None

    return LastMigrationInfo(
        status=report.status.value,
        mode=report.mode,
        finished_at=report.finished_at,
        completed_steps=len(report.completed_steps),
        failed_steps=len(report.failed_steps),
        error=report.error,
    )


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
    - Database connectivity status
    - Outcome of the latest migration run
    """
    db_connected = False

    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
    except Exception as e:
        logger.error(f"Database connection failed: {str(e)}")

    return HealthCheckResponse(
        timestamp=datetime.utcnow(),
        database_connected=db_connected,
        last_migration=latest_migration_info(),
    )
