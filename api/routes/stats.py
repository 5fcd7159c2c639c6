"""
Record counts and migration statistics endpoint
"""
from datetime import datetime
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from api.dependencies import get_db
from api.routes.health import latest_migration_info
from schemas.api import StatsResponse
from models import (
    Approval,
    Client,
    CompanyInfo,
    MediaFile,
    Product,
    ProductCategory,
    Project,
    ProjectCategory,
    SeoSettings,
    SiteContent,
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Statistics"])

COUNTED_MODELS = [
    ProductCategory,
    Product,
    ProjectCategory,
    Project,
    Client,
    Approval,
    CompanyInfo,
    SiteContent,
    SeoSettings,
    MediaFile,
]


@router.get("/stats", response_model=StatsResponse)
async def get_stats(request: Request, db: AsyncSession = Depends(get_db)):
    """
    Get site database statistics.

    Returns:
    - Row count per table
    - Summary of the latest migration run
    """
    request_id = getattr(request.state, "request_id", "-")
    logger.info(f"[{request_id}] GET /stats")

    counts = {}
    for model in COUNTED_MODELS:
        result = await db.execute(select(func.count()).select_from(model))
        counts[model.__tablename__] = result.scalar() or 0

    last = latest_migration_info()

    return StatsResponse(
        timestamp=datetime.utcnow(),
        record_counts=counts,
        total_records=sum(counts.values()),
        last_migration=last.model_dump(mode="json") if last else None,
    )
