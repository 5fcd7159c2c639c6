"""
Page content retrieval endpoint
"""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from api.dependencies import get_db
from schemas.api import ContentItemResponse, ContentResponse
from models import SiteContent
from typing import Optional
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Content"])


@router.get("/content", response_model=ContentResponse)
async def get_content(
    request: Request,
    page: Optional[str] = Query(None, description="Filter by page"),
    section: Optional[str] = Query(None, description="Filter by section"),
    db: AsyncSession = Depends(get_db)
):
    """Site content items, ordered by page, section and key"""
    request_id = getattr(request.state, "request_id", "-")
    logger.info(f"[{request_id}] GET /content - page={page}, section={section}")

    query = select(SiteContent)
    if page:
        query = query.where(SiteContent.page == page)
    if section:
        query = query.where(SiteContent.section == section)
    query = query.order_by(SiteContent.page, SiteContent.section, SiteContent.content_key)

    result = await db.execute(query)
    items = [ContentItemResponse.model_validate(row) for row in result.scalars().all()]

    return ContentResponse(page=page, section=section, total=len(items), items=items)
