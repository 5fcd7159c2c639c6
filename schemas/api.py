"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime


# ============================================================================
# Health Check Schemas
# ============================================================================

class LastMigrationInfo(BaseModel):
    """Outcome of the most recent migration run"""
    status: str
    mode: str
    finished_at: Optional[datetime] = None
    completed_steps: int = 0
    failed_steps: int = 0
    error: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field("healthy", description="Overall system status: healthy, degraded, unhealthy")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    database_connected: bool
    last_migration: Optional[LastMigrationInfo] = None

    @model_validator(mode="after")
    def determine_status(self):
        """Determine overall health status"""
        if not self.database_connected:
            self.status = "unhealthy"
        elif self.last_migration is None or self.last_migration.status != "succeeded":
            self.status = "degraded"
        else:
            self.status = "healthy"
        return self


# ============================================================================
# Statistics Schemas
# ============================================================================

class StatsResponse(BaseModel):
    """Record counts per table plus the latest migration summary"""
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    record_counts: Dict[str, int] = Field(default_factory=dict)
    total_records: int = 0
    last_migration: Optional[Dict[str, Any]] = None


# ============================================================================
# Content Schemas
# ============================================================================

class ContentItemResponse(BaseModel):
    """One page content item"""
    id: int
    page: str
    section: str
    content_key: str
    content_value: Optional[str] = None
    content_type: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContentResponse(BaseModel):
    """Content items for a page, optionally narrowed to one section"""
    page: Optional[str] = None
    section: Optional[str] = None
    total: int
    items: List[ContentItemResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body returned by the exception handler"""
    error_type: str
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)
    request_id: Optional[str] = None
