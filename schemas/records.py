"""
Pydantic schemas for candidate records produced by the transformers.

Each schema mirrors one table. ``to_row()`` returns the column dict handed
to the loaders, with list fields JSON-encoded the way the site stores them.
"""

import json
from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class RecordBase(BaseModel):
    """Common behaviour for loadable records"""

    # Columns stored as JSON text
    json_fields: ClassVar[Tuple[str, ...]] = ()

    def to_row(self) -> dict:
        row = self.model_dump()
        for field_name in self.json_fields:
            row[field_name] = json.dumps(row[field_name] or [])
        return row

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v):
        """Trim surrounding whitespace on every string field"""
        if isinstance(v, str):
            return v.strip()
        return v


# ============================================================================
# Catalogue
# ============================================================================

class ProductCategoryCreate(RecordBase):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True


class ProjectCategoryCreate(ProductCategoryCreate):
    pass


class ProductCreate(RecordBase):
    """
    Product row built from a catalogue spreadsheet.

    Ensures:
    - name, description and category_id are present
    - applications/features are lists of non-empty strings
    """
    json_fields: ClassVar[Tuple[str, ...]] = ("applications", "features")

    name: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1, max_length=64)
    applications: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    usage: Optional[str] = None
    advantages: Optional[str] = None
    technical_specifications: Optional[str] = None
    product_code: Optional[str] = Field(None, max_length=32)
    is_active: bool = True

    @field_validator("applications", "features", mode="before")
    @classmethod
    def clean_list(cls, v):
        if v is None:
            return []
        return [str(item).strip() for item in v if str(item).strip()]


class ProjectCreate(RecordBase):
    json_fields: ClassVar[Tuple[str, ...]] = ("gallery_images",)

    name: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=64)
    location: Optional[str] = None
    client_name: Optional[str] = None
    image_url: Optional[str] = None
    gallery_images: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_active: bool = True
    sort_order: int = 0


# ============================================================================
# Companies
# ============================================================================

class ClientCreate(RecordBase):
    company_name: str = Field(..., min_length=1, max_length=300)
    industry: Optional[str] = None
    project_type: Optional[str] = None
    logo_url: Optional[str] = None
    partnership_since: Optional[str] = None
    is_featured: bool = False
    is_active: bool = True
    sort_order: int = 0


class ApprovalCreate(RecordBase):
    authority_name: str = Field(..., min_length=1, max_length=300)
    approval_type: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    issue_date: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    expiry_date: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    is_active: bool = True
    sort_order: int = 0


class CompanyInfoCreate(RecordBase):
    field_name: str = Field(..., min_length=1, max_length=100)
    field_value: Optional[str] = None
    field_type: str = "text"
    category: str = "general"


# ============================================================================
# Content and media
# ============================================================================

class SiteContentCreate(RecordBase):
    page: str = Field(..., min_length=1, max_length=100)
    section: str = Field(..., min_length=1, max_length=100)
    content_key: str = Field(default="content", min_length=1, max_length=100)
    content_value: str = Field(..., max_length=10000)
    content_type: str = "text"
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class SeoSettingsCreate(RecordBase):
    page: str = Field(..., min_length=1, max_length=100)
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class MediaFileCreate(RecordBase):
    filename: str = Field(..., min_length=1, max_length=300)
    original_name: Optional[str] = None
    file_path: str = Field(..., min_length=1, max_length=1024)
    file_size: int = Field(..., ge=0)
    mime_type: str
    alt_text: Optional[str] = None
