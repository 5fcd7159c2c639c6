from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint
from models.base import Base


class SiteContent(Base):
    """
    Page content item keyed by (page, section, content_key).

    The only catalogue-side table loaded with true upsert semantics.
    """
    __tablename__ = "site_content"

    id = Column(Integer, primary_key=True, autoincrement=True)
    page = Column(String(100), nullable=False)
    section = Column(String(100), nullable=False)
    content_key = Column(String(100), nullable=False)
    content_value = Column(Text, nullable=True)
    content_type = Column(String(20), nullable=False, default="text")
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
    updated_by = Column(String(100), nullable=True)

    __table_args__ = (
        UniqueConstraint("page", "section", "content_key", name="uq_site_content_key"),
    )


class ContentHistory(Base):
    """Previous values of a content item"""
    __tablename__ = "content_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(Integer, nullable=False)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
    changed_by = Column(String(100), nullable=True)
    changed_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class SeoSettings(Base):
    """Per-page SEO metadata"""
    __tablename__ = "seo_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    page = Column(String(100), nullable=False, unique=True)
    title = Column(String(300), nullable=True)
    description = Column(Text, nullable=True)
    keywords = Column(Text, nullable=True)
    og_title = Column(String(300), nullable=True)
    og_description = Column(Text, nullable=True)
    og_image = Column(String(1024), nullable=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class MediaFile(Base):
    """Organized media asset; file_path is the public URL path"""
    __tablename__ = "media_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(300), nullable=False)
    original_name = Column(String(300), nullable=True)
    file_path = Column(String(1024), nullable=False, unique=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String(100), nullable=True)
    alt_text = Column(String(500), nullable=True)
    uploaded_by = Column(String(100), nullable=True)
    uploaded_at = Column(DateTime, nullable=False, default=datetime.utcnow)
