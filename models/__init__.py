"""
SQLAlchemy ORM models for the site database.

This package defines the database schema using SQLAlchemy ORM models:

Models:
    base: Base declarative class and shared enums (StepStatus, RunStatus, AuditAction)
    catalog: Product and project catalogue (categories, products, images, projects)
    company: Clients, approval authorities and company profile fields
    content: Page content, content history, SEO settings and media files
    audit: Audit log written by step rollbacks

Database Schema:
    All models inherit from the Base declarative class and stick to portable
    column types so the same schema runs on the embedded SQLite store and on
    a hosted PostgreSQL database.

Usage:
    from models import Product, ProductCategory, SiteContent
    from models.base import StepStatus, RunStatus

Example:
    category = ProductCategory(id="concrete", name="Concrete Admixtures", sort_order=2)
    session.add(category)
    await session.commit()

Relationships:
    - ProductCategory → Product (soft reference, checked by the validator)
    - ProjectCategory → Project (soft reference, checked by the validator)
    - Product → ProductImage (foreign key)
"""

from models.base import Base, StepStatus, RunStatus, AuditAction
from models.catalog import ProductCategory, Product, ProductImage, ProjectCategory, Project
from models.company import Client, Approval, CompanyInfo
from models.content import SiteContent, ContentHistory, SeoSettings, MediaFile
from models.audit import AuditLog

__all__ = [
    "Base",
    "StepStatus",
    "RunStatus",
    "AuditAction",
    "ProductCategory",
    "Product",
    "ProductImage",
    "ProjectCategory",
    "Project",
    "Client",
    "Approval",
    "CompanyInfo",
    "SiteContent",
    "ContentHistory",
    "SeoSettings",
    "MediaFile",
    "AuditLog",
]
