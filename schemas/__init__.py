"""
Pydantic schemas for data validation and serialization.

Schemas:
    records: Validated insert payloads, one per site table
    report: Backup handles, load outcomes, validation and migration reports
    api: Read API response models

Usage:
    from schemas.records import ProductCreate
    from schemas.report import MigrationReport

Example:
    product = ProductCreate(name=" Polyflex 100 ", category_id="concrete")
    assert product.name == "Polyflex 100"
    row = product.to_row()  # list fields encoded as JSON text
"""

__all__ = [
    "ProductCreate",
    "ProjectCreate",
    "ClientCreate",
    "ApprovalCreate",
    "SiteContentCreate",
    "MigrationReport",
    "ValidationReport",
    "HealthCheckResponse",
    "StatsResponse",
]
