# ============================================================================
# File: ingestion/validator.py
# Description: Post-load data quality checks
# ============================================================================
"""
Post-load validation pass.

Checks run in order:
1. structure     - required tables exist, record counts, index list
2. integrity     - required fields, value formats, content length
3. json          - serialized list columns parse as JSON arrays
4. foreign_keys  - products, projects and product images reference existing rows
5. media         - media rows point at files on disk; files on disk have rows
6. content / seo - every page has content and SEO settings; SEO length heuristics
7. performance   - latency of a few representative queries, index advice

Issues are reported, never fixed. Errors make the report fail; warnings
(orphaned files, SEO heuristics, slow queries) do not.
"""

import json
import re
import time
from typing import Any, Dict, List, Set

from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, settings as default_settings
from models import (
    Approval,
    Client,
    MediaFile,
    Product,
    ProductCategory,
    ProductImage,
    Project,
    ProjectCategory,
    SeoSettings,
    SiteContent,
)
from models.base import Base
from schemas.report import QueryTiming, Severity, ValidationIssue, ValidationReport
import logging

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    "site_content",
    "content_history",
    "products",
    "product_categories",
    "product_images",
    "seo_settings",
    "media_files",
    "projects",
    "project_categories",
    "approvals",
    "clients",
    "company_info",
    "audit_logs",
]

REQUIRED_PAGES = ["home", "about", "products", "projects", "clients", "approvals", "contact"]

MEDIA_SCAN_DIRS = ["client-logos", "approval-logos", "project-photos"]
MEDIA_SCAN_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg", ".pdf", ".doc", ".docx"}

RECOMMENDED_INDEXES = {
    "idx_products_category": "CREATE INDEX idx_products_category ON products(category_id)",
    "idx_projects_category": "CREATE INDEX idx_projects_category ON projects(category)",
}

MAX_CONTENT_LENGTH = 10000
SEO_TITLE_RANGE = (30, 60)
SEO_DESCRIPTION_RANGE = (120, 160)
SEO_MIN_KEYWORDS = 3

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
HTTP_URL = re.compile(r"^https?://")


class DataValidator:
    """
    Validate the loaded catalogue.

    Usage:
        report = await DataValidator().validate(session)
        if not report.passed:
            ...
    """

    def __init__(self, config: Settings = None):
        self.settings = config or default_settings
        self.public_dir = self.settings.public_dir
        self.media_dir = self.settings.media_dir

    async def validate(self, session: AsyncSession) -> ValidationReport:
        report = ValidationReport()
        self._session = session
        self._report = report

        tables = await self._check_structure()

        if "products" in tables:
            await self._check_products(tables)
        if "projects" in tables:
            await self._check_projects(tables)
        if "clients" in tables:
            await self._check_clients()
        if "approvals" in tables:
            await self._check_approvals()
        if "media_files" in tables:
            await self._check_media()
        if "site_content" in tables:
            await self._check_content()
        if "seo_settings" in tables:
            await self._check_seo()
        await self._check_performance(tables)

        for check in ["structure", "integrity", "json", "foreign_keys", "media", "content", "seo", "performance"]:
            report.checks[check] = not any(
                i.check == check and i.severity == Severity.ERROR for i in report.issues
            )

        summary = report.summary()
        logger.info(
            f"Validation finished: {summary['passed_checks']}/{summary['total_checks']} checks passed, "
            f"{summary['errors']} errors, {summary['warnings']} warnings"
        )
        return report

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _issue(self, check: str, severity: Severity, entity: str, message: str, entity_id: Any = None) -> None:
        issue = ValidationIssue(
            check=check,
            severity=severity,
            entity=entity,
            entity_id=str(entity_id) if entity_id is not None else None,
            message=message,
        )
        self._report.issues.append(issue)
        if severity == Severity.ERROR:
            logger.error(str(issue))
        else:
            logger.warning(str(issue))

    def _error(self, check, entity, message, entity_id=None):
        self._issue(check, Severity.ERROR, entity, message, entity_id)

    def _warning(self, check, entity, message, entity_id=None):
        self._issue(check, Severity.WARNING, entity, message, entity_id)

    async def _all(self, model) -> list:
        result = await self._session.execute(select(model).order_by(model.id))
        return list(result.scalars().all())

    async def _ids(self, model) -> Set[Any]:
        result = await self._session.execute(select(model.id))
        return set(result.scalars().all())

    def _require(self, entity: str, row, fields: List[str]) -> None:
        for field_name in fields:
            value = getattr(row, field_name)
            if value is None or (isinstance(value, str) and not value.strip()):
                self._error("integrity", entity, f"Missing or empty {field_name}", row.id)

    def _require_json_list(self, entity: str, row, field_name: str, optional: bool = False) -> None:
        value = getattr(row, field_name)
        if value is None or value == "":
            if not optional:
                self._error("json", entity, f"Missing {field_name}", row.id)
            return
        try:
            parsed = json.loads(value)
        except (TypeError, ValueError):
            self._error("json", entity, f"Invalid JSON in {field_name}", row.id)
            return
        if not isinstance(parsed, list):
            self._error("json", entity, f"{field_name} is not a JSON array", row.id)

    # ------------------------------------------------------------------
    # 1. Structure
    # ------------------------------------------------------------------

    async def _check_structure(self) -> Set[str]:
        def _inspect(sync_conn):
            inspector = inspect(sync_conn)
            names = inspector.get_table_names()
            indexes = [ix["name"] for name in names for ix in inspector.get_indexes(name) if ix.get("name")]
            return names, indexes

        connection = await self._session.connection()
        names, indexes = await connection.run_sync(_inspect)
        tables = set(names)
        self._report.indexes = sorted(indexes)

        for table in REQUIRED_TABLES:
            if table not in tables:
                self._error("structure", table, "Required table is missing")

        for table in Base.metadata.sorted_tables:
            if table.name in tables:
                count = await self._session.scalar(select(func.count()).select_from(table))
                self._report.record_counts[table.name] = count or 0

        logger.info(f"Structure: {len(tables)} tables, {len(indexes)} indexes")
        return tables

    # ------------------------------------------------------------------
    # 2-4. Entity integrity, JSON fields and foreign keys
    # ------------------------------------------------------------------

    async def _check_products(self, tables: Set[str]) -> None:
        products = await self._all(Product)
        category_ids = await self._ids(ProductCategory) if "product_categories" in tables else set()

        for product in products:
            self._require("products", product, ["name", "category_id", "description"])
            self._require_json_list("products", product, "applications")
            self._require_json_list("products", product, "features")

            if product.category_id and product.category_id not in category_ids:
                self._error(
                    "foreign_keys", "products",
                    f"category_id '{product.category_id}' does not exist in product_categories",
                    product.id,
                )

        if "product_images" in tables:
            product_ids = {p.id for p in products}
            for image in await self._all(ProductImage):
                if image.product_id not in product_ids:
                    self._error(
                        "foreign_keys", "product_images",
                        f"product_id {image.product_id} does not exist in products",
                        image.id,
                    )

    async def _check_projects(self, tables: Set[str]) -> None:
        projects = await self._all(Project)
        category_ids = await self._ids(ProjectCategory) if "project_categories" in tables else set()

        for project in projects:
            self._require("projects", project, ["name", "category"])
            self._require_json_list("projects", project, "gallery_images", optional=True)
            self._require_json_list("projects", project, "key_features", optional=True)

            if project.category and project.category not in category_ids:
                self._error(
                    "foreign_keys", "projects",
                    f"category '{project.category}' does not exist in project_categories",
                    project.id,
                )

    async def _check_clients(self) -> None:
        for client in await self._all(Client):
            self._require("clients", client, ["company_name", "logo_url"])
            if client.website_url and not HTTP_URL.match(client.website_url):
                self._error("integrity", "clients", f"Invalid website_url '{client.website_url}'", client.id)

    async def _check_approvals(self) -> None:
        for approval in await self._all(Approval):
            self._require("approvals", approval, ["authority_name", "logo_url"])
            for field_name in ("issue_date", "expiry_date"):
                value = getattr(approval, field_name)
                if value and not ISO_DATE.match(value):
                    self._error("integrity", "approvals", f"{field_name} '{value}' is not YYYY-MM-DD", approval.id)

    # ------------------------------------------------------------------
    # 5. Media files
    # ------------------------------------------------------------------

    async def _check_media(self) -> None:
        media = await self._all(MediaFile)
        referenced = set()

        for row in media:
            self._require("media_files", row, ["filename", "file_path"])
            if not row.file_size or row.file_size <= 0:
                self._error("integrity", "media_files", "file_size must be positive", row.id)
            if not row.mime_type or "/" not in row.mime_type:
                self._error("integrity", "media_files", f"Invalid mime_type '{row.mime_type}'", row.id)

            if row.file_path:
                referenced.add(row.file_path)
                if not (self.public_dir / row.file_path.lstrip("/")).is_file():
                    self._error("media", "media_files", f"File not found on disk: {row.file_path}", row.id)

        for orphan in self._orphaned_files(referenced):
            self._warning("media", "media_files", f"Orphaned file with no database row: {orphan}")

    def _orphaned_files(self, referenced: Set[str]) -> List[str]:
        orphans = []
        for directory in MEDIA_SCAN_DIRS:
            root = self.media_dir / directory
            if not root.is_dir():
                continue
            for path in sorted(root.rglob("*")):
                if not path.is_file() or path.suffix.lower() not in MEDIA_SCAN_SUFFIXES:
                    continue
                url = "/" + path.relative_to(self.public_dir).as_posix()
                if url not in referenced:
                    orphans.append(url)
        return orphans

    # ------------------------------------------------------------------
    # 6. Content and SEO
    # ------------------------------------------------------------------

    async def _check_content(self) -> None:
        items = await self._all(SiteContent)
        pages = {item.page for item in items}

        for item in items:
            self._require("site_content", item, ["page", "section", "content_key"])
            if item.content_value and len(item.content_value) > MAX_CONTENT_LENGTH:
                self._error(
                    "integrity", "site_content",
                    f"content_value exceeds {MAX_CONTENT_LENGTH} characters",
                    item.id,
                )

        for page in REQUIRED_PAGES:
            if page not in pages:
                self._error("content", "site_content", f"No content for page '{page}'")

    async def _check_seo(self) -> None:
        rows = {row.page: row for row in await self._all(SeoSettings)}

        for page in REQUIRED_PAGES:
            row = rows.get(page)
            if row is None:
                self._error("seo", "seo_settings", f"No SEO settings for page '{page}'")
                continue

            title_len = len(row.title or "")
            if not SEO_TITLE_RANGE[0] <= title_len <= SEO_TITLE_RANGE[1]:
                self._warning(
                    "seo", "seo_settings",
                    f"Title length {title_len} outside {SEO_TITLE_RANGE[0]}-{SEO_TITLE_RANGE[1]}",
                    page,
                )

            description_len = len(row.description or "")
            if not SEO_DESCRIPTION_RANGE[0] <= description_len <= SEO_DESCRIPTION_RANGE[1]:
                self._warning(
                    "seo", "seo_settings",
                    f"Description length {description_len} outside "
                    f"{SEO_DESCRIPTION_RANGE[0]}-{SEO_DESCRIPTION_RANGE[1]}",
                    page,
                )

            keywords = [k for k in (row.keywords or "").split(",") if k.strip()]
            if len(keywords) < SEO_MIN_KEYWORDS:
                self._warning("seo", "seo_settings", f"Only {len(keywords)} keywords", page)

    # ------------------------------------------------------------------
    # 7. Performance
    # ------------------------------------------------------------------

    def _sample_queries(self, tables: Set[str]) -> Dict[str, Any]:
        queries = {}
        if "products" in tables:
            queries["products_list"] = select(Product).where(Product.is_active.is_(True)).order_by(Product.name)
        if "projects" in tables:
            queries["projects_by_category"] = select(Project).where(Project.category == "metro_rail")
        if "clients" in tables:
            queries["clients_featured"] = select(Client).where(Client.is_featured.is_(True))
        if "media_files" in tables:
            queries["media_files_count"] = select(func.count(MediaFile.id))
        return queries

    def _classify(self, duration_ms: float) -> str:
        if duration_ms < self.settings.GOOD_QUERY_MS:
            return "good"
        if duration_ms < self.settings.ACCEPTABLE_QUERY_MS:
            return "acceptable"
        return "slow"

    async def _check_performance(self, tables: Set[str]) -> None:
        for name, query in self._sample_queries(tables).items():
            started = time.perf_counter()
            result = await self._session.execute(query)
            rows = result.all()
            duration_ms = (time.perf_counter() - started) * 1000

            timing = QueryTiming(
                name=name,
                duration_ms=round(duration_ms, 2),
                row_count=len(rows),
                performance=self._classify(duration_ms),
            )
            self._report.query_timings.append(timing)
            logger.debug(f"Query {name}: {timing.duration_ms}ms ({timing.performance})")

            if timing.performance == "slow":
                self._warning("performance", name, f"Query took {timing.duration_ms}ms")

        for index_name, ddl in RECOMMENDED_INDEXES.items():
            if index_name not in self._report.indexes:
                self._report.recommendations.append(f"Add index: {ddl}")
