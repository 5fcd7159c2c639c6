# ============================================================================
# File: ingestion/steps.py
# Description: Migration step registry, run context and step handlers
# ============================================================================
"""
Migration steps.

The registry is a fixed, ordered list. Each step declares whether it is
critical (failure halts the run) and which rollback action undoes it:

    none            nothing to undo
    restore_backup  copy the pre-step backup over the store
    clear_<entity>  delete the rows this step inserted (audited)

Handlers receive a StepEnv and return a StepOutcome; they never mutate the
RunContext. The runner derives the next context from the outcome.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from core.config import Settings
from core.exceptions import IntegrityCheckError, ValidationFailedError
from ingestion.backup import BackupManager, INITIAL_LABEL
from ingestion.extractors.directory_extractor import (
    MediaAssetExtractor,
    approval_logo_extractor,
    client_logo_extractor,
    project_photo_extractor,
)
from ingestion.extractors.spreadsheet_extractor import SpreadsheetExtractor
from ingestion.extractors.template_extractor import TemplateExtractor
from ingestion.loaders.media_organizer import MediaOrganizer
from ingestion.loaders.sql_loader import InsertSpec, LoadMode, SQLLoader, StepJournal
from ingestion.transformers.normalizer import RecordNormalizer
from ingestion.validator import DataValidator
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
from models.base import Base, RunStatus
from schemas.report import BackupHandle, BatchResult, StepResult
import logging

logger = logging.getLogger(__name__)


# ============================================================================
# Registry
# ============================================================================

class RollbackAction(str, Enum):
    NONE = "none"
    RESTORE_BACKUP = "restore_backup"
    CLEAR_PRODUCTS = "clear_products"
    CLEAR_PROJECTS = "clear_projects"
    CLEAR_CLIENTS = "clear_clients"
    CLEAR_APPROVALS = "clear_approvals"
    CLEAR_MEDIA = "clear_media"
    CLEAR_CONTENT = "clear_content"

    @property
    def clears_rows(self) -> bool:
        return self.value.startswith("clear_")


@dataclass(frozen=True)
class MigrationStep:
    id: str
    name: str
    description: str
    estimated_seconds: int
    critical: bool
    rollback_action: RollbackAction = RollbackAction.NONE
    # Sanity threshold: fewer rows than this after the step logs a warning
    count_key: Optional[str] = None
    expected_minimum: int = 0


MIGRATION_STEPS: List[MigrationStep] = [
    MigrationStep(
        "backup", "Database Backup & Preparation",
        "Create the initial backup and the backup, report and log directories",
        30, critical=True,
    ),
    MigrationStep(
        "database_init", "Database Initialization",
        "Create tables and indexes and seed the category tables",
        60, critical=True, rollback_action=RollbackAction.RESTORE_BACKUP,
    ),
    MigrationStep(
        "products_import", "Products Import",
        "Import products from the catalogue workbooks",
        120, critical=False, rollback_action=RollbackAction.CLEAR_PRODUCTS,
        count_key="products", expected_minimum=500,
    ),
    MigrationStep(
        "projects_import", "Projects Import",
        "Create projects from the project photo folders",
        90, critical=False, rollback_action=RollbackAction.CLEAR_PROJECTS,
        count_key="projects", expected_minimum=50,
    ),
    MigrationStep(
        "clients_import", "Clients Import",
        "Create clients from the client logo folder",
        60, critical=False, rollback_action=RollbackAction.CLEAR_CLIENTS,
        count_key="clients", expected_minimum=30,
    ),
    MigrationStep(
        "approvals_import", "Approvals Import",
        "Create approval authorities from the approval logo folder",
        45, critical=False, rollback_action=RollbackAction.CLEAR_APPROVALS,
        count_key="approvals",
    ),
    MigrationStep(
        "media_organization", "Media Asset Organization",
        "Copy logos and photos into the public media tree and register them",
        180, critical=False, rollback_action=RollbackAction.CLEAR_MEDIA,
        count_key="media_files",
    ),
    MigrationStep(
        "content_population", "Content Population",
        "Upsert page content, SEO settings and company information",
        90, critical=False, rollback_action=RollbackAction.CLEAR_CONTENT,
        count_key="site_content",
    ),
    MigrationStep(
        "data_validation", "Data Validation & QA",
        "Run the post-load validation pass",
        120, critical=True,
    ),
    MigrationStep(
        "performance_optimization", "Performance Optimization",
        "Refresh planner statistics and compact the store",
        60, critical=False,
    ),
    MigrationStep(
        "final_verification", "Final Verification",
        "Count rows per table and run the store's integrity check",
        90, critical=True,
    ),
]


# ============================================================================
# Run context
# ============================================================================

@dataclass(frozen=True)
class MigrationOptions:
    dry_run: bool = False
    verbose: bool = False
    step_by_step: bool = False
    skip_validation: bool = False

    @property
    def mode(self) -> str:
        return "DRY_RUN" if self.dry_run else "PRODUCTION"


@dataclass(frozen=True)
class RunContext:
    """
    Immutable state threaded through the steps.

    Every transition returns a new context; nothing is shared between
    steps except through this value.
    """
    options: MigrationOptions
    settings: Settings
    status: RunStatus = RunStatus.NOT_STARTED
    started_at: Optional[datetime] = None
    backups: Tuple[BackupHandle, ...] = ()
    results: Tuple[StepResult, ...] = ()
    counts: Mapping[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    def begin(self) -> "RunContext":
        return replace(self, status=RunStatus.IN_PROGRESS, started_at=datetime.utcnow())

    def with_backup(self, handle: BackupHandle) -> "RunContext":
        return replace(self, backups=self.backups + (handle,))

    def with_result(self, result: StepResult, counts: Mapping[str, int] = None) -> "RunContext":
        return replace(
            self,
            results=self.results + (result,),
            counts={**self.counts, **(counts or {})},
        )

    def finish(self, status: RunStatus, error: str = None) -> "RunContext":
        return replace(self, status=status, error=error or self.error)

    def progress(self, total: int) -> float:
        return round(len(self.results) / total * 100, 1) if total else 100.0


@dataclass(frozen=True)
class StepOutcome:
    result: Dict[str, Any] = field(default_factory=dict)
    counts: Dict[str, int] = field(default_factory=dict)
    backups: Tuple[BackupHandle, ...] = ()


@dataclass
class StepEnv:
    """What a handler gets to work with"""
    step: MigrationStep
    context: RunContext
    journal: StepJournal
    engine: Optional[AsyncEngine] = None
    session_maker: Optional[async_sessionmaker] = None

    @property
    def settings(self) -> Settings:
        return self.context.settings


Handler = Callable[[StepEnv], Awaitable[StepOutcome]]


# ============================================================================
# Helpers
# ============================================================================

async def _load(env: StepEnv, records, spec: InsertSpec) -> Tuple[BatchResult, int]:
    async with env.session_maker() as session:
        batch = await SQLLoader(session, env.journal).load_batch(records, spec)
        total = await session.scalar(select(func.count()).select_from(spec.model))
    return batch, total or 0


def _import_outcome(count_key: str, extracted: int, rejected: List[str], batch: BatchResult, total: int) -> StepOutcome:
    result = {
        "extracted": extracted,
        "rejected": len(rejected),
        **batch.summary(),
        "total_rows": total,
    }
    result["errors"] = rejected + result["errors"]
    return StepOutcome(result=result, counts={count_key: total})


# ============================================================================
# Handlers
# ============================================================================

async def prepare_backup(env: StepEnv) -> StepOutcome:
    for directory in (env.settings.backup_dir, env.settings.report_dir, env.settings.log_dir):
        directory.mkdir(parents=True, exist_ok=True)

    handle = BackupManager(env.settings).create_backup(INITIAL_LABEL)
    return StepOutcome(
        result={"initial_backup": handle.path if handle else None},
        backups=(handle,) if handle else (),
    )


async def initialize_database(env: StepEnv) -> StepOutcome:
    async with env.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    normalizer = RecordNormalizer()
    templates = TemplateExtractor()
    product_categories, _ = normalizer.normalize_many(templates.product_categories(), normalizer.product_category)
    project_categories, _ = normalizer.normalize_many(templates.project_categories(), normalizer.project_category)

    product_batch, _ = await _load(env, product_categories, InsertSpec(ProductCategory, ["id"]))
    project_batch, _ = await _load(env, project_categories, InsertSpec(ProjectCategory, ["id"]))

    return StepOutcome(result={
        "tables": len(Base.metadata.tables),
        "indexes": sum(len(table.indexes) for table in Base.metadata.tables.values()),
        "product_categories_seeded": product_batch.inserted_count,
        "project_categories_seeded": project_batch.inserted_count,
    })


async def import_products(env: StepEnv) -> StepOutcome:
    rows = await SpreadsheetExtractor(env.settings.product_workbook_paths).extract()
    normalizer = RecordNormalizer()
    records, rejected = normalizer.normalize_many(rows, normalizer.product)
    batch, total = await _load(env, records, InsertSpec(Product, ["name"]))
    return _import_outcome("products", len(rows), rejected, batch, total)


async def import_projects(env: StepEnv) -> StepOutcome:
    candidates = await project_photo_extractor(env.settings.source_docs_dir).extract()
    normalizer = RecordNormalizer()
    records, rejected = normalizer.normalize_many(candidates, normalizer.project, with_sort_order=True)
    batch, total = await _load(env, records, InsertSpec(Project, ["name"]))
    return _import_outcome("projects", len(candidates), rejected, batch, total)


async def import_clients(env: StepEnv) -> StepOutcome:
    normalizer = RecordNormalizer()
    candidates = [
        c for c in await client_logo_extractor(env.settings.source_docs_dir).extract()
        if not normalizer.is_ignored_client(c)
    ]
    records, rejected = normalizer.normalize_many(candidates, normalizer.client, with_sort_order=True)
    batch, total = await _load(env, records, InsertSpec(Client, ["company_name"]))
    return _import_outcome("clients", len(candidates), rejected, batch, total)


async def import_approvals(env: StepEnv) -> StepOutcome:
    candidates = await approval_logo_extractor(env.settings.source_docs_dir).extract()
    normalizer = RecordNormalizer()
    records, rejected = normalizer.normalize_many(candidates, normalizer.approval, with_sort_order=True)
    batch, total = await _load(env, records, InsertSpec(Approval, ["authority_name"]))
    return _import_outcome("approvals", len(candidates), rejected, batch, total)


async def organize_media(env: StepEnv) -> StepOutcome:
    assets = await MediaAssetExtractor(env.settings.source_docs_dir).extract()
    records, copy_errors = MediaOrganizer(env.settings.media_dir).organize(assets)
    batch, total = await _load(env, records, InsertSpec(MediaFile, ["file_path"]))
    return _import_outcome("media_files", len(assets), copy_errors, batch, total)


async def populate_content(env: StepEnv) -> StepOutcome:
    extractor = TemplateExtractor()
    normalizer = RecordNormalizer()

    content, content_errors = normalizer.normalize_many(await extractor.extract(), normalizer.content)
    seo, seo_errors = normalizer.normalize_many(
        await extractor.extract_seo(), lambda item: normalizer.seo(item["page"], item["values"])
    )
    company, company_errors = normalizer.normalize_many(
        await extractor.extract_company_info(),
        lambda item: normalizer.company_field(item["field_name"], item["field_value"]),
    )

    counts = {}
    batches = {}
    for key, records, model, keys in [
        ("site_content", content, SiteContent, ["page", "section", "content_key"]),
        ("seo_settings", seo, SeoSettings, ["page"]),
        ("company_info", company, CompanyInfo, ["field_name"]),
    ]:
        batch, total = await _load(env, records, InsertSpec(model, keys, LoadMode.UPSERT))
        batches[key] = batch.summary()
        counts[key] = total

    return StepOutcome(
        result={
            "content_items": batches["site_content"],
            "seo_pages": batches["seo_settings"],
            "company_fields": batches["company_info"],
            "errors": content_errors + seo_errors + company_errors,
        },
        counts=counts,
    )


async def validate_data(env: StepEnv) -> StepOutcome:
    async with env.session_maker() as session:
        report = await DataValidator(env.settings).validate(session)

    result = {
        **report.summary(),
        "checks": report.checks,
        "record_counts": report.record_counts,
        "issues": [str(issue) for issue in report.issues],
        "query_timings": [t.model_dump() for t in report.query_timings],
        "recommendations": report.recommendations,
    }

    if not report.passed:
        raise ValidationFailedError(
            f"Validation found {report.error_count} errors",
            context={"errors": report.error_count, "warnings": report.warning_count,
                     "first_error": str(report.errors[0])}
        )

    return StepOutcome(result=result, counts=report.record_counts)


SQLITE_MAINTENANCE = ["ANALYZE", "VACUUM", "PRAGMA optimize"]
POSTGRES_MAINTENANCE = ["VACUUM ANALYZE"]


async def optimize_performance(env: StepEnv) -> StepOutcome:
    dialect = env.engine.dialect.name
    statements = SQLITE_MAINTENANCE if dialect == "sqlite" else POSTGRES_MAINTENANCE

    async with env.engine.connect() as conn:
        conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
        for statement in statements:
            logger.debug(f"Running {statement}")
            await conn.execute(text(statement))

    return StepOutcome(result={"operations": statements})


async def verify_final(env: StepEnv) -> StepOutcome:
    counts = {}
    integrity = "SKIPPED"

    async with env.session_maker() as session:
        for table in Base.metadata.sorted_tables:
            counts[table.name] = await session.scalar(select(func.count()).select_from(table)) or 0

        if env.engine.dialect.name == "sqlite":
            check = await session.scalar(text("PRAGMA integrity_check"))
            if check != "ok":
                raise IntegrityCheckError(
                    "Database integrity check failed",
                    context={"integrity_check": check}
                )
            integrity = "PASSED"

    for table, count in counts.items():
        logger.info(f"  {table}: {count} records")

    return StepOutcome(result={"record_counts": counts, "integrity": integrity}, counts=counts)


STEP_HANDLERS: Dict[str, Handler] = {
    "backup": prepare_backup,
    "database_init": initialize_database,
    "products_import": import_products,
    "projects_import": import_projects,
    "clients_import": import_clients,
    "approvals_import": import_approvals,
    "media_organization": organize_media,
    "content_population": populate_content,
    "data_validation": validate_data,
    "performance_optimization": optimize_performance,
    "final_verification": verify_final,
}


# ============================================================================
# Dry run
# ============================================================================

# Plausible figures for a full legacy import, reported instead of real work
DRY_RUN_RESULTS: Dict[str, Dict[str, Any]] = {
    "backup": {"initial_backup": None},
    "products_import": {"would_insert": 1015},
    "projects_import": {"would_insert": 66},
    "clients_import": {"would_insert": 43},
    "approvals_import": {"would_insert": 12},
    "media_organization": {"would_insert": 124},
    "content_population": {"content_items": 25, "company_fields": 30, "seo_pages": 7},
    "data_validation": {"total_checks": 15, "passed_checks": 15, "errors": 0, "warnings": 0},
    "performance_optimization": {"operations": SQLITE_MAINTENANCE},
    "final_verification": {"integrity": "SKIPPED"},
}

DRY_RUN_SOURCES: Dict[str, Callable[[Settings], Any]] = {
    "products_import": lambda s: SpreadsheetExtractor(s.product_workbook_paths),
    "projects_import": lambda s: project_photo_extractor(s.source_docs_dir),
    "clients_import": lambda s: client_logo_extractor(s.source_docs_dir),
    "approvals_import": lambda s: approval_logo_extractor(s.source_docs_dir),
    "media_organization": lambda s: MediaAssetExtractor(s.source_docs_dir),
}


async def dry_run_step(env: StepEnv) -> StepOutcome:
    """
    Synthetic result for any step.

    Import steps also read their sources (read-only) so the report shows
    how many candidate records are actually available.
    """
    step_id = env.step.id
    result = dict(DRY_RUN_RESULTS.get(step_id, {}))
    result["dry_run"] = True

    if step_id == "database_init":
        result["tables"] = len(Base.metadata.tables)
        result["indexes"] = sum(len(table.indexes) for table in Base.metadata.tables.values())

    if step_id in DRY_RUN_SOURCES:
        records = await DRY_RUN_SOURCES[step_id](env.settings).extract()
        result["source_records"] = len(records)

    counts = {}
    if env.step.count_key and "would_insert" in result:
        counts[env.step.count_key] = result["would_insert"]

    logger.info(f"[DRY RUN] {env.step.name}: {result}")
    return StepOutcome(result=result, counts=counts)
