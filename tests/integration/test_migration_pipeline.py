"""
Integration tests for the complete migration run
"""

import json
import pytest
from sqlalchemy import func, select
from core.database import create_engine, create_session_maker
from ingestion.runner import MigrationRunner
from ingestion.steps import MIGRATION_STEPS, MigrationOptions
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
from models.base import RunStatus, StepStatus

COUNTED = [
    Product, ProductCategory, Project, ProjectCategory, Client,
    Approval, MediaFile, SiteContent, SeoSettings, CompanyInfo,
]


async def table_counts(settings):
    engine = create_engine(settings.DATABASE_URL)
    try:
        async with create_session_maker(engine)() as session:
            return {
                model.__tablename__: await session.scalar(select(func.count()).select_from(model))
                for model in COUNTED
            }
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_full_migration_integration(test_settings):
    """
    Integration test: backup → schema → imports → media → content → validation → verification
    """
    report = await MigrationRunner(MigrationOptions(), config=test_settings).run()

    assert report.status == RunStatus.SUCCEEDED, report.error
    assert [s.step_id for s in report.steps] == [s.id for s in MIGRATION_STEPS]
    assert all(s.status == StepStatus.COMPLETED for s in report.steps)

    counts = await table_counts(test_settings)
    assert counts["products"] == 3
    assert counts["product_categories"] == 5
    assert counts["projects"] == 4
    assert counts["project_categories"] == 5
    assert counts["clients"] == 2
    assert counts["approvals"] == 2
    assert counts["media_files"] == 8
    assert counts["seo_settings"] == 7
    assert counts["site_content"] > 0
    assert counts["company_info"] > 0

    # Media were copied into the public tree
    assert (test_settings.media_dir / "approval-logos" / "GMRC.svg").read_bytes() == b"<svg/>"
    assert (test_settings.media_dir / "project-photos" / "metro-rail" / "1. Ahmedabad Station.jpg").exists()

    # Report and summary were written
    reports = list(test_settings.report_dir.glob("migration-report-*.json"))
    assert len(reports) == 1
    payload = json.loads(reports[0].read_text())
    assert payload["status"] == "succeeded"
    assert payload["record_counts"]["products"] == 3
    assert list(test_settings.report_dir.glob("migration-summary-*.txt"))

    verification = report.step("final_verification").result
    assert verification["integrity"] == "PASSED"


@pytest.mark.asyncio
async def test_second_run_is_idempotent(test_settings):
    """Running twice over the same sources adds no rows"""
    first = await MigrationRunner(MigrationOptions(), config=test_settings).run()
    counts_after_first = await table_counts(test_settings)
    media_after_first = sorted(p.name for p in test_settings.media_dir.rglob("*") if p.is_file())

    second = await MigrationRunner(MigrationOptions(), config=test_settings).run()

    assert first.status == RunStatus.SUCCEEDED
    assert second.status == RunStatus.SUCCEEDED
    assert await table_counts(test_settings) == counts_after_first
    assert sorted(p.name for p in test_settings.media_dir.rglob("*") if p.is_file()) == media_after_first

    products = second.step("products_import").result
    assert products["inserted"] == 0
    assert products["skipped"] == 3

    content = second.step("content_population").result["content_items"]
    assert content["inserted"] == 0
    assert content["updated"] == counts_after_first["site_content"]


@pytest.mark.asyncio
async def test_second_run_backs_up_existing_store(test_settings):
    await MigrationRunner(MigrationOptions(), config=test_settings).run()

    report = await MigrationRunner(MigrationOptions(), config=test_settings).run()

    labels = [b.label for b in report.backups]
    assert sorted(labels) == ["database_init", "initial"]
    for backup in report.backups:
        assert f"{backup.label}-backup-" in backup.path
