"""
Tests for failure handling, rollback and run modes
"""

import pytest
from sqlalchemy import func, select
from core.database import create_engine, create_session_maker
from core.exceptions import DatabaseError, RollbackError
from ingestion import steps
from ingestion.reporting import load_latest_report
from ingestion.runner import MigrationRunner
from ingestion.steps import MigrationOptions, StepOutcome
from models import AuditLog, Product
from models.base import AuditAction, RunStatus, StepStatus
from scripts.init_db import init_database


def snapshot(root):
    """Every file under root with its bytes"""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


async def scalar(settings, query):
    engine = create_engine(settings.DATABASE_URL)
    try:
        async with create_session_maker(engine)() as session:
            return await session.scalar(query)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_critical_failure_restores_backup(test_settings):
    """
    A critical step that fails after writing leaves the store byte-identical
    to its pre-step backup and no later step runs.
    """
    await init_database(test_settings.DATABASE_URL)
    store = test_settings.database_file
    before = store.read_bytes()
    called = []

    async def failing_init(env):
        async with env.session_maker() as session:
            session.add(Product(name="Half written", description="x", category_id="construction"))
            await session.commit()
        raise DatabaseError("Schema creation failed", context={"step_id": env.step.id})

    async def spy_products(env):
        called.append(env.step.id)
        return StepOutcome()

    runner = MigrationRunner(
        MigrationOptions(),
        config=test_settings,
        handlers={"database_init": failing_init, "products_import": spy_products},
    )
    report = await runner.run()

    assert report.status == RunStatus.ROLLED_BACK
    failed = report.step("database_init")
    assert failed.status == StepStatus.FAILED
    assert failed.rollback_performed
    assert "Schema creation failed" in failed.error
    assert store.read_bytes() == before

    assert called == []
    later = [s for s in report.steps if s.step_id not in ("backup", "database_init")]
    assert all(s.status == StepStatus.PENDING for s in later)
    assert runner.engine is None


@pytest.mark.asyncio
async def test_non_critical_failure_clears_inserted_rows(test_settings):
    """A failing import removes what it inserted, audits it, and the run continues"""

    async def flaky_products(env):
        await steps.import_products(env)
        raise RuntimeError("workbook vanished mid-read")

    report = await MigrationRunner(
        MigrationOptions(),
        config=test_settings,
        handlers={"products_import": flaky_products},
    ).run()

    products = report.step("products_import")
    assert products.status == StepStatus.FAILED
    assert products.rollback_performed
    assert "RuntimeError" in products.error
    assert report.step("projects_import").status == StepStatus.COMPLETED
    assert report.status == RunStatus.SUCCEEDED

    assert await scalar(test_settings, select(func.count()).select_from(Product)) == 0
    deletes = await scalar(
        test_settings,
        select(func.count()).select_from(AuditLog).where(AuditLog.action == AuditAction.DELETE),
    )
    assert deletes == 3


@pytest.mark.asyncio
async def test_validation_errors_halt_without_rollback(test_settings):
    async def no_content(env):
        return StepOutcome()

    report = await MigrationRunner(
        MigrationOptions(),
        config=test_settings,
        handlers={"content_population": no_content},
    ).run()

    validation = report.step("data_validation")
    assert report.status == RunStatus.FAILED
    assert validation.status == StepStatus.FAILED
    assert not validation.rollback_performed
    assert report.step("final_verification").status == StepStatus.PENDING
    # Imports are kept
    assert await scalar(test_settings, select(func.count()).select_from(Product)) == 3


@pytest.mark.asyncio
async def test_dry_run_changes_nothing(tmp_path, test_settings):
    await init_database(test_settings.DATABASE_URL)
    before = snapshot(tmp_path)

    report = await MigrationRunner(MigrationOptions(dry_run=True), config=test_settings).run()

    assert report.mode == "DRY_RUN"
    assert report.status == RunStatus.SUCCEEDED
    assert all(s.status == StepStatus.COMPLETED for s in report.steps)
    assert report.step("products_import").result["source_records"] == 3
    assert report.step("products_import").result["would_insert"] == 1015
    assert report.backups == []

    assert snapshot(tmp_path) == before
    for directory in (test_settings.backup_dir, test_settings.report_dir,
                      test_settings.log_dir, test_settings.public_dir):
        assert not directory.exists()


@pytest.mark.asyncio
async def test_step_by_step_abort(test_settings):
    asked = []

    def confirm(step):
        asked.append(step.id)
        return step.id != "products_import"

    runner = MigrationRunner(
        MigrationOptions(step_by_step=True),
        config=test_settings,
        confirm=confirm,
    )
    report = await runner.run()

    assert asked == ["database_init", "products_import"]
    assert report.status == RunStatus.FAILED
    assert "products_import" in report.error
    assert report.step("database_init").status == StepStatus.COMPLETED
    assert report.step("products_import").status == StepStatus.PENDING
    assert runner.engine is None


@pytest.mark.asyncio
async def test_confirm_not_consulted_without_step_by_step(test_settings):
    def confirm(step):
        raise AssertionError("confirm should not be called")

    report = await MigrationRunner(
        MigrationOptions(dry_run=True), config=test_settings, confirm=confirm
    ).run()

    assert report.status == RunStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_skip_validation(test_settings):
    async def no_content(env):
        return StepOutcome()

    report = await MigrationRunner(
        MigrationOptions(skip_validation=True),
        config=test_settings,
        handlers={"content_population": no_content},
    ).run()

    assert report.step("data_validation").status == StepStatus.SKIPPED
    assert report.step("final_verification").status == StepStatus.COMPLETED
    assert report.status == RunStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_rollback_all_restores_initial_backup(test_settings):
    await init_database(test_settings.DATABASE_URL)
    store = test_settings.database_file
    pristine = store.read_bytes()

    first = await MigrationRunner(MigrationOptions(), config=test_settings).run()
    assert first.status == RunStatus.SUCCEEDED
    assert store.read_bytes() != pristine

    handle = await MigrationRunner(MigrationOptions(), config=test_settings).rollback_all()

    assert handle.label == "initial"
    assert store.read_bytes() == pristine


@pytest.mark.asyncio
async def test_rollback_all_without_backups(test_settings):
    with pytest.raises(RollbackError):
        await MigrationRunner(MigrationOptions(), config=test_settings).rollback_all()


@pytest.mark.asyncio
async def test_rollback_all_dry_run_leaves_store(test_settings):
    await init_database(test_settings.DATABASE_URL)
    await MigrationRunner(MigrationOptions(), config=test_settings).run()
    store = test_settings.database_file
    migrated = store.read_bytes()

    handle = await MigrationRunner(MigrationOptions(dry_run=True), config=test_settings).rollback_all()

    assert handle.label == "initial"
    assert store.read_bytes() == migrated


@pytest.mark.asyncio
async def test_unwritable_backup_dir_fails_backup_step(test_settings):
    await init_database(test_settings.DATABASE_URL)
    test_settings.backup_dir.write_text("not a directory")

    report = await MigrationRunner(MigrationOptions(), config=test_settings).run()

    assert report.status == RunStatus.FAILED
    assert report.step("backup").status == StepStatus.FAILED
    assert report.step("database_init").status == StepStatus.PENDING
    assert len(list(test_settings.report_dir.glob("migration-report-*.json"))) == 1


@pytest.mark.asyncio
async def test_pre_step_backup_failure_is_a_step_failure(test_settings):
    """A snapshot that cannot be written fails the step it guards and still yields a report"""
    await init_database(test_settings.DATABASE_URL)
    test_settings.backup_dir.write_text("not a directory")
    called = []

    async def skip_preparation(env):
        return StepOutcome()

    async def spy_init(env):
        called.append(env.step.id)
        return StepOutcome()

    report = await MigrationRunner(
        MigrationOptions(),
        config=test_settings,
        handlers={"backup": skip_preparation, "database_init": spy_init},
    ).run()

    failed = report.step("database_init")
    assert report.status == RunStatus.FAILED
    assert failed.status == StepStatus.FAILED
    assert not failed.rollback_performed
    assert "Failed to create 'database_init' backup" in failed.error
    assert called == []
    assert report.step("products_import").status == StepStatus.PENDING

    written = load_latest_report(test_settings)
    assert written is not None
    assert written.status == RunStatus.FAILED
