# ============================================================================
# File: ingestion/runner.py
# Description: Migration orchestrator with backup, rollback and dry-run support
# ============================================================================
"""
Migration Runner - drives the ordered migration steps.

This module provides the orchestration around the step handlers:
- Backup before every critical step
- Rollback decisions (the only place they are made)
- Dry-run, step-by-step and skip-validation modes
- Guaranteed engine disposal whatever the outcome
- The end-of-run report
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from core.config import Settings, settings as default_settings
from core.database import create_engine, create_session_maker
from core.exceptions import ETLException, MigrationAbortedError, RollbackError
from core.logging import log_success
from ingestion.backup import BackupManager
from ingestion.loaders.sql_loader import SQLLoader, StepJournal
from ingestion.reporting import log_summary, write_report
from ingestion.steps import (
    Handler,
    MIGRATION_STEPS,
    MigrationOptions,
    MigrationStep,
    RollbackAction,
    RunContext,
    StepEnv,
    StepOutcome,
    STEP_HANDLERS,
    dry_run_step,
)
from models.base import RunStatus, StepStatus
from schemas.report import BackupHandle, MigrationReport, StepResult
import logging

logger = logging.getLogger(__name__)

Confirm = Callable[[MigrationStep], bool]


def always_confirm(step: MigrationStep) -> bool:
    return True


class MigrationRunner:
    """
    Migration orchestrator

    Responsibilities:
    - Run steps strictly in order
    - On a critical failure, run the step's rollback and halt
    - On a non-critical failure, clear what the step inserted and continue
    - Thread an immutable RunContext from step to step
    - Produce the MigrationReport
    """

    def __init__(
        self,
        options: MigrationOptions = None,
        config: Settings = None,
        steps: Sequence[MigrationStep] = MIGRATION_STEPS,
        handlers: Dict[str, Handler] = None,
        confirm: Confirm = always_confirm,
    ):
        self.options = options or MigrationOptions()
        self.settings = config or default_settings
        self.steps = list(steps)
        self.handlers = {**STEP_HANDLERS, **(handlers or {})}
        self.confirm = confirm
        self.backups = BackupManager(self.settings)
        self.engine = None
        self.session_maker = None

    async def run(self) -> MigrationReport:
        """
        Run every step and return the report.

        Pipeline phases:
        1. Open the store (skipped in dry run)
        2. Execute steps, backing up before those that restore on failure
        3. Roll back / halt on failure
        4. Dispose the engine and write the report

        Returns:
            MigrationReport; its status is succeeded, failed or rolled_back
        """
        ctx = RunContext(options=self.options, settings=self.settings).begin()
        total = len(self.steps)

        logger.info(f"Starting migration in {self.options.mode} mode ({total} steps)")
        if self.options.dry_run:
            logger.warning("DRY RUN: no changes will be made to the database or filesystem")

        try:
            # --------------------------------------------------
            # PHASE 1: OPEN STORE
            # --------------------------------------------------
            if not self.options.dry_run:
                self.engine = create_engine(self.settings.DATABASE_URL)
                self.session_maker = create_session_maker(self.engine)

            # --------------------------------------------------
            # PHASE 2: STEPS
            # --------------------------------------------------
            for index, step in enumerate(self.steps):
                if self.options.step_by_step and index > 0 and not self.confirm(step):
                    raise MigrationAbortedError(
                        f"Migration aborted before {step.id}",
                        context={"step_id": step.id}
                    )

                if step.id == "data_validation" and self.options.skip_validation:
                    logger.warning(f"Skipping {step.name} (--skip-validation)")
                    ctx = ctx.with_result(self._result(step, StepStatus.SKIPPED))
                    continue

                ctx, failed = await self._run_step(step, ctx, index, total)
                if failed and step.critical:
                    break

            # --------------------------------------------------
            # PHASE 3: FINAL STATUS
            # --------------------------------------------------
            ctx = ctx.finish(self._final_status(ctx))

        except MigrationAbortedError as e:
            logger.error(e.message)
            ctx = ctx.finish(RunStatus.FAILED, error=e.message)

        finally:
            if self.engine is not None:
                await self.engine.dispose()
                self.engine = None

        # --------------------------------------------------
        # PHASE 4: REPORT
        # --------------------------------------------------
        report = self._build_report(ctx)
        log_summary(report)

        if not self.options.dry_run:
            write_report(report, self.settings)

        return report

    async def rollback_all(self) -> BackupHandle:
        """
        Restore the earliest initial backup (or the earliest backup of any step).

        In dry run the chosen backup is only reported.

        Raises:
            RollbackError: If no backup is available
        """
        handle = self.backups.find_rollback_backup()
        if handle is None:
            raise RollbackError(
                "No backup available for rollback",
                context={"backup_dir": str(self.backups.backup_dir)}
            )

        if self.options.dry_run:
            logger.info(f"[DRY RUN] Would restore '{handle.label}' backup from {handle.path}")
            return handle

        logger.warning(f"Executing full rollback from {handle.path}")
        self.backups.restore_from_backup(handle)
        log_success(logger, f"Full rollback completed from '{handle.label}' backup")
        return handle

    # ------------------------------------------------------------------
    # Step execution
    # ------------------------------------------------------------------

    def _result(self, step: MigrationStep, status: StepStatus = StepStatus.PENDING) -> StepResult:
        return StepResult(
            step_id=step.id,
            name=step.name,
            critical=step.critical,
            status=status,
            estimated_seconds=step.estimated_seconds,
            rollback_action=step.rollback_action.value,
        )

    async def _run_step(self, step: MigrationStep, ctx: RunContext, index: int, total: int) -> Tuple[RunContext, bool]:
        """Run one step; returns the next context and whether the step failed"""
        result = self._result(step, StepStatus.RUNNING)
        result.started_at = datetime.utcnow()

        logger.info(
            f"[{index + 1}/{total}] {step.name}"
            f"{' (critical)' if step.critical else ''} - estimated {step.estimated_seconds}s"
        )

        backup = None
        journal = StepJournal(step.id)
        handler = dry_run_step if self.options.dry_run else self.handlers[step.id]

        try:
            if self._needs_backup(step):
                backup = self.backups.create_backup(step.id)
                if backup is not None:
                    ctx = ctx.with_backup(backup)

            env = StepEnv(
                step=step,
                context=ctx,
                journal=journal,
                engine=self.engine,
                session_maker=self.session_maker,
            )
            outcome: StepOutcome = await handler(env)

        except Exception as e:
            # Any failure inside a step lands here; this is where rollback is decided
            result.status = StepStatus.FAILED
            result.error = e.message if isinstance(e, ETLException) else f"{type(e).__name__}: {e}"
            result.finished_at = datetime.utcnow()
            result.duration_seconds = (result.finished_at - result.started_at).total_seconds()

            if isinstance(e, ETLException):
                logger.error(f"{step.name} failed: {e}", extra={"error_context": e.to_dict()})
            else:
                logger.exception(f"{step.name} failed unexpectedly")

            result.rollback_performed = await self._rollback(step, backup, journal)
            if step.critical:
                logger.error(f"Critical step {step.id} failed; halting migration")
            else:
                logger.warning(f"Non-critical step {step.id} failed; continuing")

            return ctx.with_result(result), True

        result.status = StepStatus.COMPLETED
        result.result = outcome.result
        result.finished_at = datetime.utcnow()
        result.duration_seconds = (result.finished_at - result.started_at).total_seconds()

        for handle in outcome.backups:
            ctx = ctx.with_backup(handle)
        ctx = ctx.with_result(result, outcome.counts)

        self._sanity_check(step, ctx)
        log_success(
            logger,
            f"{step.name} completed in {result.duration_seconds:.1f}s "
            f"({ctx.progress(total):.0f}% complete)"
        )
        return ctx, False

    def _needs_backup(self, step: MigrationStep) -> bool:
        """Only critical steps that restore on failure get a pre-step snapshot"""
        return (
            step.critical
            and step.rollback_action == RollbackAction.RESTORE_BACKUP
            and not self.options.dry_run
        )

    def _sanity_check(self, step: MigrationStep, ctx: RunContext) -> None:
        if self.options.dry_run or self.options.skip_validation:
            return
        if not step.count_key or not step.expected_minimum:
            return

        count = ctx.counts.get(step.count_key, 0)
        if count < step.expected_minimum:
            logger.warning(
                f"Only {count} {step.count_key} after {step.id}; "
                f"expected at least {step.expected_minimum}"
            )

    async def _rollback(self, step: MigrationStep, backup: Optional[BackupHandle], journal: StepJournal) -> bool:
        """
        Run the step's declared rollback action.

        Returns:
            True if something was rolled back
        """
        action = step.rollback_action

        if self.options.dry_run:
            logger.info(f"[DRY RUN] Would execute rollback: {action.value}")
            return False

        if action == RollbackAction.NONE:
            logger.warning(f"No rollback action defined for {step.id}")
            return False

        try:
            if action == RollbackAction.RESTORE_BACKUP:
                if backup is None:
                    logger.error(f"No backup was taken before {step.id}; cannot restore")
                    return False
                # Release every connection before the file is replaced
                await self.engine.dispose()
                self.backups.restore_from_backup(backup)
                log_success(logger, f"Restored database from {backup.label} backup")
                return True

            if action.clears_rows:
                async with self.session_maker() as session:
                    deleted = await SQLLoader(session).delete_inserted(journal)
                log_success(logger, f"Rollback {action.value}: removed {deleted} rows")
                return True

        except ETLException as e:
            logger.error(f"Rollback {action.value} for {step.id} failed: {e}")
            return False

        return False

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    def _final_status(self, ctx: RunContext) -> RunStatus:
        for result in ctx.results:
            if result.status == StepStatus.FAILED and result.critical:
                if result.rollback_performed and result.rollback_action == RollbackAction.RESTORE_BACKUP.value:
                    return RunStatus.ROLLED_BACK
                return RunStatus.FAILED
        return RunStatus.SUCCEEDED

    def _build_report(self, ctx: RunContext) -> MigrationReport:
        executed = {r.step_id: r for r in ctx.results}
        steps: List[StepResult] = [executed.get(step.id) or self._result(step) for step in self.steps]

        failed = [r for r in steps if r.status == StepStatus.FAILED]
        error = ctx.error or (f"{failed[0].step_id}: {failed[0].error}" if failed else None)

        return MigrationReport(
            mode=self.options.mode,
            status=ctx.status,
            started_at=ctx.started_at,
            finished_at=datetime.utcnow(),
            steps=steps,
            backups=list(ctx.backups),
            record_counts=dict(ctx.counts),
            error=error,
        )
