"""
Migration report files and console summary
"""

import json
from pathlib import Path
from typing import List, Optional, Tuple

from core.config import Settings, settings as default_settings
from core.logging import log_success
from models.base import RunStatus, StepStatus
from schemas.report import MigrationReport
import logging

logger = logging.getLogger(__name__)

REPORT_PREFIX = "migration-report-"
SUMMARY_PREFIX = "migration-summary-"


def _stamp(report: MigrationReport) -> str:
    return report.timestamp.strftime("%Y-%m-%dT%H-%M-%S")


def render_summary(report: MigrationReport) -> List[str]:
    """Human-readable summary lines"""
    summary = report.summary()
    lines = [
        "=" * 60,
        f"MIGRATION SUMMARY ({report.mode})",
        "=" * 60,
        f"Status:     {report.status.value}",
        f"Steps:      {summary['completed']}/{summary['total_steps']} completed, "
        f"{summary['failed']} failed, {summary['skipped']} skipped, {summary['pending']} not run",
        f"Duration:   {summary['total_duration_seconds']}s "
        f"(estimated {summary['estimated_duration_seconds']}s)",
        f"Backups:    {summary['backups_created']}",
    ]

    if report.record_counts:
        lines.append("Records:")
        for table, count in sorted(report.record_counts.items()):
            lines.append(f"  {table:<20} {count}")

    for step in report.steps:
        marker = {
            StepStatus.COMPLETED: "OK  ",
            StepStatus.FAILED: "FAIL",
            StepStatus.SKIPPED: "SKIP",
        }.get(step.status, "--  ")
        line = f"  [{marker}] {step.name} ({step.duration_seconds:.1f}s)"
        if step.error:
            line += f" - {step.error}"
        if step.rollback_performed:
            line += f" [rolled back: {step.rollback_action}]"
        lines.append(line)

        # Record-level failures are surfaced, never dropped
        failures = step.result.get("failed") if isinstance(step.result, dict) else None
        skipped = step.result.get("skipped") if isinstance(step.result, dict) else None
        if failures or skipped:
            lines.append(f"         {skipped or 0} skipped, {failures or 0} failed records")

    if report.backups:
        lines.append("Backups created:")
        for backup in report.backups:
            lines.append(f"  {Path(backup.path).name}")

    if report.error:
        lines.append(f"Error: {report.error}")

    lines.append("=" * 60)
    return lines


def log_summary(report: MigrationReport) -> None:
    for line in render_summary(report):
        if report.status == RunStatus.SUCCEEDED:
            logger.info(line)
        else:
            logger.warning(line)

    if report.status == RunStatus.SUCCEEDED:
        log_success(logger, "Migration completed successfully")
    else:
        logger.error(f"Migration finished with status {report.status.value}")


def write_report(report: MigrationReport, config: Settings = None) -> Tuple[Path, Path]:
    """
    Write the JSON report and the text summary into the report directory.

    Returns:
        (json_path, summary_path)
    """
    config = config or default_settings
    report_dir = config.report_dir
    report_dir.mkdir(parents=True, exist_ok=True)

    stamp = _stamp(report)
    json_path = report_dir / f"{REPORT_PREFIX}{stamp}.json"
    summary_path = report_dir / f"{SUMMARY_PREFIX}{stamp}.txt"

    payload = report.model_dump(mode="json")
    payload["summary"] = report.summary()

    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    summary_path.write_text("\n".join(render_summary(report)) + "\n", encoding="utf-8")

    logger.info(f"Report saved to {json_path}")
    return json_path, summary_path


def load_latest_report(config: Settings = None) -> Optional[MigrationReport]:
    """Most recent JSON report, or None if no run has written one"""
    config = config or default_settings
    report_dir = config.report_dir
    if not report_dir.is_dir():
        return None

    candidates = sorted(report_dir.glob(f"{REPORT_PREFIX}*.json"))
    if not candidates:
        return None

    payload = json.loads(candidates[-1].read_text(encoding="utf-8"))
    payload.pop("summary", None)
    return MigrationReport.model_validate(payload)
