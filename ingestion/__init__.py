"""
Migration pipeline components for seeding the site database.

This package contains every stage between the legacy document folder and
the populated site database:

Modules:
    base: Abstract base class for source extractors
    backup: Timestamped copies of the database file and restore
    validator: Post-load structure, integrity, media, content and SEO checks
    steps: The ordered migration steps and their handlers
    runner: Orchestrator that backs up, runs, rolls back and reports
    reporting: JSON report, text summary and console output

Subpackages:
    extractors: Spreadsheet, directory and template sources
    transformers: Classification rules and record normalization
    loaders: Insert-or-ignore / upsert loader and the media organizer

Architecture:
    Each step extracts raw candidates, normalizes them into validated
    records and loads them with insert-or-ignore semantics, so a second run
    over the same sources adds nothing. Critical steps are preceded by a
    backup; a failing critical step runs its rollback action and halts.

Usage:
    from ingestion.runner import MigrationRunner
    from ingestion.steps import MigrationOptions

Example:
    runner = MigrationRunner(MigrationOptions(dry_run=True))
    report = await runner.run()

    print(f"{report.status.value}: {len(report.completed_steps)} steps completed")

Error Handling:
    All components raise exceptions from core.exceptions; the runner is the
    only place where a failure turns into a rollback decision.
"""

__all__ = [
    "SourceExtractor",
    "BackupManager",
    "DataValidator",
    "MigrationRunner",
    "MigrationOptions",
    "MIGRATION_STEPS",
]
