"""
Command-line entrypoint for the site migration.

Usage:
    python scripts/run_migration.py [--dry-run] [--verbose] [--step-by-step]
                                    [--skip-validation] [--rollback]

Exit code is 0 when the run (or rollback) succeeded and 1 otherwise.
"""

import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

import click

from core.config import settings
from core.exceptions import ETLException
from core.logging import migration_log_file, setup_logging
from ingestion.runner import MigrationRunner, always_confirm
from ingestion.steps import MigrationOptions, MigrationStep

logger = logging.getLogger(__name__)


def confirm_step(step: MigrationStep) -> bool:
    """Ask the operator before each step in step-by-step mode"""
    click.echo(f"\nNext: {step.name} - {step.description}")
    return click.confirm("Proceed?", default=True)


@click.command(context_settings={"help_option_names": ["--help", "-h"]})
@click.option("--dry-run", is_flag=True, help="Report synthetic results without changing the database or files.")
@click.option("--verbose", is_flag=True, help="Log debug detail.")
@click.option("--step-by-step", is_flag=True, help="Ask for confirmation before each step.")
@click.option("--skip-validation", is_flag=True, help="Skip the data validation step and sanity checks.")
@click.option("--rollback", is_flag=True, help="Restore the earliest initial backup and exit.")
def main(dry_run: bool, verbose: bool, step_by_step: bool, skip_validation: bool, rollback: bool) -> None:
    """Migrate the legacy site documents into the site database."""
    log_file = None if dry_run else migration_log_file(settings.log_dir)
    setup_logging(verbose=verbose, log_file=log_file)

    options = MigrationOptions(
        dry_run=dry_run,
        verbose=verbose,
        step_by_step=step_by_step,
        skip_validation=skip_validation,
    )
    runner = MigrationRunner(
        options,
        config=settings,
        confirm=confirm_step if step_by_step else always_confirm,
    )

    if rollback:
        try:
            asyncio.run(runner.rollback_all())
        except ETLException as e:
            logger.error(f"Rollback failed: {e}")
            sys.exit(1)
        sys.exit(0)

    try:
        report = asyncio.run(runner.run())
    except ETLException as e:
        logger.error(f"Migration failed: {e}")
        sys.exit(1)

    sys.exit(0 if report.succeeded else 1)


if __name__ == "__main__":
    main()
