"""
Core utilities and configuration for the site migration pipeline.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    database: Database engine and session management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration (including the SUCCESS level)

Usage:
    from core.config import settings
    from core.database import create_engine, create_session_maker
    from core.exceptions import BackupError, RollbackError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging(verbose=True)
    
    # Open a session
    engine = create_engine()
    async with create_session_maker(engine)() as session:
        # Perform database operations
        pass
"""

__all__ = [
    "settings",
    "create_engine",
    "create_session_maker",
    "setup_logging",
    # Exceptions
    "ETLException",
    "ExtractionError",
    "SpreadsheetExtractionError",
    "LoadError",
    "DatabaseError",
    "BackupError",
    "BackupNotFoundError",
    "RestoreError",
    "MigrationError",
    "ValidationFailedError",
    "IntegrityCheckError",
    "MigrationAbortedError",
    "RollbackError",
]
