"""
Custom exceptions for the migration pipeline with structured error context.

Each exception carries a context dictionary so failures can be logged and
written into the migration report without losing the details of where they
happened.

Exception Hierarchy:
    ETLException (base)
    ├── ExtractionError
    │   └── SpreadsheetExtractionError
    ├── LoadError
    │   └── DatabaseError
    ├── BackupError
    │   ├── BackupNotFoundError
    │   └── RestoreError
    └── MigrationError
        ├── ValidationFailedError
        ├── IntegrityCheckError
        ├── MigrationAbortedError
        └── RollbackError
"""

from typing import Optional, Dict, Any
from datetime import datetime


class ETLException(Exception):
    """
    Base exception for all pipeline errors.
    
    Attributes:
        message: Human-readable error message
        context: Additional context information (step, file, table, etc.)
        original_exception: The original exception that was caught (if any)
    """
    
    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.utcnow()
        
        self.context["error_timestamp"] = self.timestamp.isoformat()
        
        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception
    
    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"
        
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"
        
        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"
        
        return base_msg
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/storage."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(ETLException):
    """Base exception for source extraction failures."""
    pass


class SpreadsheetExtractionError(ExtractionError):
    """
    Exception raised when a product workbook cannot be parsed.
    
    Context should include:
        - file_path: Path to the workbook
        - sheet_name: Sheet being read (if applicable)
    """
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(ETLException):
    """Base exception for data loading failures."""
    pass


class DatabaseError(LoadError):
    """
    Exception raised when database operations fail.
    
    Context should include:
        - operation: Type of database operation (INSERT, UPSERT, DELETE)
        - table_name: Name of the table
    """
    pass


# ============================================================================
# Backup Errors
# ============================================================================

class BackupError(ETLException):
    """Base exception for backup and restore failures."""
    pass


class BackupNotFoundError(BackupError):
    """Raised when a backup file referenced by a handle is missing."""
    pass


class RestoreError(BackupError):
    """Raised when copying a backup over the live store fails."""
    pass


# ============================================================================
# Orchestration Errors
# ============================================================================

class MigrationError(ETLException):
    """Base exception for orchestration failures."""
    pass


class ValidationFailedError(MigrationError):
    """Raised when the post-load validation pass finds errors."""
    pass


class IntegrityCheckError(MigrationError):
    """Raised when the store's own integrity check does not report ok."""
    pass


class MigrationAbortedError(MigrationError):
    """Raised when the operator declines to continue in step-by-step mode."""
    pass


class RollbackError(MigrationError):
    """Raised when a rollback cannot be performed."""
    pass
