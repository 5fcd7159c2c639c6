"""
Pydantic schemas for pipeline results: backups, load outcomes, validation
and the end-of-run migration report.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from models.base import RunStatus, StepStatus


# ============================================================================
# Backups
# ============================================================================

class BackupHandle(BaseModel):
    """A timestamped copy of the store file"""
    label: str
    path: str
    timestamp: datetime
    size_bytes: int


# ============================================================================
# Loading
# ============================================================================

class OutcomeKind(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED_MALFORMED = "failed_malformed"


class LoadOutcome(BaseModel):
    """Per-record result of a load"""
    kind: OutcomeKind
    key: str
    record_id: Optional[Any] = None
    reason: Optional[str] = None


class BatchResult(BaseModel):
    """Aggregate result of loading one batch"""
    table: str
    inserted_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    errors: List[str] = Field(default_factory=list)
    outcomes: List[LoadOutcome] = Field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.errors)

    def add(self, outcome: LoadOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.kind == OutcomeKind.INSERTED:
            self.inserted_count += 1
        elif outcome.kind == OutcomeKind.UPDATED:
            self.updated_count += 1
        elif outcome.kind == OutcomeKind.SKIPPED_DUPLICATE:
            self.skipped_count += 1
        else:
            self.errors.append(f"{outcome.key}: {outcome.reason}")

    def summary(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "inserted": self.inserted_count,
            "updated": self.updated_count,
            "skipped": self.skipped_count,
            "failed": self.failed_count,
            "errors": self.errors,
        }


# ============================================================================
# Validation
# ============================================================================

class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    check: str
    severity: Severity
    entity: str
    entity_id: Optional[str] = None
    message: str

    def __str__(self) -> str:
        subject = f"{self.entity} {self.entity_id}" if self.entity_id else self.entity
        return f"[{self.severity.value}] {self.check}: {subject}: {self.message}"


class QueryTiming(BaseModel):
    name: str
    duration_ms: float
    row_count: int
    performance: str = Field(..., description="good, acceptable or slow")


class ValidationReport(BaseModel):
    """Structured result of the post-load validation pass"""
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    record_counts: Dict[str, int] = Field(default_factory=dict)
    indexes: List[str] = Field(default_factory=list)
    checks: Dict[str, bool] = Field(default_factory=dict)
    issues: List[ValidationIssue] = Field(default_factory=list)
    query_timings: List[QueryTiming] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    def issues_for(self, check: str) -> List[ValidationIssue]:
        return [i for i in self.issues if i.check == check]

    def summary(self) -> Dict[str, Any]:
        return {
            "total_checks": len(self.checks),
            "passed_checks": sum(1 for ok in self.checks.values() if ok),
            "failed_checks": sum(1 for ok in self.checks.values() if not ok),
            "errors": self.error_count,
            "warnings": self.warning_count,
        }


# ============================================================================
# Migration run
# ============================================================================

class StepResult(BaseModel):
    """Outcome of one migration step"""
    step_id: str
    name: str
    critical: bool
    status: StepStatus = StepStatus.PENDING
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    duration_seconds: float = 0.0
    estimated_seconds: int = 0
    result: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
    rollback_action: str = "none"
    rollback_performed: bool = False


class MigrationReport(BaseModel):
    """End-of-run report written as JSON next to the text summary"""
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    mode: str = "PRODUCTION"
    status: RunStatus = RunStatus.NOT_STARTED
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    steps: List[StepResult] = Field(default_factory=list)
    backups: List[BackupHandle] = Field(default_factory=list)
    record_counts: Dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None

    @property
    def completed_steps(self) -> List[StepResult]:
        return [s for s in self.steps if s.status == StepStatus.COMPLETED]

    @property
    def failed_steps(self) -> List[StepResult]:
        return [s for s in self.steps if s.status == StepStatus.FAILED]

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.SUCCEEDED

    def step(self, step_id: str) -> Optional[StepResult]:
        for step in self.steps:
            if step.step_id == step_id:
                return step
        return None

    def summary(self) -> Dict[str, Any]:
        total = sum(s.duration_seconds for s in self.steps)
        return {
            "total_steps": len(self.steps),
            "completed": len(self.completed_steps),
            "failed": len(self.failed_steps),
            "skipped": sum(1 for s in self.steps if s.status == StepStatus.SKIPPED),
            "pending": sum(1 for s in self.steps if s.status == StepStatus.PENDING),
            "total_duration_seconds": round(total, 2),
            "estimated_duration_seconds": sum(s.estimated_seconds for s in self.steps),
            "backups_created": len(self.backups),
        }
