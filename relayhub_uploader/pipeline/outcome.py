"""
Run Outcome Data Classes.

Every folder the orchestrator visits produces one FolderOutcome; the
outcomes of a root directory are collected into a RunSummary so callers
can inspect results instead of reading logs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class OutcomeStatus(str, Enum):
    SUBMITTED = "submitted"
    BUILT = "built"          # dry run: payload built, not sent
    SKIPPED = "skipped"
    FAILED = "failed"


class OutcomeReason(str, Enum):
    NO_FILES = "no_files"
    NO_DOCUMENTS = "no_documents"
    FOLDER_NOT_FOUND = "folder_not_found"
    READ_ERROR = "read_error"
    SUBMISSION_ERROR = "submission_error"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass
class FolderOutcome:
    """
    Result of processing one shipment folder.
    
    Attributes:
        folder: Shipment folder path
        status: What happened to the folder
        reason: Why it was skipped or failed (None on success)
        reference_no: Reference number, once a payload was built
        declaration_file: Declaration filename, if one was found
        invoice_file: Invoice filename, if one was found
        documents: File types actually included in the payload
        error: Error message for failures
        details: Extra diagnostics (server response, classification)
    """
    folder: Path
    status: OutcomeStatus
    reason: Optional[OutcomeReason] = None
    reference_no: Optional[str] = None
    declaration_file: Optional[str] = None
    invoice_file: Optional[str] = None
    documents: List[str] = field(default_factory=list)
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def folder_name(self) -> str:
        return self.folder.name
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'folder': str(self.folder),
            'status': self.status.value,
            'reason': self.reason.value if self.reason else None,
            'reference_no': self.reference_no,
            'declaration_file': self.declaration_file,
            'invoice_file': self.invoice_file,
            'documents': list(self.documents),
            'error': self.error,
        }
    
    def __repr__(self) -> str:
        return (
            f"FolderOutcome(folder='{self.folder_name}', "
            f"status='{self.status.value}', "
            f"reference_no={self.reference_no!r})"
        )


@dataclass
class RunSummary:
    """
    Outcomes of one run over a root directory.
    
    Attributes:
        root: Root directory that was scanned
        outcomes: Folder outcomes in processing order
        root_error: Why the root could not be listed, if it could not
        started_at: ISO timestamp of the start of the run
        finished_at: ISO timestamp of the end of the run
    """
    root: Path
    outcomes: List[FolderOutcome] = field(default_factory=list)
    root_error: Optional[str] = None
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    
    def __post_init__(self):
        if self.started_at is None:
            self.started_at = datetime.now().isoformat()
    
    def add(self, outcome: FolderOutcome) -> None:
        self.outcomes.append(outcome)
    
    def finish(self) -> None:
        self.finished_at = datetime.now().isoformat()
    
    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)
    
    @property
    def total_folders(self) -> int:
        return len(self.outcomes)
    
    @property
    def submitted(self) -> int:
        return self._count(OutcomeStatus.SUBMITTED)
    
    @property
    def built(self) -> int:
        return self._count(OutcomeStatus.BUILT)
    
    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)
    
    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)
    
    @property
    def reference_numbers(self) -> List[str]:
        return [o.reference_no for o in self.outcomes if o.reference_no]
    
    def by_status(self, status: OutcomeStatus) -> List[FolderOutcome]:
        return [o for o in self.outcomes if o.status == status]
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'root': str(self.root),
            'root_error': self.root_error,
            'started_at': self.started_at,
            'finished_at': self.finished_at,
            'total_folders': self.total_folders,
            'submitted': self.submitted,
            'built': self.built,
            'skipped': self.skipped,
            'failed': self.failed,
            'outcomes': [o.to_dict() for o in self.outcomes],
        }
