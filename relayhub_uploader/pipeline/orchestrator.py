"""
Orchestrator Module.

Runs the upload pipeline over every shipment folder of a root
directory. Folders are processed one at a time, in listing order, and
each folder is isolated: whatever goes wrong with one folder is logged,
recorded as its outcome, and the run moves on to the next folder.

An ID is allocated only when a folder reaches payload building, so
folders skipped or failed before that point do not consume one. A
folder whose submission fails has already consumed its ID.

Usage:
    from relayhub_uploader.pipeline import Orchestrator
    
    orchestrator = Orchestrator.from_config()
    summary = orchestrator.run("exports/2025-07")
    print(summary.submitted, summary.failed)
"""

from pathlib import Path
from typing import Optional, Union

from relayhub_uploader.utils.logger import get_logger, log_banner
from relayhub_uploader.utils.helpers import to_pretty_json
from relayhub_uploader.utils.exceptions import (
    ScanError,
    NotFoundError,
    SubmissionError
)
from relayhub_uploader.scanner import DirectoryScanner
from relayhub_uploader.payload import (
    AdditionalDataTemplate,
    PayloadBuilder,
    SequentialIdAllocator
)
from relayhub_uploader.client import SubmissionClient

from .outcome import FolderOutcome, OutcomeReason, OutcomeStatus, RunSummary

logger = get_logger(__name__)


class Orchestrator:
    """
    Drives scanner, builder and client across all shipment folders.
    
    Without a client the orchestrator runs dry: payloads are built (and
    IDs consumed) but nothing is sent.
    
    Attributes:
        scanner: DirectoryScanner for folders and documents
        builder: PayloadBuilder holding the shared ID allocator
        client: SubmissionClient, or None for a dry run
        
    Example:
        >>> orchestrator = Orchestrator(scanner, builder, client)
        >>> summary = orchestrator.run("exports/2025-07")
        >>> summary.reference_numbers
        ['SHIPMENT-17_0080', 'SHIPMENT-18_0081']
    """
    
    def __init__(
        self,
        scanner: DirectoryScanner,
        builder: PayloadBuilder,
        client: Optional[SubmissionClient] = None
    ) -> None:
        self.scanner = scanner
        self.builder = builder
        self.client = client
    
    @classmethod
    def from_config(
        cls,
        dry_run: bool = False,
        start_index: Optional[int] = None,
        pad_width: Optional[int] = None,
        invoice_enabled: Optional[bool] = None,
        declaration_enabled: Optional[bool] = None,
        token: Optional[str] = None
    ) -> 'Orchestrator':
        """
        Build an orchestrator from configuration.
        
        Args:
            dry_run: Build payloads without sending them.
            start_index: Override config for the first object ID.
            pad_width: Override config for the ID pad width.
            invoice_enabled: Override config for invoice documents.
            declaration_enabled: Override config for declaration documents.
            token: Override config for the bearer token.
            
        Returns:
            Orchestrator ready to run.
            
        Raises:
            ConfigurationError: If a live run has no token.
            PayloadError: If the additional data template is invalid.
        """
        allocator = SequentialIdAllocator(start=start_index, width=pad_width)
        builder = PayloadBuilder(
            allocator,
            AdditionalDataTemplate.from_config(),
            invoice_enabled=invoice_enabled,
            declaration_enabled=declaration_enabled
        )
        client = None if dry_run else SubmissionClient(token=token)
        return cls(DirectoryScanner(), builder, client)
    
    @property
    def dry_run(self) -> bool:
        return self.client is None
    
    def run(self, root: Union[str, Path]) -> RunSummary:
        """
        Process every shipment folder directly below root.
        
        Args:
            root: Directory holding one folder per shipment.
            
        Returns:
            RunSummary with one outcome per folder. When root cannot be
            listed the summary carries root_error and no outcomes.
        """
        root = Path(root)
        summary = RunSummary(root=root)
        
        try:
            folders = self.scanner.list_subfolders(root)
        except NotFoundError as e:
            logger.error(f"Directory does not exist: {root}")
            summary.root_error = str(e)
            summary.finish()
            return summary
        except ScanError as e:
            logger.error(f"Error reading directory {root}: {e}")
            summary.root_error = str(e)
            summary.finish()
            return summary
        
        if not folders:
            logger.info(f"No folders found in: {root}")
            summary.finish()
            return summary
        
        logger.info(f"Folders found in \"{root}\":")
        log_banner(logger, width=50)
        
        for folder in folders:
            try:
                outcome = self.process_folder(folder)
            except Exception as e:
                logger.exception(f"Unexpected error processing {folder}: {e}")
                outcome = FolderOutcome(
                    folder=folder,
                    status=OutcomeStatus.FAILED,
                    reason=OutcomeReason.UNEXPECTED_ERROR,
                    error=str(e)
                )
            summary.add(outcome)
        
        summary.finish()
        
        log_banner(logger, width=50)
        logger.info(f"Total folders: {summary.total_folders}")
        logger.info(
            f"Submitted: {summary.submitted}, built: {summary.built}, "
            f"skipped: {summary.skipped}, failed: {summary.failed}"
        )
        return summary
    
    def process_folder(self, folder: Union[str, Path]) -> FolderOutcome:
        """
        Classify, read, build and submit one shipment folder.
        
        Folder-level errors are turned into the returned outcome and
        never raised.
        
        Args:
            folder: Shipment folder; its name is the base reference number.
            
        Returns:
            FolderOutcome for the folder.
        """
        folder = Path(folder)
        logger.info(f"Directory: {folder}")
        
        try:
            documents = self.scanner.classify_files(folder)
        except NotFoundError as e:
            logger.error(f"Directory does not exist: {folder}")
            return FolderOutcome(
                folder=folder,
                status=OutcomeStatus.SKIPPED,
                reason=OutcomeReason.FOLDER_NOT_FOUND,
                error=str(e)
            )
        except ScanError as e:
            logger.error(f"Error checking directory {folder}: {e}")
            return FolderOutcome(
                folder=folder,
                status=OutcomeStatus.FAILED,
                reason=OutcomeReason.READ_ERROR,
                error=str(e)
            )
        
        if documents.file_count == 0:
            logger.info(f"No files found in directory: {folder}")
            return FolderOutcome(
                folder=folder,
                status=OutcomeStatus.SKIPPED,
                reason=OutcomeReason.NO_FILES
            )
        
        outcome = FolderOutcome(
            folder=folder,
            status=OutcomeStatus.SKIPPED,
            declaration_file=documents.declaration.name if documents.declaration else None,
            invoice_file=documents.invoice.name if documents.invoice else None,
            details={'classification': documents.to_dict()}
        )
        
        if not documents.has_documents:
            logger.info(f"No valid files found in directory: {folder}")
            logger.info(to_pretty_json(documents.to_dict()))
            outcome.reason = OutcomeReason.NO_DOCUMENTS
            return outcome
        
        try:
            declaration_base64 = (
                self.scanner.read_as_encoded_string(documents.declaration.path)
                if documents.declaration else None
            )
            invoice_base64 = (
                self.scanner.read_as_encoded_string(documents.invoice.path)
                if documents.invoice else None
            )
        except ScanError as e:
            logger.error(f"Error reading files in {folder}: {e}")
            outcome.status = OutcomeStatus.FAILED
            outcome.reason = OutcomeReason.READ_ERROR
            outcome.error = str(e)
            return outcome
        
        # Matched but empty files count as missing
        if not declaration_base64 and not invoice_base64:
            logger.info(f"No valid files found in directory: {folder}")
            logger.info(to_pretty_json(documents.to_dict()))
            outcome.reason = OutcomeReason.NO_DOCUMENTS
            return outcome
        
        submission = self.builder.build(
            reference_no=folder.name,
            declaration_base64=declaration_base64,
            declaration_filename=outcome.declaration_file,
            invoice_base64=invoice_base64,
            invoice_filename=outcome.invoice_file
        )
        outcome.reference_no = submission.reference_no
        outcome.documents = submission.document_types
        
        if self.client is None:
            logger.info(
                f"Dry run: built {submission.reference_no} "
                f"with documents {submission.document_types}"
            )
            outcome.status = OutcomeStatus.BUILT
            return outcome
        
        try:
            acknowledgment = self.client.submit(submission)
        except SubmissionError as e:
            logger.error(f"Error processing request for {submission.reference_no}: {e}")
            outcome.status = OutcomeStatus.FAILED
            outcome.reason = OutcomeReason.SUBMISSION_ERROR
            outcome.error = str(e)
            outcome.details['diagnostic'] = e.diagnostic
            return outcome
        
        outcome.status = OutcomeStatus.SUBMITTED
        if acknowledgment is not None:
            outcome.details['acknowledgment'] = acknowledgment
        return outcome
