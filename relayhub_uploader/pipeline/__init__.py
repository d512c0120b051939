"""
Pipeline Module for the Relayhub Uploader.

This module wires scanner, payload builder and submission client into
one run over all shipment folders of a root directory, and records the
outcome of every folder.

Flow:
    ListFolders → [ClassifyFiles → ReadFiles → BuildPayload → Submit] → Done
"""

from .outcome import FolderOutcome, OutcomeStatus, RunSummary, OutcomeReason
from .orchestrator import Orchestrator

__all__ = ['Orchestrator', 'FolderOutcome', 'OutcomeStatus', 'RunSummary', 'OutcomeReason']
