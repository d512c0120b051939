"""
Payload Module for the Relayhub Uploader.

This module provides functionality for:
    - Allocating sequential, zero-padded object identifiers
    - Loading the additional data template and suffixing object names
    - Assembling job-order submissions from document pairs
"""

from .id_allocator import SequentialIdAllocator
from .template import AdditionalDataTemplate
from .submission import DocumentPayload, Submission
from .builder import PayloadBuilder

__all__ = [
    'SequentialIdAllocator',
    'AdditionalDataTemplate',
    'DocumentPayload',
    'Submission',
    'PayloadBuilder'
]
