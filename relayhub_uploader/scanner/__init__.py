"""
Scanner Module for the Relayhub Uploader.

This module provides functionality for:
    - Listing shipment folders below a root directory
    - Classifying declaration and invoice files by filename keywords
    - Reading documents as base64 text

Author: Relayhub Integration Team
"""

from .documents import DocumentFile, ClassifiedDocuments
from .scanner import DirectoryScanner

__all__ = ['DirectoryScanner', 'DocumentFile', 'ClassifiedDocuments']
