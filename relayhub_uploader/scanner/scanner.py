"""
Directory Scanner Module.

This module discovers shipment folders below a root directory and picks
the declaration and invoice file of each folder by filename keywords.

Listings are returned in filesystem enumeration order. That order is
arbitrary but it is consumed as-is, without sorting.

Usage:
    from relayhub_uploader.scanner import DirectoryScanner
    
    scanner = DirectoryScanner()
    for folder in scanner.list_subfolders("exports/2025-07"):
        documents = scanner.classify_files(folder)
"""

import base64
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from config import get_config
from relayhub_uploader.utils.logger import get_logger
from relayhub_uploader.utils.helpers import keyword_in_name
from relayhub_uploader.utils.exceptions import (
    ScanError,
    NotFoundError,
    DocumentReadError
)

from .documents import DocumentFile, ClassifiedDocuments

logger = get_logger(__name__)


def _keyword_tuple(keywords: Union[str, Iterable[str]]) -> tuple:
    """A single keyword given as a string is one keyword, not its characters."""
    if isinstance(keywords, str):
        return (keywords,)
    return tuple(keywords)


class DirectoryScanner:
    """
    Scanner for shipment folders and their documents.
    
    Attributes:
        declaration_keywords: Substrings marking a declaration file
        invoice_keywords: Substrings marking an invoice file
        hidden_prefix: Filename prefix of ignored (hidden) files
        
    Example:
        >>> scanner = DirectoryScanner()
        >>> documents = scanner.classify_files("exports/SHIPMENT-17")
        >>> documents.declaration.name
        'beyanname_export.xml'
    """
    
    DEFAULT_DECLARATION_KEYWORDS = ('beyanname', 'declaration')
    DEFAULT_INVOICE_KEYWORDS = ('fatura', 'invoice')
    
    def __init__(
        self,
        declaration_keywords: Optional[Iterable[str]] = None,
        invoice_keywords: Optional[Iterable[str]] = None,
        hidden_prefix: Optional[str] = None
    ) -> None:
        """
        Initialize the scanner.
        
        Args:
            declaration_keywords: Override config for declaration keywords.
            invoice_keywords: Override config for invoice keywords.
            hidden_prefix: Override config for the hidden-file marker.
        """
        if declaration_keywords is None:
            declaration_keywords = get_config(
                "input.declaration_keywords", self.DEFAULT_DECLARATION_KEYWORDS
            )
        if invoice_keywords is None:
            invoice_keywords = get_config(
                "input.invoice_keywords", self.DEFAULT_INVOICE_KEYWORDS
            )
        self.declaration_keywords = _keyword_tuple(declaration_keywords or ())
        self.invoice_keywords = _keyword_tuple(invoice_keywords or ())
        self.hidden_prefix = hidden_prefix if hidden_prefix is not None else \
            get_config("input.hidden_prefix", ".")
        
        logger.debug(
            f"DirectoryScanner initialized (declaration={self.declaration_keywords}, "
            f"invoice={self.invoice_keywords})"
        )
    
    def _scan(self, directory: Path) -> List[os.DirEntry]:
        """
        List a directory, mapping OS errors to scan errors.
        
        Raises:
            NotFoundError: If the directory does not exist.
            ScanError: If the path is not a directory or cannot be listed.
        """
        try:
            with os.scandir(directory) as entries:
                return list(entries)
        except FileNotFoundError as e:
            raise NotFoundError(str(directory)) from e
        except NotADirectoryError as e:
            raise ScanError(
                f"Not a directory: {directory}", {"path": str(directory)}
            ) from e
        except OSError as e:
            raise ScanError(
                f"Cannot list directory: {directory}",
                {"path": str(directory), "reason": str(e)}
            ) from e
    
    def list_subfolders(self, root: Union[str, Path]) -> List[Path]:
        """
        List the immediate subdirectories of a root directory.
        
        Args:
            root: Directory holding one folder per shipment.
            
        Returns:
            Subdirectory paths in enumeration order; empty when there
            are none.
            
        Raises:
            NotFoundError: If root does not exist.
            ScanError: If root is not a directory or cannot be listed.
        """
        root = Path(root)
        folders = [Path(entry.path) for entry in self._scan(root) if entry.is_dir()]
        logger.debug(f"Found {len(folders)} folders in {root}")
        return folders
    
    def list_files(self, folder: Union[str, Path]) -> List[DocumentFile]:
        """
        List the regular, non-hidden files of a shipment folder.
        
        Args:
            folder: Shipment folder.
            
        Returns:
            Candidate files in enumeration order.
            
        Raises:
            NotFoundError: If the folder vanished.
            ScanError: If the folder cannot be listed.
        """
        folder = Path(folder)
        files = []
        for entry in self._scan(folder):
            if self.hidden_prefix and entry.name.startswith(self.hidden_prefix):
                continue
            if not entry.is_file():
                continue
            files.append(DocumentFile(name=entry.name, path=Path(entry.path)))
        return files
    
    def is_declaration(self, filename: str) -> bool:
        return keyword_in_name(filename, self.declaration_keywords)
    
    def is_invoice(self, filename: str) -> bool:
        return keyword_in_name(filename, self.invoice_keywords)
    
    def classify_files(self, folder: Union[str, Path]) -> ClassifiedDocuments:
        """
        Pick the declaration and invoice file of a shipment folder.
        
        Each role takes the first matching file. Roles are classified
        independently, so a file whose name carries both kinds of
        keyword fills both roles; a warning is logged in that case.
        
        Args:
            folder: Shipment folder.
            
        Returns:
            ClassifiedDocuments; roles without a match are None.
            
        Raises:
            NotFoundError: If the folder vanished.
            ScanError: If the folder cannot be listed.
        """
        folder = Path(folder)
        files = self.list_files(folder)
        
        declaration = next((f for f in files if self.is_declaration(f.name)), None)
        invoice = next((f for f in files if self.is_invoice(f.name)), None)
        
        result = ClassifiedDocuments(
            folder=folder,
            declaration=declaration,
            invoice=invoice,
            file_count=len(files)
        )
        
        if result.is_double_match:
            logger.warning(
                f"'{declaration.name}' in {folder.name} matches both declaration "
                f"and invoice keywords; it is used for both roles"
            )
        
        return result
    
    def read_as_encoded_string(self, filepath: Union[str, Path]) -> str:
        """
        Read a file and return its content as base64 text.
        
        Args:
            filepath: File to read.
            
        Returns:
            Base64-encoded content (ASCII).
            
        Raises:
            DocumentReadError: If the file cannot be read.
        """
        filepath = Path(filepath)
        try:
            content = filepath.read_bytes()
        except OSError as e:
            raise DocumentReadError(str(filepath), str(e)) from e
        
        logger.debug(f"Read {filepath.name} ({len(content)} bytes)")
        return base64.b64encode(content).decode('ascii')
