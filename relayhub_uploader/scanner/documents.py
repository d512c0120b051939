"""
Document Data Classes.

Results of scanning one shipment folder.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DocumentFile:
    """
    A regular, non-hidden file inside a shipment folder.
    
    Attributes:
        name: Filename
        path: Full path to the file
    """
    name: str
    path: Path
    
    def __str__(self) -> str:
        return self.name


@dataclass
class ClassifiedDocuments:
    """
    Declaration and invoice picked from one shipment folder.
    
    Either role may be absent. The same file can fill both roles when
    its name contains keywords of both kinds.
    
    Attributes:
        folder: Shipment folder that was scanned
        declaration: First file matching a declaration keyword
        invoice: First file matching an invoice keyword
        file_count: Number of candidate files seen in the folder
    """
    folder: Path
    declaration: Optional[DocumentFile] = None
    invoice: Optional[DocumentFile] = None
    file_count: int = 0
    
    @property
    def has_documents(self) -> bool:
        """True when at least one role is filled."""
        return self.declaration is not None or self.invoice is not None
    
    @property
    def is_double_match(self) -> bool:
        """True when one file was picked as both declaration and invoice."""
        return (
            self.declaration is not None
            and self.invoice is not None
            and self.declaration.path == self.invoice.path
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'folder': str(self.folder),
            'declaration': self.declaration.name if self.declaration else None,
            'invoice': self.invoice.name if self.invoice else None,
            'file_count': self.file_count,
        }
