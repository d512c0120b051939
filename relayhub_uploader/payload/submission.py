"""
Submission Data Classes.

Wire objects of the job-order API. Python attributes are snake_case;
to_dict() produces the camelCase JSON body the endpoint expects.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class DocumentPayload:
    """
    One base64-encoded document inside a submission.
    
    Attributes:
        base64_string: File content as base64 text
        file_type: Document kind understood by the API
            ('invoice' or 'tr_export_declaration')
        filename: Original filename
        type: Encoding marker, always 'base64'
    """
    base64_string: str
    file_type: str
    filename: Optional[str]
    type: str = "base64"
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'base64String': self.base64_string,
            'fileType': self.file_type,
            'filename': self.filename,
        }
    
    def __repr__(self) -> str:
        # Keep base64 content out of logs
        return (
            f"DocumentPayload(file_type='{self.file_type}', "
            f"filename='{self.filename}', "
            f"size={len(self.base64_string)})"
        )


@dataclass
class Submission:
    """
    A complete job-order submission for one shipment folder.
    
    Attributes:
        reference_no: '{folderName}_{allocatedId}'
        object_id: The allocated sequential ID
        dispatch_country: Country of dispatch (e.g. 'TR')
        destination_country: Country of destination (e.g. 'DE')
        regime_type: Customs regime (e.g. 'EXPORT')
        output_application: Target application routing key
        documents: Included documents, invoice first
        additional_data: Suffixed copy of the additional data template
        
    Example:
        >>> submission.to_dict()["referenceNo"]
        'SHIPMENT-17_0080'
    """
    reference_no: str
    object_id: str
    dispatch_country: str
    destination_country: str
    regime_type: str
    output_application: str
    documents: List[DocumentPayload] = field(default_factory=list)
    additional_data: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def document_types(self) -> List[str]:
        return [doc.file_type for doc in self.documents]
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON body of the job-order request.
        
        Returns:
            Dictionary with camelCase keys.
        """
        return {
            'referenceNo': self.reference_no,
            'dispatchCountry': self.dispatch_country,
            'destinationCountry': self.destination_country,
            'regimeType': self.regime_type,
            'outputApplication': self.output_application,
            'documents': [doc.to_dict() for doc in self.documents],
            'additionalData': self.additional_data,
        }
