"""
Payload Builder Module.

Turns a classified document pair of one shipment folder into a
Submission. Every call consumes exactly one ID from the allocator,
whether or not any document ends up in the payload.

Author: Relayhub Integration Team
"""

from typing import Optional

from config import get_config
from relayhub_uploader.utils.logger import get_logger
from .id_allocator import SequentialIdAllocator
from .template import AdditionalDataTemplate
from .submission import DocumentPayload, Submission

logger = get_logger(__name__)


class PayloadBuilder:
    """
    Builds job-order submissions.
    
    Document inclusion is controlled by two toggles. A document is only
    included when its content is non-empty and its toggle is enabled.
    
    Attributes:
        allocator: Shared SequentialIdAllocator
        template: AdditionalDataTemplate applied to every submission
        invoice_enabled: Whether invoice documents are sent
        declaration_enabled: Whether declaration documents are sent
        
    Example:
        >>> builder = PayloadBuilder(SequentialIdAllocator(80), template)
        >>> submission = builder.build("SHIPMENT-17", declaration_base64="JVBE...",
        ...                            declaration_filename="beyanname.pdf")
        >>> submission.reference_no
        'SHIPMENT-17_0080'
    """
    
    def __init__(
        self,
        allocator: SequentialIdAllocator,
        template: AdditionalDataTemplate,
        invoice_enabled: Optional[bool] = None,
        declaration_enabled: Optional[bool] = None
    ) -> None:
        """
        Initialize the payload builder.
        
        Args:
            allocator: ID source, shared across the run.
            template: Additional data template.
            invoice_enabled: Override config for invoice documents.
            declaration_enabled: Override config for declaration documents.
        """
        self.allocator = allocator
        self.template = template
        
        self.invoice_enabled = invoice_enabled if invoice_enabled is not None else \
            bool(get_config("documents.invoice.enabled", False))
        self.declaration_enabled = declaration_enabled if declaration_enabled is not None else \
            bool(get_config("documents.declaration.enabled", True))
        
        self.invoice_file_type = get_config("documents.invoice.file_type", "invoice")
        self.declaration_file_type = get_config(
            "documents.declaration.file_type", "tr_export_declaration"
        )
        
        self.dispatch_country = get_config("submission.dispatch_country", "TR")
        self.destination_country = get_config("submission.destination_country", "DE")
        self.regime_type = get_config("submission.regime_type", "EXPORT")
        self.output_application = get_config(
            "submission.output_application", "dakosy/sftp/vera"
        )
        
        logger.info(
            f"PayloadBuilder initialized "
            f"(invoice={self.invoice_enabled}, declaration={self.declaration_enabled})"
        )
    
    def build(
        self,
        reference_no: str,
        declaration_base64: Optional[str] = None,
        declaration_filename: Optional[str] = None,
        invoice_base64: Optional[str] = None,
        invoice_filename: Optional[str] = None
    ) -> Submission:
        """
        Build the submission for one shipment folder.
        
        Args:
            reference_no: Base reference number (the folder name).
            declaration_base64: Declaration content, if found.
            declaration_filename: Declaration filename, if found.
            invoice_base64: Invoice content, if found.
            invoice_filename: Invoice filename, if found.
            
        Returns:
            Submission with an '{reference_no}_{id}' reference number.
        """
        object_id = self.allocator.next()
        additional_data = self.template.with_object_suffix(object_id)
        
        documents = []
        if invoice_base64 and self.invoice_enabled:
            documents.append(DocumentPayload(
                base64_string=invoice_base64,
                file_type=self.invoice_file_type,
                filename=invoice_filename
            ))
        if declaration_base64 and self.declaration_enabled:
            documents.append(DocumentPayload(
                base64_string=declaration_base64,
                file_type=self.declaration_file_type,
                filename=declaration_filename
            ))
        
        submission = Submission(
            reference_no=f"{reference_no}_{object_id}",
            object_id=object_id,
            dispatch_country=self.dispatch_country,
            destination_country=self.destination_country,
            regime_type=self.regime_type,
            output_application=self.output_application,
            documents=documents,
            additional_data=additional_data
        )
        
        if not documents:
            logger.warning(
                f"Submission {submission.reference_no} carries no documents "
                f"(invoice={self.invoice_enabled}, declaration={self.declaration_enabled})"
            )
        else:
            logger.debug(
                f"Built {submission.reference_no} with documents: "
                f"{submission.document_types}"
            )
        
        return submission
