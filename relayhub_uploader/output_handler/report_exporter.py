"""
Run Report Exporter Module.

Writes the folder outcomes of one or more runs to an Excel workbook
using openpyxl, so operators can see which shipments were submitted,
skipped or failed without reading the logs.

Sheets:
    - Submissions: one row per folder outcome
    - Summary: counts per root directory

Author: Relayhub Integration Team
"""

from pathlib import Path
from typing import List, Optional, Union

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from config import get_config
from relayhub_uploader.utils.logger import get_logger
from relayhub_uploader.utils.helpers import ensure_directory, generate_timestamp
from relayhub_uploader.utils.exceptions import ReportExportError
from relayhub_uploader.pipeline.outcome import OutcomeStatus, RunSummary

logger = get_logger(__name__)


class ReportExporter:
    """
    Exports run summaries to Excel format.
    
    Attributes:
        output_dir: Directory for report files
        sheet_name: Title of the outcome sheet
        
    Example:
        >>> exporter = ReportExporter()
        >>> filepath = exporter.export(summary, "run.xlsx")
    """
    
    COLUMNS = [
        ('Root', 'root'),
        ('Folder', 'folder'),
        ('Reference No', 'reference_no'),
        ('Status', 'status'),
        ('Reason', 'reason'),
        ('Declaration File', 'declaration_file'),
        ('Invoice File', 'invoice_file'),
        ('Documents Sent', 'documents'),
        ('Error', 'error'),
    ]
    
    SUMMARY_COLUMNS = [
        'Root', 'Started', 'Finished', 'Folders',
        'Submitted', 'Built', 'Skipped', 'Failed', 'Root Error'
    ]
    
    STATUS_FILLS = {
        OutcomeStatus.SUBMITTED: "C6EFCE",
        OutcomeStatus.BUILT: "DDEBF7",
        OutcomeStatus.SKIPPED: "FFEB9C",
        OutcomeStatus.FAILED: "FFC7CE",
    }
    
    def __init__(self, output_dir: Optional[str] = None) -> None:
        """
        Initialize the exporter with configuration.
        
        Args:
            output_dir: Override config for the report directory.
        """
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
        self.sheet_name = get_config("output.report.sheet_name", "Submissions")
        self.filename_pattern = get_config(
            "output.report.filename_pattern", "relayhub_run_{timestamp}.xlsx"
        )
        logger.debug(f"ReportExporter initialized (output_dir: {self.output_dir})")
    
    @staticmethod
    def _cell_value(value):
        """Cell-safe value; control characters are not allowed in worksheets."""
        if value is None:
            return ''
        if isinstance(value, str):
            return ILLEGAL_CHARACTERS_RE.sub('', value)
        return value
    
    def get_default_filename(self) -> str:
        return self.filename_pattern.format(timestamp=generate_timestamp())
    
    def export(
        self,
        summaries: Union[RunSummary, List[RunSummary]],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Export run summaries to an Excel file.
        
        Args:
            summaries: Single summary or list of summaries.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.
            
        Returns:
            Path to the created Excel file.
            
        Raises:
            ReportExportError: If there is nothing to export or writing fails.
        """
        if isinstance(summaries, RunSummary):
            summaries = [summaries]
        
        out_dir = Path(output_dir) if output_dir else self.output_dir
        filepath = out_dir / (filename or self.get_default_filename())
        
        if not summaries:
            raise ReportExportError(str(filepath), "No run summaries to export")
        
        try:
            ensure_directory(out_dir)
            workbook = openpyxl.Workbook()
            self._create_outcome_sheet(workbook, summaries)
            self._create_summary_sheet(workbook, summaries)
            workbook.save(filepath)
        except (OSError, IllegalCharacterError) as e:
            logger.error(f"Run report export failed: {e}")
            raise ReportExportError(str(filepath), str(e)) from e
        
        rows = sum(s.total_folders for s in summaries)
        logger.info(f"Run report saved: {filepath} ({rows} folders)")
        return str(filepath)
    
    def _create_outcome_sheet(self, workbook, summaries: List[RunSummary]) -> None:
        """
        Create the sheet with one row per folder outcome.
        
        Args:
            workbook: openpyxl Workbook instance.
            summaries: Run summaries to list.
        """
        sheet = workbook.active
        sheet.title = self.sheet_name
        
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        
        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border
        
        row_num = 2
        for summary in summaries:
            for outcome in summary.outcomes:
                values = outcome.to_dict()
                values['root'] = str(summary.root)
                values['folder'] = outcome.folder_name
                values['documents'] = ", ".join(outcome.documents)
                
                status_color = self.STATUS_FILLS.get(outcome.status)
                for col, (_, key) in enumerate(self.COLUMNS, 1):
                    cell = sheet.cell(row=row_num, column=col, value=self._cell_value(values.get(key)))
                    cell.border = thin_border
                    if key == 'status' and status_color:
                        cell.fill = PatternFill(
                            start_color=status_color, end_color=status_color, fill_type="solid"
                        )
                row_num += 1
        
        # Adjust column widths
        for col, (header_name, _) in enumerate(self.COLUMNS, 1):
            column_letter = get_column_letter(col)
            max_length = len(header_name)
            for row in range(2, row_num):
                cell_value = sheet.cell(row=row, column=col).value
                if cell_value:
                    max_length = max(max_length, len(str(cell_value)))
            sheet.column_dimensions[column_letter].width = min(max_length + 2, 60)
        
        sheet.freeze_panes = 'A2'
    
    def _create_summary_sheet(self, workbook, summaries: List[RunSummary]) -> None:
        """Create the sheet with counts per root directory."""
        sheet = workbook.create_sheet(title="Summary")
        
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="548235", end_color="548235", fill_type="solid")
        
        for col, header_name in enumerate(self.SUMMARY_COLUMNS, 1):
            cell = sheet.cell(row=1, column=col, value=header_name)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")
        
        for row_num, summary in enumerate(summaries, 2):
            values = [
                str(summary.root),
                summary.started_at or '',
                summary.finished_at or '',
                summary.total_folders,
                summary.submitted,
                summary.built,
                summary.skipped,
                summary.failed,
                summary.root_error or '',
            ]
            for col, value in enumerate(values, 1):
                sheet.cell(row=row_num, column=col, value=self._cell_value(value))
        
        for col in range(1, len(self.SUMMARY_COLUMNS) + 1):
            sheet.column_dimensions[get_column_letter(col)].width = 20
