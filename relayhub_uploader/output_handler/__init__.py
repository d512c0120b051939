"""
Output Handler Module for the Relayhub Uploader.

This module provides Excel run reports listing the outcome of every
shipment folder of a run.

Author: Relayhub Integration Team
"""

from .report_exporter import ReportExporter

__all__ = ['ReportExporter']
