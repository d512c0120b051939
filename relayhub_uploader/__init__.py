"""
Relayhub Uploader - Source Package.

This package contains the modules of the shipment document uploader,
which submits customs declaration and invoice pairs found in shipment
folders to the Relayhub job-order API.

Modules:
    - scanner: shipment folder discovery and document classification
    - payload: sequential IDs, additional data template, submission objects
    - client: HTTP submission to the job-order endpoint
    - pipeline: orchestration and per-folder outcomes
    - output_handler: Excel run reports
    - utils: logging, exceptions and helpers

Architecture:
    Scanner → Payload Builder → Submission Client
                                       ↓
                                  Run Summary → Report
"""

__version__ = "1.0.0"

__all__ = [
    'scanner',
    'payload',
    'client',
    'pipeline',
    'output_handler',
    'utils'
]
