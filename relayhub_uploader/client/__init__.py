"""
Client Module for the Relayhub Uploader.

This module provides the HTTP client that posts job-order submissions
to the Relayhub API with bearer-token authorization.
"""

from .client import SubmissionClient

__all__ = ['SubmissionClient']
