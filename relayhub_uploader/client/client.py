"""
Submission Client Module.

Posts job-order submissions to the Relayhub init endpoint. Failures are
raised as SubmissionError carrying the reference number and whatever the
server (or the transport) reported. There is no retry.

Usage:
    from relayhub_uploader.client import SubmissionClient
    
    with SubmissionClient(token="...") as client:
        client.submit(submission)
"""

from typing import Any, Dict, Optional

import requests

from config import get_config
from relayhub_uploader.utils.logger import get_logger
from relayhub_uploader.utils.helpers import to_pretty_json
from relayhub_uploader.utils.exceptions import ConfigurationError, SubmissionError
from relayhub_uploader.payload.submission import Submission

logger = get_logger(__name__)


DEFAULT_BASE_URL = "https://dev-relayhub.singlewindow.io"
DEFAULT_INIT_PATH = "/api/v1-0/job-orders/init"


class SubmissionClient:
    """
    Client for the Relayhub job-order endpoint.
    
    Attributes:
        base_url: Scheme and host of the API
        init_path: Path of the job-order init endpoint
        timeout: Request timeout in seconds, or None to wait indefinitely
        session: requests.Session used for all calls
        
    Example:
        >>> client = SubmissionClient(token="secret")
        >>> client.endpoint
        'https://dev-relayhub.singlewindow.io/api/v1-0/job-orders/init'
    """
    
    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        init_path: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ) -> None:
        """
        Initialize the client.
        
        Args:
            token: Bearer token. Defaults to api.token (RELAYHUB_TOKEN).
            base_url: Override config for the API base URL.
            init_path: Override config for the endpoint path.
            timeout: Override config for the request timeout.
            session: Optional pre-built session.
            
        Raises:
            ConfigurationError: If no token is available.
        """
        token = token or get_config("api.token")
        if not token:
            raise ConfigurationError(
                "api.token",
                "no bearer token; set RELAYHUB_TOKEN in the environment or .env"
            )
        
        self.base_url = (base_url or get_config("api.base_url", DEFAULT_BASE_URL)).rstrip('/')
        self.init_path = init_path or get_config("api.init_path", DEFAULT_INIT_PATH)
        self.timeout = timeout if timeout is not None else get_config("api.timeout")
        
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        })
        
        logger.info(f"SubmissionClient initialized (endpoint: {self.endpoint})")
    
    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.init_path.lstrip('/')}"
    
    @staticmethod
    def _diagnostic(response: requests.Response) -> Any:
        """Parsed error body when it is JSON, the raw text, or the status line."""
        try:
            return response.json()
        except ValueError:
            pass
        if response.text:
            return response.text
        return f"HTTP {response.status_code} {response.reason or ''}".strip()
    
    def submit(self, submission: Submission) -> Optional[Dict[str, Any]]:
        """
        Send one submission.
        
        Args:
            submission: Job-order submission to send.
            
        Returns:
            Acknowledgment body, or None when it is not JSON.
            
        Raises:
            SubmissionError: On non-2xx responses, network errors and
                timeouts.
        """
        reference_no = submission.reference_no
        logger.info(f"Start reference number: {reference_no}")
        
        try:
            response = self.session.post(
                self.endpoint,
                json=submission.to_dict(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Error sending request to Relayhub for {reference_no}: {e}")
            raise SubmissionError(reference_no, diagnostic=str(e)) from e
        
        if not 200 <= response.status_code < 300:
            diagnostic = self._diagnostic(response)
            logger.error(
                f"Error sending request to Relayhub for {reference_no} "
                f"(HTTP {response.status_code}):\n{to_pretty_json(diagnostic)}"
            )
            raise SubmissionError(
                reference_no,
                diagnostic=diagnostic,
                status_code=response.status_code
            )
        
        logger.info(f"Request sent successfully for {reference_no}.")
        
        try:
            return response.json()
        except ValueError:
            return None
    
    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
    
    def __enter__(self) -> 'SubmissionClient':
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
