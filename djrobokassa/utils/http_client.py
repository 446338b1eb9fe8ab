"""
HTTP client for Robokassa web service communication.
"""

import requests
import logging
from typing import Dict, Any, Optional
from djrobokassa.exceptions import APIError
from djrobokassa.constants import DEFAULT_TIMEOUT, MAX_RETRIES

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    HTTP client wrapper for Robokassa web service requests.
    Handles request/response, error handling, retries, and logging.
    """
    
    def __init__(self, base_url: str, timeout: int = DEFAULT_TIMEOUT, max_retries: int = MAX_RETRIES):
        """
        Initialize HTTP client.
        
        Args:
            base_url: Base URL for requests
            timeout: Request timeout in seconds
            max_retries: Attempts per request on connection errors
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = requests.Session()
    
    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"
    
    def _sanitize_params(self, params: Optional[Dict]) -> Dict:
        """Remove signatures from query parameters for logging."""
        sanitized = dict(params or {})
        for key in ('Signature', 'SignatureValue'):
            if key in sanitized:
                sanitized[key] = '***'
        return sanitized
    
    def _handle_response(self, response: requests.Response) -> str:
        """
        Check response status and return its body.
        
        Raises:
            APIError: If response indicates an error
        """
        logger.info(f"Robokassa Response: {response.status_code}")
        logger.debug(f"Response: {response.text}")
        
        if response.status_code >= 400:
            raise APIError(
                f"Request failed with status {response.status_code}",
                error_code=response.status_code,
                response_data=response.text
            )
        
        return response.text
    
    def get_text(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Make GET request and return the raw response body.
        
        Args:
            endpoint: Path relative to the base URL
            params: Query parameters
            headers: Request headers
            
        Returns:
            Response body as text
        """
        url = self._get_full_url(endpoint)
        headers = headers or {}
        
        logger.info(f"Robokassa Request: GET {url}")
        logger.debug(f"Params: {self._sanitize_params(params)}")
        
        for attempt in range(self.max_retries):
            try:
                response = self.session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=self.timeout
                )
                return self._handle_response(response)
            
            except (requests.ConnectionError, requests.Timeout) as e:
                if attempt == self.max_retries - 1:
                    raise APIError(f"Connection failed after {self.max_retries} attempts: {str(e)}")
                logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {str(e)}")
                continue
    
    def close(self):
        """Close the session."""
        self.session.close()
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
