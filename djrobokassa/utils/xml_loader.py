"""
XML document loading for Robokassa web service responses.
"""

import logging
from typing import Any, Dict, List, Optional
from xml.parsers.expat import ExpatError

import xmltodict

from ..exceptions import XmlParseError
from .http_client import HTTPClient

logger = logging.getLogger(__name__)


class XMLLoader:
    """
    Fetches a URL and parses the body into a dictionary document.
    
    Parser errors are collected in ``errors`` instead of being logged away,
    so callers can inspect them after a failed load.
    """
    
    def __init__(self, http_client: HTTPClient):
        self.http_client = http_client
        self.errors: List[str] = []
    
    def parse(self, content: str) -> Dict[str, Any]:
        """
        Parse an XML string.
        
        Raises:
            XmlParseError: If the document is empty or malformed
        """
        self.errors = []
        
        if not content or not content.strip():
            self.errors.append("Empty document")
            raise XmlParseError("Failed to parse XML: empty document", errors=self.errors)
        
        try:
            return xmltodict.parse(content)
        except ExpatError as e:
            self.errors.append(f"line {e.lineno}, column {e.offset}: {str(e)}")
            logger.error(f"Failed to parse XML: {str(e)}")
            raise XmlParseError(
                f"Failed to parse XML: {str(e)}",
                errors=self.errors,
                response_data=content
            )
    
    def load(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Fetch an XML document from the web service and parse it."""
        content = self.http_client.get_text(endpoint, params=params)
        return self.parse(content)
