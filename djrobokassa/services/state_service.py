"""
Operation state service for the Robokassa XML web service.
Queries the current state of an invoice through OpStateExt.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from ..constants import APIEndpoints, OperationStateCode
from ..utils.http_client import HTTPClient
from ..utils.xml_loader import XMLLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationState:
    """Summary of an OpStateExt response."""
    result_code: int
    result_description: str = ''
    state_code: Optional[int] = None
    request_date: Optional[str] = None
    state_date: Optional[str] = None
    inc_currency: Optional[str] = None
    inc_sum: Optional[str] = None
    out_currency: Optional[str] = None
    out_sum: Optional[str] = None
    info: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def is_success(self) -> bool:
        """Whether the web service accepted the request."""
        return self.result_code == 0
    
    @property
    def is_paid(self) -> bool:
        """Whether the invoice has been paid in full."""
        return self.state_code == OperationStateCode.COMPLETED
    
    @property
    def state(self) -> Optional[OperationStateCode]:
        """State code as enum member, None for unknown codes."""
        try:
            return OperationStateCode(self.state_code)
        except ValueError:
            return None


def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_operation_state(document: Dict[str, Any]) -> OperationState:
    """
    Build an OperationState from a parsed OpStateExt document.
    
    Args:
        document: Dictionary produced by XMLLoader
        
    Returns:
        OperationState instance
    """
    root = document.get('OperationStateResponse') or {}
    result = root.get('Result') or {}
    state = root.get('State') or {}
    info = root.get('Info') or {}
    
    result_code = _to_int(result.get('Code'))
    
    return OperationState(
        result_code=result_code if result_code is not None else -1,
        result_description=result.get('Description') or '',
        state_code=_to_int(state.get('Code')),
        request_date=state.get('RequestDate'),
        state_date=state.get('StateDate'),
        inc_currency=info.get('IncCurrLabel'),
        inc_sum=info.get('IncSum'),
        out_currency=info.get('OutCurrLabel'),
        out_sum=info.get('OutSum'),
        info=dict(info),
    )


class OperationStateService:
    """
    Service for invoice state queries.
    Takes a configured Robokassa client for credentials and signing.
    """
    
    def __init__(self, client, http_client: Optional[HTTPClient] = None):
        self.client = client
        self._owns_http_client = http_client is None
        self.http_client = http_client or HTTPClient(
            client.interface_url,
            timeout=client.timeout,
            max_retries=client.max_retries
        )
        self.loader = XMLLoader(self.http_client)
    
    @property
    def endpoint(self) -> str:
        return APIEndpoints.XML_SERVICE + APIEndpoints.OPERATION_STATE
    
    def get_params(self, invoice_id: int) -> Dict[str, Any]:
        """Query parameters for an OpStateExt request."""
        return {
            'MerchantLogin': self.client.shop_id,
            'InvoiceID': invoice_id,
            'Signature': self.client.build_state_signature(invoice_id),
        }
    
    def get_url(self, invoice_id: int) -> str:
        """
        Build the OpStateExt URL for an invoice.
        
        Raises:
            ConfigurationError: If shop ID, password #2 or algorithm is not set
        """
        params = self.get_params(invoice_id)
        query = urlencode(params)
        return f"{self.http_client.base_url}{self.endpoint}?{query}"
    
    def fetch(self, invoice_id: int) -> Dict[str, Any]:
        """
        Fetch and parse the state document of an invoice.
        
        Args:
            invoice_id: Invoice ID
            
        Returns:
            Parsed XML document as a dictionary
            
        Raises:
            ConfigurationError: If credentials are incomplete
            APIError: If the web service cannot be reached
            XmlParseError: If the response is malformed
        """
        logger.info(f"Querying operation state for invoice: {invoice_id}")
        
        params = self.get_params(invoice_id)
        document = self.loader.load(self.endpoint, params=params)
        
        logger.info(f"Operation state retrieved for invoice: {invoice_id}")
        return document
    
    @property
    def errors(self):
        """Parser errors collected by the last fetch."""
        return self.loader.errors
    
    def close(self):
        """Close the HTTP session if this service created it."""
        if self._owns_http_client:
            self.http_client.close()
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
