"""
Utility modules for Robokassa gateway operations.
"""

from .http_client import HTTPClient
from .xml_loader import XMLLoader
from .validators import (
    validate_callback_type,
    validate_country,
    validate_hashing_algorithm,
    normalize_currency,
)
from .signature import (
    compute_digest,
    build_shop_data_suffix,
    serialize_receipt,
    signatures_match,
)

__all__ = [
    'HTTPClient',
    'XMLLoader',
    'validate_callback_type',
    'validate_country',
    'validate_hashing_algorithm',
    'normalize_currency',
    'compute_digest',
    'build_shop_data_suffix',
    'serialize_receipt',
    'signatures_match',
]
