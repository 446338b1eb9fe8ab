"""
Signature (control hash) utilities for Robokassa requests and callbacks.

Robokassa signs a request by joining its fields with ``:`` and hashing the
resulting UTF-8 string with the algorithm chosen in the merchant panel.
Field order, the delimiter, the shop data length cap and the digest casing
are all checked by the gateway, so they must not change.
"""

import hashlib
import hmac
import json
from typing import Any, Dict, Optional
from urllib.parse import quote_plus

from ..constants import DELIMITER, SHOP_DATA_MAX_LENGTH


def compute_digest(algorithm: str, data: str) -> str:
    """
    Hash a signature base string.
    
    Args:
        algorithm: hashlib algorithm name
        data: Signature base string
        
    Returns:
        Lowercase hex digest
    """
    return hashlib.new(algorithm, data.encode('utf-8')).hexdigest()


def join_fields(*fields: Any) -> str:
    """Join signature fields with the gateway delimiter."""
    return DELIMITER.join(str(field) for field in fields)


def build_shop_data_suffix(shop_data: Optional[Dict[str, Any]]) -> str:
    """
    Build the shop data part of a signature base.
    
    Each pair becomes ``:key=value`` in iteration order and the whole
    suffix is cut to SHOP_DATA_MAX_LENGTH characters.
    
    Args:
        shop_data: Custom merchant parameters
        
    Returns:
        Suffix string, empty when there is no shop data
    """
    if not shop_data:
        return ""
    
    data = "".join(
        f"{DELIMITER}{key}={value}" for key, value in shop_data.items()
    )
    return data[:SHOP_DATA_MAX_LENGTH]


def serialize_receipt(receipt: Dict[str, Any]) -> str:
    """
    Serialize fiscal receipt for signing and for the Receipt parameter.
    
    Non-ASCII characters are kept as is in the JSON and only then
    percent-encoded.
    """
    encoded = json.dumps(receipt, ensure_ascii=False, separators=(',', ':'))
    return quote_plus(encoded)


def mask_secret(base: str, *secrets: str) -> str:
    """Replace secrets in a signature base so it can be logged."""
    for secret in secrets:
        if secret:
            base = base.replace(secret, '***')
    return base


def signatures_match(expected: str, received: Optional[str]) -> bool:
    """
    Compare two hex signatures.
    
    Comparison is case-insensitive and constant-time. Received values
    may contain any characters, so both sides are compared as bytes.
    """
    if not received:
        return False
    return hmac.compare_digest(
        expected.lower().encode('utf-8'),
        str(received).strip().lower().encode('utf-8')
    )
