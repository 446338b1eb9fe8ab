"""
Validation utilities for Robokassa gateway operations.
"""

import hashlib
from typing import Optional

from ..constants import CallbackType, Country, HashAlgorithm, SHOP_DATA_PREFIX, SignatureCurrency
from ..exceptions import ConfigurationError, InvalidArgumentError


def _value(item) -> str:
    if isinstance(item, (HashAlgorithm, CallbackType, Country, SignatureCurrency)):
        return item.value
    return str(item)


def validate_callback_type(callback_type: str) -> CallbackType:
    """
    Validate callback signature type.
    
    Args:
        callback_type: "success" or "result", any case
        
    Returns:
        CallbackType member
        
    Raises:
        InvalidArgumentError: If type is not supported
    """
    allowed = [c.value for c in CallbackType]
    value = _value(callback_type).lower()
    
    if value not in allowed:
        raise InvalidArgumentError(f"Allowed types: {', '.join(allowed)}")
    
    return CallbackType(value)


def validate_country(country: str) -> Country:
    """
    Validate country code.
    
    Raises:
        InvalidArgumentError: If country has no Robokassa host
    """
    allowed = [c.value for c in Country]
    value = _value(country).lower()
    
    if value not in allowed:
        raise InvalidArgumentError(f"Allowed countries: {', '.join(allowed)}")
    
    return Country(value)


def validate_hashing_algorithm(algorithm: str) -> str:
    """
    Validate hashing algorithm name against hashlib.
    
    Returns:
        Lowercase algorithm name
        
    Raises:
        InvalidArgumentError: If hashlib does not provide the algorithm
    """
    if not algorithm:
        raise InvalidArgumentError("Hashing algorithm is required")
    
    value = _value(algorithm).lower()
    
    if value not in {name.lower() for name in hashlib.algorithms_available}:
        raise InvalidArgumentError(f"Unsupported hashing algorithm: {value}")
    
    return value


def normalize_currency(currency: Optional[str]) -> Optional[str]:
    """
    Normalize currency for the payment signature.
    
    Returns:
        Uppercased code when it takes part in the signature, None otherwise.
        Unsupported codes are dropped without an error.
    """
    if not currency:
        return None
    
    value = _value(currency).upper()
    if value not in [c.value for c in SignatureCurrency]:
        return None
    
    return value


def require(value, name: str):
    """
    Ensure a configuration value is set.
    
    Raises:
        ConfigurationError: If value is None or empty
    """
    if value is None or value == '':
        raise ConfigurationError(f"Robokassa {name} is not configured")
    return value


def validate_shop_data_keys(shop_data) -> None:
    """
    Ensure custom parameters carry the Shp_ prefix.
    
    Keys without it would collide with gateway parameters in the URL.
    
    Raises:
        InvalidArgumentError: If a key lacks the prefix
    """
    invalid = [
        key for key in (shop_data or {})
        if not str(key).lower().startswith(SHOP_DATA_PREFIX.lower())
    ]
    if invalid:
        raise InvalidArgumentError(
            f"Shop data keys must start with {SHOP_DATA_PREFIX}: {', '.join(map(str, invalid))}"
        )
