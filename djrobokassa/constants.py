"""
Constants and enums for Robokassa gateway operations.
"""

from enum import Enum


class HashAlgorithm(str, Enum):
    """Hashing algorithms selectable in the Robokassa merchant panel."""
    MD5 = "md5"
    RIPEMD160 = "ripemd160"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


class CallbackType(str, Enum):
    """Callback kinds that carry a signature."""
    RESULT = "result"
    SUCCESS = "success"


class Country(str, Enum):
    """Countries with their own Robokassa interface host."""
    KZ = "kz"
    RU = "ru"


class SignatureCurrency(str, Enum):
    """Currencies that take part in the payment signature."""
    USD = "USD"
    EUR = "EUR"
    KZT = "KZT"


class OperationStateCode(int, Enum):
    """Operation states reported by the OpStateExt web service."""
    INITIATED = 5
    CANCELLED = 10
    HOLD = 20
    RECEIVED = 50
    RETURNED = 60
    SUSPENDED = 80
    COMPLETED = 100


# Interface paths
class APIEndpoints:
    """Robokassa interface paths."""
    PAYMENT = "/Merchant/Index.aspx"
    XML_SERVICE = "/Merchant/WebService/Service.asmx"
    OPERATION_STATE = "/OpStateExt"


# Signature settings
DELIMITER = ":"
SHOP_DATA_MAX_LENGTH = 2048
SHOP_DATA_PREFIX = "Shp_"

# Interface host
INTERFACE_HOST = "https://auth.robokassa"
DEFAULT_COUNTRY = Country.RU

# Default settings
DEFAULT_HASHING_ALGORITHM = HashAlgorithm.MD5
DEFAULT_TIMEOUT = 30  # seconds
MAX_RETRIES = 1
