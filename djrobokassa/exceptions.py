"""
Custom exceptions for Robokassa gateway operations.
"""


class RobokassaException(Exception):
    """Base exception for all Robokassa-related errors."""
    
    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class ConfigurationError(RobokassaException):
    """Raised when credentials or the hashing algorithm are not configured."""
    pass


class InvalidArgumentError(RobokassaException, ValueError):
    """Raised when an argument is outside the values the gateway accepts."""
    pass


class APIError(RobokassaException):
    """Raised when the Robokassa web service cannot be reached or returns an error."""
    pass


class XmlParseError(RobokassaException):
    """Raised when a web service response is not a well-formed XML document."""
    
    def __init__(self, message, errors=None, response_data=None):
        self.errors = list(errors or [])
        super().__init__(message, response_data=response_data)


class SignatureMismatchError(RobokassaException):
    """Raised when a callback signature does not match the expected value."""
    pass
