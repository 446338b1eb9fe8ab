"""
Configuration management for the Robokassa gateway client.
"""

from django.conf import settings

from .constants import DEFAULT_COUNTRY, DEFAULT_HASHING_ALGORITHM, DEFAULT_TIMEOUT, MAX_RETRIES
from .exceptions import ConfigurationError


class RobokassaConfig:
    """
    Configuration manager for Robokassa settings.
    Reads values from Django settings on access, so the object can be
    created before settings are configured.
    """
    
    def _required(self, name):
        value = getattr(settings, name, '')
        if not value:
            raise ConfigurationError(
                f"{name} is not configured in Django settings. "
                "Please add it to your settings.py or .env file."
            )
        return value
    
    @property
    def shop_id(self):
        """Get merchant login (shop ID)."""
        return self._required('ROBOKASSA_SHOP_ID')
    
    @property
    def password1(self):
        """Get shop password #1."""
        return self._required('ROBOKASSA_PASSWORD1')
    
    @property
    def password2(self):
        """Get shop password #2."""
        return self._required('ROBOKASSA_PASSWORD2')
    
    @property
    def hashing_algorithm(self):
        """Get hashing algorithm name."""
        return getattr(settings, 'ROBOKASSA_HASHING_ALGORITHM', DEFAULT_HASHING_ALGORITHM.value)
    
    @property
    def country(self):
        """Get country code selecting the interface host."""
        return getattr(settings, 'ROBOKASSA_COUNTRY', DEFAULT_COUNTRY.value)
    
    @property
    def is_test(self):
        """Check if payments are sent in test mode."""
        return bool(getattr(settings, 'ROBOKASSA_IS_TEST', False))
    
    @property
    def timeout(self):
        """Get web service request timeout in seconds."""
        return getattr(settings, 'ROBOKASSA_TIMEOUT', DEFAULT_TIMEOUT)
    
    @property
    def max_retries(self):
        """Get number of attempts for web service requests."""
        return getattr(settings, 'ROBOKASSA_MAX_RETRIES', MAX_RETRIES)
    
    @property
    def success_redirect_url(self):
        """Get URL the customer is sent to after a verified Success callback."""
        return getattr(settings, 'ROBOKASSA_SUCCESS_REDIRECT_URL', '')
    
    @property
    def fail_redirect_url(self):
        """Get URL the customer is sent to after a Fail callback."""
        return getattr(settings, 'ROBOKASSA_FAIL_REDIRECT_URL', '')


# Singleton instance
config = RobokassaConfig()
