"""
Robokassa gateway client.

Holds merchant credentials and builds the control signatures used by the
checkout page, the Success and Result callbacks and the XML web service.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from .config import config
from .constants import (
    APIEndpoints, CallbackType, DEFAULT_COUNTRY, DEFAULT_TIMEOUT,
    INTERFACE_HOST, MAX_RETRIES
)
from .exceptions import SignatureMismatchError
from .services.state_service import OperationStateService
from .utils.signature import (
    build_shop_data_suffix, compute_digest, join_fields,
    mask_secret, serialize_receipt, signatures_match
)
from .utils.validators import (
    normalize_currency, require, validate_callback_type,
    validate_country, validate_hashing_algorithm, validate_shop_data_keys
)

logger = logging.getLogger(__name__)


class Robokassa:
    """
    Robokassa merchant interface.

    Configure it with the fluent setters, then sign requests::

        robokassa = (
            Robokassa()
            .set_shop_id('demo')
            .set_password1('secret1')
            .set_password2('secret2')
            .set_hashing_algorithm('md5')
        )
        signature = robokassa.build_payment_signature('100.00', 42)
    """

    def __init__(self):
        self._shop_id: Optional[str] = None
        self._password1: Optional[str] = None
        self._password2: Optional[str] = None
        self._hashing_algorithm: Optional[str] = None
        self.interface_url = f"{INTERFACE_HOST}.{DEFAULT_COUNTRY.value}"
        self.is_test = False
        self.timeout = DEFAULT_TIMEOUT
        self.max_retries = MAX_RETRIES

    @classmethod
    def from_settings(cls) -> 'Robokassa':
        """
        Build a client from Django settings.

        Raises:
            ConfigurationError: If a required ROBOKASSA_* setting is missing
        """
        client = (
            cls()
            .set_shop_id(config.shop_id)
            .set_password1(config.password1)
            .set_password2(config.password2)
            .set_hashing_algorithm(config.hashing_algorithm)
            .set_country(config.country)
            .set_test_mode(config.is_test)
        )
        client.timeout = config.timeout
        client.max_retries = config.max_retries
        return client

    # Configuration

    def set_shop_id(self, shop_id: str) -> 'Robokassa':
        """Set merchant login (shop ID)."""
        self._shop_id = shop_id
        return self

    def set_password1(self, password: str) -> 'Robokassa':
        """Set shop password #1, used for checkout and Success signatures."""
        self._password1 = password
        return self

    def set_password2(self, password: str) -> 'Robokassa':
        """Set shop password #2, used for Result and web service signatures."""
        self._password2 = password
        return self

    def set_hashing_algorithm(self, algorithm: str) -> 'Robokassa':
        """
        Set hashing algorithm.

        Raises:
            InvalidArgumentError: If hashlib does not provide the algorithm
        """
        self._hashing_algorithm = validate_hashing_algorithm(algorithm)
        return self

    def set_country(self, country: str) -> 'Robokassa':
        """
        Select the interface host by country code ("kz" or "ru", any case).

        Raises:
            InvalidArgumentError: If the country is not supported
        """
        country = validate_country(country)
        self.interface_url = f"{INTERFACE_HOST}.{country.value}"
        return self

    def set_test_mode(self, is_test: bool = True) -> 'Robokassa':
        """Mark checkout URLs as test payments."""
        self.is_test = bool(is_test)
        return self

    @property
    def shop_id(self) -> str:
        return require(self._shop_id, 'shop ID')

    @property
    def password1(self) -> str:
        return require(self._password1, 'password #1')

    @property
    def password2(self) -> str:
        return require(self._password2, 'password #2')

    @property
    def hashing_algorithm(self) -> str:
        return require(self._hashing_algorithm, 'hashing algorithm')

    # Signatures

    def _hash(self, base: str, password: str) -> str:
        logger.debug(f"Signature base: {mask_secret(base, password)}")
        return compute_digest(self.hashing_algorithm, base)

    def build_payment_signature(
        self,
        amount: str,
        invoice_id: int = 0,
        receipt: Optional[Dict[str, Any]] = None,
        shop_data: Optional[Dict[str, Any]] = None,
        currency: Optional[str] = None,
        user_ip: Optional[str] = None
    ) -> str:
        """
        Build the checkout signature (SignatureValue).

        Base string:
        MerchantLogin:OutSum:InvId[:OutSumCurrency][:UserIp][:Receipt]:Password#1[:Shp_key=value...]

        Args:
            amount: Amount with two decimal digits
            invoice_id: Invoice ID
            receipt: Fiscal receipt (products nomenclature)
            shop_data: Custom parameters, signed in iteration order
            currency: Payment currency, only USD, EUR and KZT are signed
            user_ip: Customer IP address

        Returns:
            Lowercase hex digest

        Raises:
            ConfigurationError: If shop ID, password #1 or algorithm is not set
        """
        fields = [self.shop_id, amount, invoice_id]

        currency = normalize_currency(currency)
        if currency:
            fields.append(currency)

        if user_ip:
            fields.append(user_ip)

        if receipt:
            fields.append(serialize_receipt(receipt))

        password = self.password1
        fields.append(password)

        base = join_fields(*fields) + build_shop_data_suffix(shop_data)
        return self._hash(base, password)

    def build_callback_signature(
        self,
        callback_type: str,
        amount: str,
        invoice_id: int,
        shop_data: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Build the signature of a Success or Result callback.

        Success callbacks are signed with password #1, Result callbacks
        with password #2.

        Returns:
            Uppercase hex digest

        Raises:
            InvalidArgumentError: If callback_type is not success or result
            ConfigurationError: If the password or algorithm is not set
        """
        callback_type = validate_callback_type(callback_type)

        if callback_type == CallbackType.SUCCESS:
            password = self.password1
        else:
            password = self.password2

        base = join_fields(amount, invoice_id, password) + build_shop_data_suffix(shop_data)
        return self._hash(base, password).upper()

    def build_state_signature(self, invoice_id: int) -> str:
        """
        Build the OpStateExt signature (MerchantLogin:InvoiceID:Password#2).

        Returns:
            Lowercase hex digest
        """
        password = self.password2
        return self._hash(join_fields(self.shop_id, invoice_id, password), password)

    def verify_callback(
        self,
        callback_type: str,
        amount: str,
        invoice_id: int,
        signature: str,
        shop_data: Optional[Dict[str, Any]] = None,
        raise_exception: bool = False
    ) -> bool:
        """
        Check the SignatureValue received with a callback.

        Raises:
            SignatureMismatchError: If signature is invalid and raise_exception is set
        """
        expected = self.build_callback_signature(callback_type, amount, invoice_id, shop_data)
        valid = signatures_match(expected, signature)

        if not valid:
            logger.warning(f"Invalid {callback_type} signature for invoice: {invoice_id}")
            if raise_exception:
                raise SignatureMismatchError(
                    f"Invalid {callback_type} signature for invoice {invoice_id}"
                )

        return valid

    # URLs and web service

    def build_payment_url(
        self,
        amount: str,
        invoice_id: int = 0,
        description: Optional[str] = None,
        receipt: Optional[Dict[str, Any]] = None,
        shop_data: Optional[Dict[str, Any]] = None,
        currency: Optional[str] = None,
        user_ip: Optional[str] = None,
        email: Optional[str] = None,
        culture: Optional[str] = None
    ) -> str:
        """
        Build the checkout page URL the customer is redirected to.

        Returns:
            Full payment URL with SignatureValue

        Raises:
            InvalidArgumentError: If a shop data key lacks the Shp_ prefix
        """
        validate_shop_data_keys(shop_data)

        signature = self.build_payment_signature(
            amount, invoice_id, receipt=receipt, shop_data=shop_data,
            currency=currency, user_ip=user_ip
        )

        params = {
            'MerchantLogin': self.shop_id,
            'OutSum': amount,
            'InvId': invoice_id,
        }
        if description:
            params['Description'] = description

        currency = normalize_currency(currency)
        if currency:
            params['OutSumCurrency'] = currency
        if user_ip:
            params['UserIp'] = user_ip
        if receipt:
            params['Receipt'] = serialize_receipt(receipt)
        if email:
            params['Email'] = email
        if culture:
            params['Culture'] = culture
        if self.is_test:
            params['IsTest'] = 1

        params['SignatureValue'] = signature

        if shop_data:
            params.update(shop_data)

        logger.info(f"Built payment URL for invoice: {invoice_id}")
        return f"{self.interface_url}{APIEndpoints.PAYMENT}?{urlencode(params)}"

    def get_operation_state_url(self, invoice_id: int) -> str:
        """Build the OpStateExt URL for an invoice without fetching it."""
        with OperationStateService(self) as service:
            return service.get_url(invoice_id)

    def fetch_operation_state(self, invoice_id: int) -> Dict[str, Any]:
        """
        Fetch the operation state document of an invoice.

        Returns:
            Parsed XML document as a dictionary

        Raises:
            ConfigurationError: If shop ID, password #2 or algorithm is not set
            APIError: If the web service cannot be reached
            XmlParseError: If the response is malformed
        """
        with OperationStateService(self) as service:
            return service.fetch(invoice_id)
