import pytest

from djrobokassa.constants import CallbackType, Country, HashAlgorithm
from djrobokassa.exceptions import ConfigurationError, InvalidArgumentError
from djrobokassa.utils.validators import (
    normalize_currency,
    require,
    validate_callback_type,
    validate_country,
    validate_hashing_algorithm,
    validate_shop_data_keys,
)


def test_callback_type_is_case_insensitive():
    assert validate_callback_type('SUCCESS') == CallbackType.SUCCESS
    assert validate_callback_type('Result') == CallbackType.RESULT


def test_callback_type_lists_allowed_values():
    with pytest.raises(InvalidArgumentError) as exc:
        validate_callback_type('fail')
    assert 'result' in str(exc.value)
    assert 'success' in str(exc.value)


def test_country():
    assert validate_country('KZ') == Country.KZ
    with pytest.raises(InvalidArgumentError):
        validate_country('xx')


def test_hashing_algorithm_accepts_enum_and_name():
    assert validate_hashing_algorithm(HashAlgorithm.SHA256) == 'sha256'
    assert validate_hashing_algorithm('SHA512') == 'sha512'


def test_hashing_algorithm_rejects_unknown():
    with pytest.raises(InvalidArgumentError):
        validate_hashing_algorithm('crc32')
    with pytest.raises(InvalidArgumentError):
        validate_hashing_algorithm('')


@pytest.mark.parametrize('currency, expected', [
    ('usd', 'USD'),
    ('EUR', 'EUR'),
    ('kzt', 'KZT'),
    ('GBP', None),
    ('', None),
    (None, None),
])
def test_normalize_currency(currency, expected):
    assert normalize_currency(currency) == expected


def test_require():
    assert require('demo', 'shop ID') == 'demo'
    with pytest.raises(ConfigurationError):
        require(None, 'shop ID')
    with pytest.raises(ConfigurationError):
        require('', 'shop ID')


def test_shop_data_keys():
    validate_shop_data_keys(None)
    validate_shop_data_keys({'Shp_item': '1', 'SHP_user': '2'})
    with pytest.raises(InvalidArgumentError) as exc:
        validate_shop_data_keys({'Shp_item': '1', 'InvId': '2'})
    assert 'InvId' in str(exc.value)
