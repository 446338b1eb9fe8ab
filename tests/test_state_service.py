import hashlib
from unittest import mock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from djrobokassa.client import Robokassa
from djrobokassa.constants import OperationStateCode
from djrobokassa.exceptions import APIError, ConfigurationError, XmlParseError
from djrobokassa.services.state_service import OperationStateService, parse_operation_state
from djrobokassa.utils.http_client import HTTPClient
from djrobokassa.utils.xml_loader import XMLLoader

STATE_XML = """<?xml version="1.0" encoding="utf-8"?>
<OperationStateResponse xmlns="http://merchant.roboxchange.com/WebService/">
  <Result>
    <Code>0</Code>
  </Result>
  <State>
    <Code>100</Code>
    <RequestDate>2026-10-19T10:00:00.000+03:00</RequestDate>
    <StateDate>2026-10-19T10:01:00.000+03:00</StateDate>
  </State>
  <Info>
    <IncCurrLabel>BANKOCEAN2R</IncCurrLabel>
    <IncSum>100.00</IncSum>
    <IncAccount>5321****1234</IncAccount>
    <OutCurrLabel>RUB</OutCurrLabel>
    <OutSum>100.00</OutSum>
  </Info>
</OperationStateResponse>
"""


def make_response(text, status_code=200):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def robokassa():
    return (
        Robokassa()
        .set_shop_id('demo')
        .set_password1('p1')
        .set_password2('p2')
        .set_hashing_algorithm('md5')
    )


def test_state_signature_is_lowercase(robokassa):
    expected = hashlib.md5(b'demo:42:p2').hexdigest()
    assert robokassa.build_state_signature(42) == expected


def test_operation_state_url(robokassa):
    parsed = urlparse(robokassa.get_operation_state_url(42))
    params = parse_qs(parsed.query)

    assert parsed.scheme == 'https'
    assert parsed.netloc == 'auth.robokassa.ru'
    assert parsed.path == '/Merchant/WebService/Service.asmx/OpStateExt'
    assert params == {
        'MerchantLogin': ['demo'],
        'InvoiceID': ['42'],
        'Signature': [hashlib.md5(b'demo:42:p2').hexdigest()],
    }


def test_operation_state_url_follows_country(robokassa):
    robokassa.set_country('kz')
    assert urlparse(robokassa.get_operation_state_url(1)).netloc == 'auth.robokassa.kz'
    robokassa.set_country('ru')
    assert urlparse(robokassa.get_operation_state_url(1)).netloc == 'auth.robokassa.ru'


def test_operation_state_url_requires_password2():
    client = Robokassa().set_shop_id('demo').set_hashing_algorithm('md5')
    with pytest.raises(ConfigurationError):
        client.get_operation_state_url(1)


@mock.patch.object(requests.Session, 'get')
def test_fetch_operation_state(mock_get, robokassa):
    mock_get.return_value = make_response(STATE_XML)

    document = robokassa.fetch_operation_state(42)

    assert document['OperationStateResponse']['State']['Code'] == '100'
    url = mock_get.call_args[0][0]
    assert url == 'https://auth.robokassa.ru/Merchant/WebService/Service.asmx/OpStateExt'
    params = mock_get.call_args[1]['params']
    assert params['MerchantLogin'] == 'demo'
    assert params['InvoiceID'] == 42
    assert params['Signature'] == hashlib.md5(b'demo:42:p2').hexdigest()


@mock.patch.object(requests.Session, 'get')
def test_fetch_malformed_document(mock_get, robokassa):
    mock_get.return_value = make_response('<OperationStateResponse><Result></OperationStateResponse>')
    service = OperationStateService(robokassa)

    with pytest.raises(XmlParseError) as exc:
        service.fetch(42)

    assert exc.value.errors
    assert service.errors == exc.value.errors


@mock.patch.object(requests.Session, 'get')
def test_fetch_http_error(mock_get, robokassa):
    mock_get.return_value = make_response('Server Error', status_code=500)

    with pytest.raises(APIError) as exc:
        robokassa.fetch_operation_state(42)
    assert exc.value.error_code == 500


@mock.patch.object(requests.Session, 'get')
def test_fetch_connection_error_retries(mock_get):
    mock_get.side_effect = requests.ConnectionError('down')
    client = HTTPClient('https://auth.robokassa.ru', max_retries=3)

    with pytest.raises(APIError):
        client.get_text('/Merchant/WebService/Service.asmx/OpStateExt')
    assert mock_get.call_count == 3


def test_loader_empty_document():
    loader = XMLLoader(HTTPClient('https://auth.robokassa.ru'))
    with pytest.raises(XmlParseError):
        loader.parse('   ')
    assert loader.errors == ['Empty document']


def test_loader_clears_errors_between_loads():
    loader = XMLLoader(HTTPClient('https://auth.robokassa.ru'))
    with pytest.raises(XmlParseError):
        loader.parse('<a>')
    assert loader.errors
    loader.parse('<a>1</a>')
    assert loader.errors == []


def test_parse_operation_state():
    loader = XMLLoader(HTTPClient('https://auth.robokassa.ru'))
    state = parse_operation_state(loader.parse(STATE_XML))

    assert state.is_success
    assert state.is_paid
    assert state.state == OperationStateCode.COMPLETED
    assert state.out_sum == '100.00'
    assert state.out_currency == 'RUB'
    assert state.inc_currency == 'BANKOCEAN2R'
    assert state.info['IncAccount'] == '5321****1234'


def test_parse_operation_state_error_result():
    document = {
        'OperationStateResponse': {
            'Result': {'Code': '3', 'Description': 'Invoice not found'},
        }
    }
    state = parse_operation_state(document)

    assert not state.is_success
    assert state.result_description == 'Invoice not found'
    assert state.state_code is None
    assert state.state is None
    assert not state.is_paid


@mock.patch.object(requests.Session, 'close')
@mock.patch.object(requests.Session, 'get')
def test_fetch_closes_session(mock_get, mock_close, robokassa):
    mock_get.return_value = make_response(STATE_XML)

    robokassa.fetch_operation_state(42)

    mock_close.assert_called_once_with()


@mock.patch.object(requests.Session, 'close')
@mock.patch.object(requests.Session, 'get')
def test_fetch_closes_session_on_error(mock_get, mock_close, robokassa):
    mock_get.return_value = make_response('<OperationStateResponse>')

    with pytest.raises(XmlParseError):
        robokassa.fetch_operation_state(42)

    mock_close.assert_called_once_with()


@mock.patch.object(requests.Session, 'close')
def test_operation_state_url_closes_session(mock_close, robokassa):
    robokassa.get_operation_state_url(42)
    mock_close.assert_called_once_with()


@mock.patch.object(requests.Session, 'close')
def test_service_leaves_shared_client_open(mock_close, robokassa):
    http_client = HTTPClient('https://auth.robokassa.ru')

    with OperationStateService(robokassa, http_client=http_client) as service:
        service.get_url(42)

    mock_close.assert_not_called()
