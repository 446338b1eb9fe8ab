"""
Views for Robokassa Result, Success and Fail callbacks.
"""

import logging
from django.http import HttpResponse, HttpResponseBadRequest, HttpResponseRedirect, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .client import Robokassa
from .config import config
from .constants import CallbackType, SHOP_DATA_PREFIX
from .exceptions import RobokassaException
from .signals import result_received, success_received, fail_received

logger = logging.getLogger(__name__)


def _get_params(request):
    return request.POST if request.method == 'POST' else request.GET


def _get_shop_data(params):
    """Collect Shp_* parameters in the alphabetical order the gateway signs them."""
    return {
        key: params[key]
        for key in sorted(params.keys())
        if key.startswith(SHOP_DATA_PREFIX)
    }


def _verify(request, callback_type):
    """
    Verify callback parameters.
    
    Returns:
        (params, shop_data, error_response) tuple; error_response is None
        when the callback is valid.
    """
    params = _get_params(request)
    amount = params.get('OutSum')
    invoice_id = params.get('InvId')
    signature = params.get('SignatureValue')
    
    if not amount or not invoice_id or not signature:
        logger.warning(f"Robokassa {callback_type} callback with missing parameters")
        return params, {}, HttpResponseBadRequest('Missing parameters')
    
    shop_data = _get_shop_data(params)
    
    try:
        client = Robokassa.from_settings()
    except RobokassaException as e:
        logger.error(f"Cannot verify {callback_type} callback: {e.message}")
        return params, shop_data, HttpResponse(status=500)
    
    if not client.verify_callback(callback_type, amount, invoice_id, signature, shop_data):
        return params, shop_data, HttpResponseBadRequest('bad sign')
    
    return params, shop_data, None


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def result_callback(request):
    """
    Handle the Result callback sent server-to-server by Robokassa.
    Answers OK<InvId> so the gateway stops resending it.
    """
    params, shop_data, error = _verify(request, CallbackType.RESULT.value)
    if error is not None:
        return error
    
    invoice_id = params['InvId']
    logger.info(f"Received Result callback for invoice: {invoice_id}")
    
    result_received.send(
        sender=Robokassa,
        invoice_id=invoice_id,
        amount=params['OutSum'],
        shop_data=shop_data,
        data=params.dict()
    )
    return HttpResponse(f"OK{invoice_id}")


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def success_callback(request):
    """
    Handle the customer returning through the Success URL.
    """
    params, shop_data, error = _verify(request, CallbackType.SUCCESS.value)
    if error is not None:
        return error
    
    invoice_id = params['InvId']
    logger.info(f"Received Success callback for invoice: {invoice_id}")
    
    success_received.send(
        sender=Robokassa,
        invoice_id=invoice_id,
        amount=params['OutSum'],
        shop_data=shop_data,
        data=params.dict()
    )
    
    if config.success_redirect_url:
        return HttpResponseRedirect(config.success_redirect_url)
    return JsonResponse({'status': 'success', 'invoice_id': invoice_id})


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def fail_callback(request):
    """
    Handle the customer returning through the Fail URL.
    The gateway does not sign this request.
    """
    params = _get_params(request)
    invoice_id = params.get('InvId')
    logger.info(f"Received Fail callback for invoice: {invoice_id}")
    
    fail_received.send(
        sender=Robokassa,
        invoice_id=invoice_id,
        amount=params.get('OutSum'),
        shop_data=_get_shop_data(params),
        data=params.dict()
    )
    
    if config.fail_redirect_url:
        return HttpResponseRedirect(config.fail_redirect_url)
    return JsonResponse({'status': 'fail', 'invoice_id': invoice_id})
