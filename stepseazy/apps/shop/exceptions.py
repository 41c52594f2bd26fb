import logging
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ShopError(exceptions.APIException):
    """Base for errors the shop services raise on purpose."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request failed.'
    default_code = 'error'

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail=detail, code=code)
        self.extra = extra


class ShopValidationError(ShopError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'validation_error'


class EmptyOrder(ShopValidationError):
    default_detail = 'Order items are required and every quantity must be positive.'
    default_code = 'empty_order'


class InvalidQuantity(ShopValidationError):
    default_detail = 'Quantity must be a positive integer.'
    default_code = 'invalid_quantity'


class NotFoundError(ShopError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class ConflictError(ShopError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Request conflicts with the current state.'
    default_code = 'conflict'


class StockUnavailable(ConflictError):
    default_code = 'stock_unavailable'

    def __init__(self, product_id, reason):
        super().__init__(
            detail='Product {} is unavailable: {}'.format(product_id, reason.replace('_', ' ')),
            product_id=str(product_id),
            reason=reason,
        )
        self.product_id = product_id
        self.reason = reason


class InvalidStatusTransition(ConflictError):
    default_code = 'invalid_status_transition'


class InfrastructureError(ShopError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error.'
    default_code = 'infrastructure_error'


class OrderFailed(InfrastructureError):
    default_detail = 'Failed to create order. No changes were saved; please retry.'
    default_code = 'order_failed'

    def __init__(self, detail=None, **extra):
        super().__init__(detail=detail, retryable=True, **extra)


def _error_code(exc, response):
    if isinstance(exc, exceptions.ValidationError):
        return 'validation_error'
    codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
    if isinstance(codes, str):
        return codes
    return 'error_{}'.format(response.status_code)


def _error_message(detail):
    if isinstance(detail, list) and detail:
        return _error_message(detail[0])
    if isinstance(detail, dict) and detail:
        field, value = next(iter(detail.items()))
        message = _error_message(value)
        return message if field == 'non_field_errors' else '{}: {}'.format(field, message)
    return str(detail)


def shop_exception_handler(exc, context):
    """Render every API error as {success: false, error, code, ...}."""
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled exceptions propagate to Django's 500 handling.
        return None

    body = {
        'success': False,
        'error': _error_message(response.data.get('detail', response.data)
                                if isinstance(response.data, dict) else response.data),
        'code': _error_code(exc, response),
    }
    if isinstance(exc, exceptions.ValidationError):
        body['details'] = response.data
    body.update(getattr(exc, 'extra', {}))

    if response.status_code >= 500:
        view = context.get('view')
        logger.error(
            "API ERROR - %s | view: %s | %s",
            body['code'], type(view).__name__ if view else '-', body['error'],
        )

    return Response(body, status=response.status_code, headers=_passthrough_headers(response))


def _passthrough_headers(response):
    return {
        name: response[name]
        for name in ('WWW-Authenticate', 'Retry-After')
        if response.has_header(name)
    }
