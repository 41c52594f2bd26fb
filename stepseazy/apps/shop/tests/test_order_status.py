import uuid

import pytest

from apps.shop.exceptions import InvalidStatusTransition, NotFoundError, ShopValidationError
from apps.shop.models import Order, Product
from apps.shop.services.order_assembler import OrderAssembler, OrderLine
from apps.shop.services.order_status import OrderStatusService

pytestmark = pytest.mark.django_db


@pytest.fixture
def service(repository):
    return OrderStatusService(repository)


@pytest.fixture
def order(repository, customer, make_product):
    a = make_product(name='A', stock=5)
    b = make_product(name='B', stock=5)
    return OrderAssembler(repository).place_order(
        customer.pk, [OrderLine(a.pk, 2, a.price), OrderLine(b.pk, 3, b.price)],
    )


def stock_levels():
    return dict(Product.objects.values_list('name', 'stock_quantity'))


def test_moves_order_forward(service, order):
    updated = service.update_status(order.pk, Order.Status.SHIPPED)
    assert updated.status == Order.Status.SHIPPED
    assert stock_levels() == {'A': 3, 'B': 2}


def test_cancel_returns_stock(service, order):
    service.update_status(order.pk, Order.Status.CANCELLED)
    assert stock_levels() == {'A': 5, 'B': 5}


def test_cancelling_twice_restocks_once(service, order):
    service.update_status(order.pk, Order.Status.CANCELLED)
    service.update_status(order.pk, Order.Status.CANCELLED)
    assert stock_levels() == {'A': 5, 'B': 5}


def test_cancelled_order_cannot_be_reopened(service, order):
    service.update_status(order.pk, Order.Status.CANCELLED)
    with pytest.raises(InvalidStatusTransition):
        service.update_status(order.pk, Order.Status.PENDING)

    order.refresh_from_db()
    assert order.status == Order.Status.CANCELLED
    assert stock_levels() == {'A': 5, 'B': 5}


def test_unknown_status_value(service, order):
    with pytest.raises(ShopValidationError):
        service.update_status(order.pk, 'lost')


def test_unknown_order(service):
    with pytest.raises(NotFoundError):
        service.update_status(uuid.uuid4(), Order.Status.CONFIRMED)
