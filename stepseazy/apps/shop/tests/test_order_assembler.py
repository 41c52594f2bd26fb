import uuid
from decimal import Decimal
from unittest import mock

import pytest
from django.db import OperationalError

from apps.shop.exceptions import EmptyOrder, OrderFailed, StockUnavailable
from apps.shop.models import CartItem, Order, OrderItem
from apps.shop.services.cart import CartConsolidator
from apps.shop.services.order_assembler import OrderAssembler, OrderLine, order_total

pytestmark = pytest.mark.django_db


@pytest.fixture
def assembler(repository):
    return OrderAssembler(repository, cart=CartConsolidator(repository))


def test_happy_path(assembler, customer, product):
    order = assembler.place_order(
        customer.pk, [OrderLine(product.pk, 2, Decimal('100'))], payment_method='cod', delivery_address='MG Road',
    )

    product.refresh_from_db()
    assert product.stock_quantity == 8
    assert order.total_amount == Decimal('200.00')
    assert order.status == Order.Status.PENDING
    assert order.payment_status == Order.PaymentStatus.PENDING
    assert order.created_at is not None

    item = OrderItem.objects.get(order=order)
    assert (item.product_id, item.quantity, item.price) == (product.pk, 2, Decimal('100.00'))


def test_prepaid_order_is_marked_paid(assembler, customer, product):
    order = assembler.place_order(customer.pk, [OrderLine(product.pk, 1, Decimal('499'))], payment_method='upi')
    assert order.payment_status == Order.PaymentStatus.PAID


def test_guest_order_without_customer(assembler, product):
    order = assembler.place_order(None, [OrderLine(product.pk, 1, Decimal('499'))])
    assert order.customer_id is None


def test_total_matches_persisted_items(assembler, customer, make_product):
    a = make_product(name='A', price='199.00')
    b = make_product(name='B', price='249.50')
    lines = [OrderLine(a.pk, 3, a.price), OrderLine(b.pk, 2, b.price)]

    order = assembler.place_order(customer.pk, lines)

    persisted = sum(item.price * item.quantity for item in OrderItem.objects.filter(order=order))
    order.refresh_from_db()
    assert order.total_amount == persisted == Decimal('1096.00')


def test_sub_cent_prices_keep_total_equal_to_items(assembler, product):
    order = assembler.place_order(None, [OrderLine(product.pk, 3, Decimal('0.333'))])

    persisted = sum(item.price * item.quantity for item in OrderItem.objects.filter(order=order))
    order.refresh_from_db()
    assert order.total_amount == persisted == Decimal('0.99')


def test_order_total_rounds_the_sum():
    lines = [OrderLine(1, 2, Decimal('0.125')), OrderLine(2, 1, Decimal('0.10'))]
    assert order_total(lines) == Decimal('0.35')


@pytest.mark.parametrize('lines', [
    [],
    [OrderLine(uuid.uuid4(), 0, Decimal('1'))],
    [OrderLine(uuid.uuid4(), -2, Decimal('1'))],
    [OrderLine(uuid.uuid4(), 1, None)],
    [OrderLine(uuid.uuid4(), 1, Decimal('-5'))],
])
def test_invalid_lines_fail_before_any_write(assembler, customer, lines):
    with pytest.raises(EmptyOrder):
        assembler.place_order(customer.pk, lines)
    assert not Order.objects.exists()


def test_insufficient_stock_rolls_back_everything(assembler, customer, make_product):
    plenty = make_product(name='Plenty', stock=10)
    scarce = make_product(name='Scarce', stock=1)
    lines = [OrderLine(plenty.pk, 4, plenty.price), OrderLine(scarce.pk, 2, scarce.price)]

    with pytest.raises(StockUnavailable) as excinfo:
        assembler.place_order(customer.pk, lines)

    assert excinfo.value.product_id == scarce.pk
    assert excinfo.value.reason == 'insufficient_stock'
    assert not Order.objects.exists()
    assert not OrderItem.objects.exists()
    plenty.refresh_from_db()
    scarce.refresh_from_db()
    assert (plenty.stock_quantity, scarce.stock_quantity) == (10, 1)


def test_unknown_product_rolls_back(assembler, customer, product):
    missing = uuid.uuid4()
    lines = [OrderLine(product.pk, 1, product.price), OrderLine(missing, 1, Decimal('10'))]

    with pytest.raises(StockUnavailable) as excinfo:
        assembler.place_order(customer.pk, lines)

    assert excinfo.value.reason == 'not_found'
    assert not Order.objects.exists()
    product.refresh_from_db()
    assert product.stock_quantity == 10


def test_database_failure_surfaces_as_order_failed(assembler, customer, product):
    with mock.patch.object(assembler.stock_ledger, 'reserve', side_effect=OperationalError('database is locked')):
        with pytest.raises(OrderFailed) as excinfo:
            assembler.place_order(customer.pk, [OrderLine(product.pk, 1, product.price)])

    assert excinfo.value.status_code == 500
    assert excinfo.value.extra == {'retryable': True}
    assert not Order.objects.exists()


def test_quote_lines_uses_catalog_price(assembler, make_product):
    product = make_product(price='349.00')
    [line] = assembler.quote_lines([(str(product.pk), 2)])
    assert line.unit_price == Decimal('349.00')


def test_quote_lines_rejects_inactive_product(assembler, make_product):
    product = make_product(is_active=False)
    with pytest.raises(StockUnavailable):
        assembler.quote_lines([(product.pk, 1)])


def test_checkout_from_cart_clears_ordered_rows(
        assembler, customer, make_product, django_capture_on_commit_callbacks):
    a = make_product(name='A', price='100.00', stock=5)
    b = make_product(name='B', price='50.00', stock=5)
    assembler.cart.add_to_cart(customer.pk, a.pk, 2)
    assembler.cart.add_to_cart(customer.pk, b.pk, 1)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        order = assembler.place_order_from_cart(customer.pk, delivery_address='MG Road')

    assert len(callbacks) == 2
    assert order.total_amount == Decimal('250.00')
    assert not CartItem.objects.filter(customer=customer).exists()


def test_failed_cart_checkout_keeps_cart(assembler, customer, make_product, django_capture_on_commit_callbacks):
    product = make_product(stock=1)
    assembler.cart.add_to_cart(customer.pk, product.pk, 3)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(StockUnavailable):
            assembler.place_order_from_cart(customer.pk)

    assert callbacks == []
    assert CartItem.objects.get(customer=customer).quantity == 3


def test_empty_cart_checkout(assembler, customer):
    with pytest.raises(EmptyOrder):
        assembler.place_order_from_cart(customer.pk)
