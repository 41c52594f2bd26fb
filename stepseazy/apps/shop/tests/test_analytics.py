from decimal import Decimal

import pytest
from django.core.cache import cache

from apps.shop.exceptions import StockUnavailable
from apps.shop.models import Order
from apps.shop.services.analytics import AnalyticsService
from apps.shop.services.order_assembler import OrderAssembler, OrderLine
from apps.shop.services.order_status import OrderStatusService

pytestmark = pytest.mark.django_db


@pytest.fixture
def analytics():
    cache.clear()
    yield AnalyticsService()
    cache.clear()


def test_summary_is_cached(analytics, customer):
    assert analytics.get_summary()['total_orders'] == 0
    Order.objects.create(customer=customer, total_amount='10.00')
    assert analytics.get_summary()['total_orders'] == 0


def test_committed_order_refreshes_summary(analytics, repository, customer, product,
                                           django_capture_on_commit_callbacks):
    assert analytics.get_summary()['total_revenue'] == Decimal('0')

    with django_capture_on_commit_callbacks(execute=True):
        OrderAssembler(repository).place_order(
            customer.pk, [OrderLine(product.pk, 2, product.price)], payment_method='upi',
        )

    summary = analytics.get_summary()
    assert summary['total_orders'] == 1
    assert summary['total_revenue'] == Decimal('998.00')


def test_status_change_refreshes_summary(analytics, repository, customer, product,
                                         django_capture_on_commit_callbacks):
    order = OrderAssembler(repository).place_order(customer.pk, [OrderLine(product.pk, 1, product.price)])
    assert analytics.get_summary()['pending_orders'] == 1

    with django_capture_on_commit_callbacks(execute=True):
        OrderStatusService(repository).update_status(order.pk, Order.Status.CONFIRMED)

    assert analytics.get_summary()['pending_orders'] == 0


def test_rejected_order_leaves_cache_alone(analytics, repository, customer, make_product,
                                           django_capture_on_commit_callbacks):
    product = make_product(stock=0)
    analytics.get_summary()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(StockUnavailable):
            OrderAssembler(repository).place_order(customer.pk, [OrderLine(product.pk, 1, product.price)])

    assert callbacks == []
