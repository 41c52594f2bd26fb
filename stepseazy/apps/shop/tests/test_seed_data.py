from io import StringIO

import pytest
from django.core.management import call_command

from apps.shop.models import Order, OrderItem, Product

pytestmark = pytest.mark.django_db


def test_seed_catalog_is_idempotent():
    call_command('seed_data', stdout=StringIO())
    call_command('seed_data', stdout=StringIO())
    assert Product.objects.count() == 5


def test_seed_orders_keep_stock_consistent():
    call_command('seed_data', stdout=StringIO())
    before = sum(Product.objects.values_list('stock_quantity', flat=True))

    call_command('seed_data', orders=10, stdout=StringIO())

    sold = sum(OrderItem.objects.values_list('quantity', flat=True))
    after = sum(Product.objects.values_list('stock_quantity', flat=True))
    assert Order.objects.count() == 10
    assert before - after == sold


def test_seed_orders_count_inactive_products_as_rejections():
    call_command('seed_data', stdout=StringIO())
    Product.objects.update(is_active=False)

    out = StringIO()
    call_command('seed_data', orders=3, stdout=out)

    assert not Order.objects.exists()
    assert 'Placed 0 orders (3 rejected for stock).' in out.getvalue()
