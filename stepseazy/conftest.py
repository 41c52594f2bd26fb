import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from django.db import connections
from rest_framework.test import APIClient

from apps.accounts.tokens import Role, issue_token
from apps.shop.apps import get_repository
from apps.shop.models import Customer, Product


@pytest.fixture
def repository():
    return get_repository()


@pytest.fixture
def make_product(db):
    def _make(name='Fast USB Charger 20W', price='499.00', stock=10, **extra):
        return Product.objects.create(name=name, price=Decimal(price), stock_quantity=stock, **extra)
    return _make


@pytest.fixture
def product(make_product):
    return make_product()


@pytest.fixture
def customer(db):
    return Customer.objects.create(name='Aarav Sharma', phone='9000000001')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def customer_client(customer):
    client = APIClient()
    token = issue_token(customer.id, Role.CUSTOMER, customer.name, customer.phone)
    client.credentials(HTTP_AUTHORIZATION='Bearer ' + token)
    return client


@pytest.fixture
def admin_client(db):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer ' + issue_token(1, Role.ADMIN, 'Admin User', '9999999999'))
    return client


@pytest.fixture
def run_concurrently():
    """
    Run fn(*args) for every args tuple on its own thread, released together.

    Returns a list of (result, exception) pairs in input order. Each worker
    closes its own database connection before exiting.
    """
    def _run(fn, arg_list):
        barrier = threading.Barrier(len(arg_list))

        def worker(args):
            try:
                barrier.wait(timeout=10)
                return fn(*args), None
            except Exception as exc:  # noqa: BLE001 - collected for the assertion
                return None, exc
            finally:
                connections.close_all()

        with ThreadPoolExecutor(max_workers=len(arg_list)) as pool:
            return list(pool.map(worker, arg_list))

    return _run
