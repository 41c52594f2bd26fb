import pytest

from apps.shop.exceptions import ShopValidationError
from apps.shop.models import Customer
from apps.shop.services.guest_identity import GuestIdentityResolver

pytestmark = pytest.mark.django_db


@pytest.fixture
def resolver(repository):
    return GuestIdentityResolver(repository)


def test_creates_customer_for_new_phone(resolver):
    customer = resolver.resolve_guest_customer('Diya Patel', '9000000002')
    assert customer.name == 'Diya Patel'
    assert customer.password is None
    assert Customer.objects.filter(phone='9000000002').count() == 1


def test_same_phone_returns_first_customer_unchanged(resolver):
    first = resolver.resolve_guest_customer('Diya Patel', '9000000002')
    second = resolver.resolve_guest_customer('Dia Patel', '9000000002')

    assert second.pk == first.pk
    assert second.name == 'Diya Patel'
    assert Customer.objects.filter(phone='9000000002').count() == 1


def test_does_not_overwrite_registered_customer(resolver):
    registered = Customer.objects.create(name='Kabir Singh', phone='9000000003', password='hash')
    resolved = resolver.resolve_guest_customer('Someone Else', '9000000003')

    assert resolved.pk == registered.pk
    registered.refresh_from_db()
    assert registered.name == 'Kabir Singh'
    assert registered.password == 'hash'


def test_strips_whitespace_before_matching(resolver):
    first = resolver.resolve_guest_customer('Meera', '9000000004')
    second = resolver.resolve_guest_customer(' Meera ', ' 9000000004 ')
    assert second.pk == first.pk


@pytest.mark.parametrize('name, phone', [('', '9000000005'), ('Rohan', ''), (None, None)])
def test_requires_name_and_phone(resolver, name, phone):
    with pytest.raises(ShopValidationError):
        resolver.resolve_guest_customer(name, phone)
    assert not Customer.objects.exists()
