import pytest
from django.contrib.admin.sites import site

from apps.shop.models import Customer

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff_client(client, admin_user):
    client.force_login(admin_user)
    return client


def test_customer_phone_is_editable_only_on_add(rf, customer):
    customer_admin = site._registry[Customer]
    request = rf.get('/')
    assert customer_admin.get_readonly_fields(request) == ()
    assert customer_admin.get_readonly_fields(request, customer) == ('phone',)


def test_staff_can_add_customer(staff_client):
    response = staff_client.post('/admin/shop/customer/add/', {
        'name': 'Walk-in Buyer', 'phone': '9444444444', 'email': '', 'address': '',
    })

    assert response.status_code == 302
    assert Customer.objects.get(phone='9444444444').name == 'Walk-in Buyer'


def test_customer_change_form_keeps_phone(staff_client, customer):
    response = staff_client.post('/admin/shop/customer/{}/change/'.format(customer.pk), {
        'name': 'Aarav S.', 'phone': '9999999999', 'email': '', 'address': '',
    })

    assert response.status_code == 302
    customer.refresh_from_db()
    assert (customer.name, customer.phone) == ('Aarav S.', '9000000001')
