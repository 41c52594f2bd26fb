import pytest
from django.contrib.auth import get_user_model
from django.core import signing

from apps.accounts.tokens import Role, issue_token, read_token
from apps.shop.models import Customer

pytestmark = pytest.mark.django_db

REGISTER = {'name': 'Aarav Sharma', 'phone': '9000000001', 'password': 'secret123', 'email': 'aarav@example.com'}


def test_token_round_trip():
    payload = read_token(issue_token('abc', Role.CUSTOMER, 'Aarav', '9000000001'))
    assert payload == {'id': 'abc', 'role': 'customer', 'name': 'Aarav', 'phone': '9000000001'}


def test_tampered_token_is_rejected():
    token = issue_token('abc', Role.CUSTOMER)
    with pytest.raises(signing.BadSignature):
        read_token(token[:-2] + 'xx')


def test_register_returns_token(api_client):
    response = api_client.post('/api/register', REGISTER, format='json')
    body = response.json()

    assert response.status_code == 201
    assert body['user']['phone'] == '9000000001'
    assert 'password' not in body['user']
    assert read_token(body['token'])['role'] == Role.CUSTOMER

    customer = Customer.objects.get(phone='9000000001')
    assert customer.password != 'secret123'
    assert customer.is_registered


def test_register_duplicate_phone_conflicts(api_client):
    api_client.post('/api/register', REGISTER, format='json')
    response = api_client.post('/api/register', {**REGISTER, 'name': 'Someone'}, format='json')

    assert response.status_code == 409
    assert response.json()['error'] == 'User with this phone already exists'
    assert Customer.objects.get(phone='9000000001').name == 'Aarav Sharma'


def test_register_claims_guest_customer(api_client):
    guest = Customer.objects.create(name='Aarav', phone='9000000001')

    response = api_client.post('/api/register', REGISTER, format='json')

    assert response.status_code == 201
    assert response.json()['user']['id'] == str(guest.pk)
    guest.refresh_from_db()
    assert guest.is_registered
    assert guest.email == 'aarav@example.com'
    assert Customer.objects.count() == 1


def test_register_validates_password_length(api_client):
    response = api_client.post('/api/register', {**REGISTER, 'password': '123'}, format='json')
    assert response.status_code == 400
    assert response.json()['code'] == 'validation_error'


def test_login(api_client):
    api_client.post('/api/register', REGISTER, format='json')

    ok = api_client.post('/api/login', {'phone': '9000000001', 'password': 'secret123'}, format='json')
    bad = api_client.post('/api/login', {'phone': '9000000001', 'password': 'wrong-one'}, format='json')

    assert ok.status_code == 200
    assert read_token(ok.json()['token'])['phone'] == '9000000001'
    assert bad.status_code == 401
    assert bad.json() == {'success': False, 'error': 'Invalid phone or password', 'code': 'authentication_failed'}


def test_guest_cannot_log_in(api_client):
    Customer.objects.create(name='Guest', phone='9000000009')
    response = api_client.post('/api/login', {'phone': '9000000009', 'password': 'anything'}, format='json')
    assert response.status_code == 401


def test_admin_login_requires_staff(api_client):
    User = get_user_model()
    User.objects.create_user(username='shopadmin', password='adminpass', is_staff=True)
    User.objects.create_user(username='plainuser', password='userpass')

    ok = api_client.post('/api/admin/login', {'phone': 'shopadmin', 'password': 'adminpass'}, format='json')
    refused = api_client.post('/api/admin/login', {'phone': 'plainuser', 'password': 'userpass'}, format='json')

    assert ok.status_code == 200
    assert read_token(ok.json()['token'])['role'] == Role.ADMIN
    assert refused.status_code == 401


def test_admin_token_opens_admin_endpoints(api_client):
    get_user_model().objects.create_user(username='shopadmin', password='adminpass', is_staff=True)
    token = api_client.post(
        '/api/admin/login', {'phone': 'shopadmin', 'password': 'adminpass'}, format='json',
    ).json()['token']

    api_client.credentials(HTTP_AUTHORIZATION='Bearer ' + token)
    assert api_client.get('/api/admin/customers').status_code == 200
