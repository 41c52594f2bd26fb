from django.conf import settings
from django.core import signing

TOKEN_SALT = 'stepseazy.accounts.token'


class Role:
    CUSTOMER = 'customer'
    ADMIN = 'admin'


def issue_token(subject_id, role, name='', phone=''):
    payload = {'id': str(subject_id), 'role': role, 'name': name, 'phone': phone}
    return signing.dumps(payload, salt=TOKEN_SALT, compress=True)


def read_token(token):
    """Return the token payload. Raises signing.BadSignature (or its SignatureExpired subclass)."""
    return signing.loads(token, salt=TOKEN_SALT, max_age=settings.SHOP_TOKEN_MAX_AGE)
