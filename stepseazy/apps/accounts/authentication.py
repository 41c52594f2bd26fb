from django.core import signing
from rest_framework import authentication, exceptions

from .tokens import Role, read_token


class TokenPrincipal:
    """The caller identified by a bearer token. Not a database row."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, payload):
        self.id = payload['id']
        self.role = payload.get('role', Role.CUSTOMER)
        self.name = payload.get('name', '')
        self.phone = payload.get('phone', '')

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    def __str__(self):
        return '{}:{}'.format(self.role, self.id)


class BearerTokenAuthentication(authentication.BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header.')

        token = header[1].decode(errors='replace')
        try:
            payload = read_token(token)
        except signing.SignatureExpired:
            raise exceptions.AuthenticationFailed('Token expired.')
        except signing.BadSignature:
            raise exceptions.AuthenticationFailed('Invalid token.')
        return TokenPrincipal(payload), token

    def authenticate_header(self, request):
        return self.keyword
