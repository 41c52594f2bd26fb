import logging
from django.contrib.auth import authenticate
from django.contrib.auth.hashers import check_password, make_password
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.shop.apps import get_repository
from apps.shop.exceptions import ConflictError
from apps.shop.models import Customer
from .serializers import LoginIn, RegisterIn, customer_view
from .tokens import Role, issue_token

logger = logging.getLogger(__name__)


class RegisterView(APIView):

    def post(self, request):
        body = RegisterIn(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data
        password = make_password(data['password'])

        customer, created = get_repository().insert_if_absent(
            Customer,
            lookup={'phone': data['phone'].strip()},
            values={
                'name': data['name'].strip(),
                'email': data.get('email') or None,
                'address': data.get('address') or None,
                'password': password,
            },
        )
        if not created:
            customer = self.claim_guest(customer, data, password)

        logger.info("ACCOUNT - registered customer %s", customer.id)
        return Response({
            'success': True,
            'message': 'Registration successful',
            'token': issue_token(customer.id, Role.CUSTOMER, customer.name, customer.phone),
            'user': customer_view(customer),
        }, status=status.HTTP_201_CREATED)

    @staticmethod
    def claim_guest(customer, data, password):
        """A guest row (no password) becomes registered; a registered phone is a conflict."""
        claimed = get_repository().customers().filter(pk=customer.pk, password__isnull=True).update(
            email=data.get('email') or customer.email,
            address=data.get('address') or customer.address,
            password=password,
        )
        if not claimed:
            raise ConflictError('User with this phone already exists')
        customer.refresh_from_db()
        return customer


class LoginView(APIView):

    def post(self, request):
        body = LoginIn(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data

        customer = get_repository().get_customer_by_phone(data['phone'].strip())
        # Guest customers have no password and cannot log in until they register.
        if customer is None or not customer.password or not check_password(data['password'], customer.password):
            raise AuthenticationFailed('Invalid phone or password')

        return Response({
            'success': True,
            'message': 'Login successful',
            'token': issue_token(customer.id, Role.CUSTOMER, customer.name, customer.phone),
            'user': customer_view(customer),
        })


class AdminLoginView(APIView):
    """Staff sign in with their Django user credentials; the phone is the username."""

    def post(self, request):
        body = LoginIn(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data

        user = authenticate(request, username=data['phone'], password=data['password'])
        if user is None or not user.is_staff:
            logger.warning("ACCOUNT - rejected admin login for %s", data['phone'])
            raise AuthenticationFailed('Invalid admin credentials')

        name = user.get_full_name() or user.get_username()
        return Response({
            'success': True,
            'message': 'Admin login successful',
            'token': issue_token(user.pk, Role.ADMIN, name, user.get_username()),
            'user': {'id': str(user.pk), 'name': name, 'phone': user.get_username(), 'role': Role.ADMIN},
        })
