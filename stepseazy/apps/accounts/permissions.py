from rest_framework.permissions import BasePermission

from .tokens import Role


class IsCustomer(BasePermission):
    message = 'Access token required'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'role', None) == Role.CUSTOMER)


class IsShopAdmin(BasePermission):
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'role', None) == Role.ADMIN)
