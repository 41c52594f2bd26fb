from rest_framework import serializers


class RegisterIn(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=15)
    email = serializers.EmailField(max_length=100, required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(min_length=6, max_length=128, write_only=True, trim_whitespace=False)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class LoginIn(serializers.Serializer):
    phone = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


def customer_view(customer):
    return {
        'id': str(customer.id),
        'name': customer.name,
        'phone': customer.phone,
        'email': customer.email,
        'address': customer.address,
        'created_at': customer.created_at,
    }
