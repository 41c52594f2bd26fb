from rest_framework import serializers

from .models import ServiceRequest


class ServiceRequestIn(serializers.Serializer):
    device_type = serializers.CharField(max_length=100)
    problem_description = serializers.CharField()
    estimated_cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)


class QuickOrderIn(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=15)
    service_type = serializers.CharField(max_length=200)
    phone_model = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    location = serializers.CharField(required=False, allow_blank=True, default='')
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)


class ServiceStatusIn(serializers.Serializer):
    status = serializers.ChoiceField(choices=ServiceRequest.Status.choices)
    actual_cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    technician_id = serializers.UUIDField(required=False)


class ServiceRequestSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = ServiceRequest
        fields = (
            'id', 'customer_id', 'device_type', 'problem_description', 'location', 'estimated_cost',
            'actual_cost', 'status', 'technician_id', 'completion_date', 'created_at', 'updated_at',
        )


class AdminServiceRequestSerializer(ServiceRequestSerializer):
    customer = serializers.SerializerMethodField()

    class Meta(ServiceRequestSerializer.Meta):
        fields = ServiceRequestSerializer.Meta.fields + ('customer',)

    def get_customer(self, obj):
        return {'name': obj.customer.name, 'phone': obj.customer.phone}
