from django.contrib import admin
from .models import ServiceRequest


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer', 'device_type', 'status', 'estimated_cost', 'actual_cost', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('customer__name', 'customer__phone', 'device_type')
    readonly_fields = ('completion_date', 'created_at', 'updated_at')
