import uuid
from django.db import models

from apps.shop.models import Customer


class ServiceRequest(models.Model):
    """Repair tickets raised by customers or through the quick-order flow."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        IN_PROGRESS = 'in_progress', 'In progress'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='service_requests')
    device_type = models.CharField(max_length=100)
    problem_description = models.TextField()
    location = models.TextField(blank=True, default='')
    estimated_cost = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    actual_cost = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    technician_id = models.UUIDField(null=True, blank=True)
    completion_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'repairs_service_request'
        indexes = [
            models.Index(fields=['status'], name='repairs_status_idx'),
            models.Index(fields=['customer', '-created_at'], name='repairs_customer_idx'),
        ]

    def __str__(self):
        return f"Service #{self.id} - {self.device_type}"
