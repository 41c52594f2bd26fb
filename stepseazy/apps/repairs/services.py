import logging
from decimal import Decimal
from urllib.parse import quote

from django.utils import timezone

from apps.shop.exceptions import NotFoundError
from apps.shop.models import Order
from apps.shop.services.guest_identity import GuestIdentityResolver
from .models import ServiceRequest

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    ServiceRequest.Status.PENDING: 'Request received - a technician will call you shortly',
    ServiceRequest.Status.IN_PROGRESS: 'Device under repair',
    ServiceRequest.Status.COMPLETED: 'Repair completed',
    ServiceRequest.Status.CANCELLED: 'Request cancelled',
}


def whatsapp_message(order_id, name, phone, service_type, phone_model, location, price):
    """URL-encoded text for the shop's WhatsApp hand-off link."""
    lines = [
        '*NEW QUICK ORDER*',
        '',
        'Name: {}'.format(name),
        'Phone: {}'.format(phone),
        'Service: {}'.format(service_type),
        'Model: {}'.format(phone_model or 'Not specified'),
        'Location: {}'.format(location or 'Not shared'),
        'Price: Rs.{}'.format(price if price is not None else 'To be determined'),
        '',
        'Order ID: {}'.format(order_id),
    ]
    return quote('\n'.join(lines))


class ServiceDesk:

    def __init__(self, repository):
        self.repository = repository

    def create_ticket(self, customer_id, device_type, problem_description, estimated_cost=None, location=''):
        ticket = ServiceRequest.objects.create(
            customer_id=customer_id,
            device_type=device_type,
            problem_description=problem_description,
            estimated_cost=estimated_cost or 0,
            location=location or '',
        )
        logger.info("SERVICE - ticket %s | customer: %s | device: %s", ticket.id, customer_id, device_type)
        return ticket

    def quick_order(self, name, phone, service_type, phone_model='', location='', price=None):
        """
        WhatsApp flow: resolve the guest, then record a pending COD order the
        customer can follow on /track-order, with the repair ticket beside it.

        Returns (order, ticket, customer, message).
        """
        with self.repository.atomic():
            customer = GuestIdentityResolver(self.repository).resolve_guest_customer(name, phone)
            order = self.repository.create_order(
                customer_id=customer.id,
                total_amount=Decimal(price or 0).quantize(Decimal('0.01')),
                status=Order.Status.PENDING,
                payment_method=Order.PaymentMethod.COD,
                payment_status=Order.PaymentStatus.PENDING,
                delivery_address=location or '',
            )
            ticket = self.create_ticket(
                customer.id,
                device_type=phone_model or 'Not specified',
                problem_description=service_type,
                estimated_cost=price,
                location=location,
            )
        logger.info("SERVICE - quick order %s | ticket %s | customer: %s", order.id, ticket.id, customer.id)
        message = whatsapp_message(order.id, name, phone, service_type, phone_model, location, price)
        return order, ticket, customer, message

    def update_status(self, ticket_id, status, actual_cost=None, technician_id=None):
        ticket = ServiceRequest.objects.filter(pk=ticket_id).first()
        if ticket is None:
            raise NotFoundError('Service request not found')

        ticket.status = status
        fields = ['status', 'updated_at']
        if actual_cost is not None:
            ticket.actual_cost = actual_cost
            fields.append('actual_cost')
        if technician_id:
            ticket.technician_id = technician_id
            fields.append('technician_id')
        if status == ServiceRequest.Status.COMPLETED:
            ticket.completion_date = timezone.now()
            fields.append('completion_date')
        ticket.save(update_fields=fields)

        logger.info("SERVICE - ticket %s -> %s", ticket.id, status)
        return ticket

    def track(self, ticket_id):
        ticket = ServiceRequest.objects.select_related('customer').filter(pk=ticket_id).first()
        if ticket is None:
            raise NotFoundError('Service request not found')
        return {
            'order_id': str(ticket.id),
            'status': ticket.status,
            'status_message': STATUS_MESSAGES.get(ticket.status, 'Request received'),
            'customer_name': ticket.customer.name,
            'device_type': ticket.device_type,
            'estimated_cost': ticket.estimated_cost,
            'order_date': timezone.localtime(ticket.created_at).date().isoformat(),
        }
