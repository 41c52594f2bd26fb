import logging
from rest_framework import status
from rest_framework.response import Response

from apps.accounts.permissions import IsCustomer, IsShopAdmin
from apps.shop.views import ShopAPIView, page_params, pagination, status_filter
from .models import ServiceRequest
from .serializers import (
    AdminServiceRequestSerializer, QuickOrderIn, ServiceRequestIn, ServiceRequestSerializer, ServiceStatusIn,
)
from .services import ServiceDesk

logger = logging.getLogger(__name__)


class ServiceAPIView(ShopAPIView):

    @property
    def desk(self):
        return ServiceDesk(self.repository)


class ServiceRequestView(ServiceAPIView):
    permission_classes = [IsCustomer]

    def post(self, request):
        body = ServiceRequestIn(data=request.data)
        body.is_valid(raise_exception=True)
        ticket = self.desk.create_ticket(request.user.id, **body.validated_data)
        return Response({
            'success': True,
            'message': 'Service request created successfully',
            'data': ServiceRequestSerializer(ticket).data,
        }, status=status.HTTP_201_CREATED)


class MyServicesView(ServiceAPIView):
    permission_classes = [IsCustomer]

    def get(self, request):
        tickets = ServiceRequest.objects.filter(customer_id=request.user.id).order_by('-created_at', '-id')
        return Response({'success': True, 'data': ServiceRequestSerializer(tickets, many=True).data})


class QuickOrderView(ServiceAPIView):
    """WhatsApp flow: no login, the phone number identifies the customer."""

    def post(self, request):
        body = QuickOrderIn(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data

        logger.info("REQUEST - quick order | phone: %s | service: %s", data['phone'], data['service_type'])
        order, ticket, customer, message = self.desk.quick_order(
            data['name'], data['phone'], data['service_type'],
            phone_model=data['phone_model'], location=data['location'], price=data.get('price'),
        )
        return Response({
            'success': True,
            'message': 'Quick order received successfully',
            'order_id': str(order.id),
            'service_id': str(ticket.id),
            'customer_id': str(customer.id),
            'whatsapp_message': message,
        }, status=status.HTTP_201_CREATED)


class TrackServiceView(ServiceAPIView):

    def get(self, request, ticket_id):
        return Response({'success': True, 'data': self.desk.track(ticket_id)})


class AdminServiceListView(ServiceAPIView):
    permission_classes = [IsShopAdmin]

    def get(self, request):
        params, page, limit, offset = page_params(request.query_params)
        queryset = ServiceRequest.objects.select_related('customer').order_by('-created_at', '-id')
        status_value = status_filter(params)
        if status_value:
            queryset = queryset.filter(status=status_value)
        rows, total = self.repository.paginate(queryset, offset, limit)
        return Response({
            'success': True,
            'data': AdminServiceRequestSerializer(rows, many=True).data,
            'pagination': pagination(page, limit, total),
        })


class AdminServiceStatusView(ServiceAPIView):
    permission_classes = [IsShopAdmin]

    def put(self, request, ticket_id):
        body = ServiceStatusIn(data=request.data)
        body.is_valid(raise_exception=True)
        ticket = self.desk.update_status(ticket_id, **body.validated_data)
        return Response({
            'success': True,
            'message': 'Service status updated successfully',
            'data': ServiceRequestSerializer(ticket).data,
        })
