from django.db.models import Prefetch
from django.utils import timezone

from ..exceptions import NotFoundError
from ..models import Order, OrderItem

STATUS_MESSAGES = {
    Order.Status.PENDING: 'Order received - waiting for confirmation',
    Order.Status.CONFIRMED: 'Order confirmed - processing',
    Order.Status.PROCESSING: 'Order being processed',
    Order.Status.SHIPPED: 'Order shipped - out for delivery',
    Order.Status.DELIVERED: 'Order delivered successfully',
    Order.Status.CANCELLED: 'Order cancelled',
}

# Newest first; id breaks ties so pages never overlap or skip rows.
ORDERING = ('-created_at', '-id')


def item_view(item):
    product = item.product
    return {
        'product_id': str(item.product_id),
        'name': product.name,
        'images': product.images,
        'quantity': item.quantity,
        'price': item.price,
        'line_total': item.line_total,
    }


def order_view(order, with_customer=False):
    data = {
        'id': str(order.id),
        'customer_id': str(order.customer_id) if order.customer_id else None,
        'total_amount': order.total_amount,
        'status': order.status,
        'payment_status': order.payment_status,
        'payment_method': order.payment_method,
        'delivery_address': order.delivery_address,
        'created_at': order.created_at,
        'updated_at': order.updated_at,
        'items': [item_view(item) for item in order.items.all()],
    }
    if with_customer:
        customer = order.customer
        data['customer'] = {
            'name': customer.name,
            'phone': customer.phone,
            'email': customer.email,
        } if customer else None
    return data


class OrderQueryProjection:
    """Read-side views of orders joined with items and live product data."""

    def __init__(self, repository):
        self.repository = repository

    def _base(self):
        items = OrderItem.objects.using(self.repository.using).select_related('product').order_by('id')
        items = Prefetch('items', queryset=items)
        return self.repository.orders().select_related('customer').prefetch_related(items)

    def get_order_detail(self, order_id, customer_id=None):
        queryset = self._base().filter(pk=order_id)
        if customer_id is not None:
            queryset = queryset.filter(customer_id=customer_id)
        order = queryset.first()
        if order is None:
            raise NotFoundError('Order not found')
        return order_view(order, with_customer=True)

    def list_orders(self, customer_id=None, status=None, offset=0, limit=20, with_customer=False):
        queryset = self._base()
        if customer_id is not None:
            queryset = queryset.filter(customer_id=customer_id)
        if status:
            queryset = queryset.filter(status=status)
        rows, total = self.repository.paginate(queryset.order_by(*ORDERING), offset, limit)
        return [order_view(order, with_customer=with_customer) for order in rows], total

    def track_order(self, order_id):
        order = self.repository.orders().select_related('customer').filter(pk=order_id).first()
        if order is None:
            raise NotFoundError('Order not found')
        return {
            'order_id': str(order.id),
            'status': order.status,
            'status_message': STATUS_MESSAGES.get(order.status, 'Order received'),
            'customer_name': order.customer.name if order.customer else 'Customer',
            'amount': order.total_amount,
            'order_date': timezone.localtime(order.created_at).date().isoformat(),
        }
