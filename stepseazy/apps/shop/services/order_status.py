import logging

from ..exceptions import InvalidStatusTransition, NotFoundError, ShopValidationError
from ..models import Order
from .analytics import AnalyticsService
from .stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class OrderStatusService:
    """Admin status transitions. Cancelling returns the order's stock."""

    def __init__(self, repository, stock_ledger=None):
        self.repository = repository
        self.stock_ledger = stock_ledger or StockLedger(repository)

    def update_status(self, order_id, status):
        if status not in Order.Status.values:
            raise ShopValidationError('Invalid status: {}'.format(status))

        with self.repository.atomic():
            # Row lock so two concurrent cancellations cannot both restock.
            order = self.repository.get_order(order_id, for_update=True)
            if order is None:
                raise NotFoundError('Order not found')
            if order.status == Order.Status.CANCELLED and status != Order.Status.CANCELLED:
                raise InvalidStatusTransition('Cancelled orders cannot be reopened')
            if order.status == status:
                return order

            previous = order.status
            order.status = status
            order.save(update_fields=['status', 'updated_at'])

            if status == Order.Status.CANCELLED:
                reserved = list(self.repository.order_items(order.pk).values_list('product_id', 'quantity'))
                self.stock_ledger.release_all(reserved)

            self.repository.on_commit(AnalyticsService().invalidate)

        logger.info("ORDER - %s status %s -> %s", order.pk, previous, status)
        return order
