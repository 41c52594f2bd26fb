import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from django.db import DatabaseError

from ..exceptions import EmptyOrder, StockUnavailable, OrderFailed
from ..models import Order
from .analytics import AnalyticsService
from .stock_ledger import StockLedger

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')

PREPAID_METHODS = {
    Order.PaymentMethod.UPI,
    Order.PaymentMethod.CARD,
    Order.PaymentMethod.NETBANKING,
}


@dataclass(frozen=True)
class OrderLine:
    product_id: object
    quantity: int
    unit_price: Optional[Decimal] = None


def payment_status_for(payment_method):
    if payment_method in PREPAID_METHODS:
        return Order.PaymentStatus.PAID
    return Order.PaymentStatus.PENDING


def to_cents(lines):
    """Round every unit price to whole cents, as OrderItem.price stores them."""
    return [replace(line, unit_price=Decimal(line.unit_price).quantize(CENTS)) for line in lines]


def order_total(lines):
    total = sum((Decimal(line.unit_price) * line.quantity for line in lines), Decimal('0'))
    return total.quantize(CENTS)


class OrderAssembler:
    """
    Turns a checkout into an order, its line items and the matching stock
    reservations as one atomic unit.
    """

    def __init__(self, repository, stock_ledger=None, cart=None):
        self.repository = repository
        self.stock_ledger = stock_ledger or StockLedger(repository)
        self.cart = cart

    # ── validation ───────────────────────────────────────────────────────────
    @staticmethod
    def validate(lines):
        if not lines:
            raise EmptyOrder()
        for line in lines:
            quantity = line.quantity
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                raise EmptyOrder()
            if line.unit_price is None or Decimal(line.unit_price) < 0:
                raise EmptyOrder('Every order item needs a non-negative unit price.')

    def quote_lines(self, items):
        """
        Price (product_id, quantity) pairs from the catalog.

        Unknown or inactive products fail the same way a reservation would.
        """
        items = list(items)
        if not items:
            raise EmptyOrder()
        prices = {
            str(pk): price
            for pk, price in self.repository.active_product_prices([product_id for product_id, _ in items]).items()
        }
        lines = []
        for product_id, quantity in items:
            price = prices.get(str(product_id))
            if price is None:
                raise StockUnavailable(product_id, 'not_found')
            lines.append(OrderLine(product_id=product_id, quantity=quantity, unit_price=price))
        return lines

    # ── placement ────────────────────────────────────────────────────────────
    def place_order(self, customer_id, lines, payment_method=Order.PaymentMethod.COD, delivery_address=''):
        lines = list(lines)
        self.validate(lines)
        # Items and total share the rounded prices so they always agree.
        lines = to_cents(lines)
        total = order_total(lines)

        logger.info(
            "ORDER - placing | customer: %s | lines: %d | total: %s | payment: %s",
            customer_id or 'guest', len(lines), total, payment_method,
        )

        try:
            with self.repository.atomic():
                order = self.repository.create_order(
                    customer_id=customer_id,
                    total_amount=total,
                    status=Order.Status.PENDING,
                    payment_method=payment_method,
                    payment_status=payment_status_for(payment_method),
                    delivery_address=delivery_address or '',
                )
                self.repository.create_order_items(order, lines)

                for line in lines:
                    result = self.stock_ledger.reserve(line.product_id, line.quantity)
                    if not result.ok:
                        # Raising inside the unit discards the order, its
                        # items and every reservation made so far.
                        raise StockUnavailable(line.product_id, result.value)

                self.repository.on_commit(AnalyticsService().invalidate)
        except StockUnavailable as exc:
            logger.info(
                "ORDER - rejected | customer: %s | product %s %s",
                customer_id or 'guest', exc.product_id, exc.reason,
            )
            raise
        except DatabaseError as exc:
            logger.exception(
                "ORDER - failed, rolled back | customer: %s | lines: %d | total: %s",
                customer_id or 'guest', len(lines), total,
            )
            raise OrderFailed() from exc

        logger.info("ORDER - created %s | customer: %s | total: %s", order.id, customer_id or 'guest', total)
        return order

    def place_order_from_cart(self, customer_id, payment_method=Order.PaymentMethod.COD, delivery_address=''):
        """Check out the customer's cart, then clear the ordered rows."""
        if self.cart is None:
            raise ValueError('place_order_from_cart needs a CartConsolidator')

        cart_items = self.cart.get_cart_items(customer_id)
        lines = self.quote_lines((item.product_id, item.quantity) for item in cart_items)
        order = self.place_order(customer_id, lines, payment_method, delivery_address)

        product_ids = [line.product_id for line in lines]
        self.repository.on_commit(lambda: self._clear_cart(customer_id, order.id, product_ids))
        return order

    def _clear_cart(self, customer_id, order_id, product_ids):
        # Runs after commit. A failure leaves stale cart rows, which the next
        # checkout re-validates against stock anyway.
        try:
            removed = self.cart.clear(customer_id, product_ids)
        except DatabaseError:
            logger.warning(
                "ORDER - cart cleanup failed after %s | customer: %s", order_id, customer_id, exc_info=True,
            )
            return
        logger.debug("ORDER - cleared %d cart row(s) after %s", removed, order_id)
