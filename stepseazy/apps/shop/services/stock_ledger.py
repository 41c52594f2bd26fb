import enum
import logging

logger = logging.getLogger(__name__)


class Reservation(enum.Enum):
    OK = 'ok'
    INSUFFICIENT_STOCK = 'insufficient_stock'
    NOT_FOUND = 'not_found'

    @property
    def ok(self):
        return self is Reservation.OK


class StockLedger:
    """
    The only writer of Product.stock_quantity.

    reserve() is a compare-and-decrement executed by the database. Called
    inside an atomic unit, a later rollback reverts the decrement as well.
    """

    def __init__(self, repository):
        self.repository = repository

    def reserve(self, product_id, quantity):
        if self.repository.conditional_decrement(product_id, quantity):
            logger.debug("STOCK - reserved %d of %s", quantity, product_id)
            return Reservation.OK

        if not self.repository.product_is_active(product_id):
            logger.info("STOCK - product %s not found or inactive", product_id)
            return Reservation.NOT_FOUND

        logger.info("STOCK - insufficient stock for %s (wanted %d)", product_id, quantity)
        return Reservation.INSUFFICIENT_STOCK

    def release(self, product_id, quantity):
        """Put quantity back on the shelf. Returns the number of rows touched."""
        updated = self.repository.increment_stock(product_id, quantity)
        if updated:
            logger.debug("STOCK - released %d of %s", quantity, product_id)
        else:
            logger.warning("STOCK - release of %d skipped, product %s missing", quantity, product_id)
        return updated

    def release_all(self, reserved):
        """
        Compensate a list of successful (product_id, quantity) reservations,
        newest first. Only needed where the reservations could not share one
        transaction with the rest of the write.
        """
        for product_id, quantity in reversed(reserved):
            self.release(product_id, quantity)
