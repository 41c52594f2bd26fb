import logging

from ..exceptions import InvalidQuantity, NotFoundError

logger = logging.getLogger(__name__)


class CartView:
    """Read-only (product, quantity) pairs; each iteration runs a fresh query."""

    def __init__(self, queryset):
        self._queryset = queryset

    def __iter__(self):
        for item in self._queryset.iterator():
            yield item.product, item.quantity

    def __len__(self):
        return self._queryset.count()


class CartConsolidator:

    def __init__(self, repository):
        self.repository = repository

    def add_to_cart(self, customer_id, product_id, quantity=1):
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantity()

        if self.repository.get_active_product(product_id) is None:
            raise NotFoundError('Product not found')

        item = self.repository.upsert_accumulate(customer_id, product_id, quantity)
        logger.info("CART - customer %s | product %s | +%d -> %d", customer_id, product_id, quantity, item.quantity)
        return item

    def remove_from_cart(self, customer_id, product_id):
        deleted = self.repository.delete_cart_items(customer_id, [product_id])
        logger.info("CART - customer %s | removed %s (%d row)", customer_id, product_id, deleted)
        return deleted

    def clear(self, customer_id, product_ids=None):
        return self.repository.delete_cart_items(customer_id, product_ids)

    def get_cart(self, customer_id):
        queryset = (
            self.repository.cart_items(customer_id)
            .select_related('product')
            .order_by('created_at', 'id')
        )
        return CartView(queryset)

    def get_cart_items(self, customer_id):
        return list(
            self.repository.cart_items(customer_id)
            .select_related('product')
            .order_by('created_at', 'id')
        )
