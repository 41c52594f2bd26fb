import logging
from django.db import IntegrityError, transaction
from django.db.models import F

from .models import CartItem, Customer, Order, OrderItem, Product

logger = logging.getLogger(__name__)


class ShopRepository:
    """
    ORM-backed access to the five shop tables.

    Every check that protects an invariant (stock never negative, one cart row
    per customer/product, one customer per phone) runs as a single conditional
    statement or a constraint-backed insert, so it holds across processes.
    """

    def __init__(self, using='default'):
        self.using = using

    # ── transactions ─────────────────────────────────────────────────────────
    def atomic(self):
        """Commit on normal exit, roll back if the block raises."""
        return transaction.atomic(using=self.using)

    def on_commit(self, callback):
        transaction.on_commit(callback, using=self.using)

    # ── products / stock ─────────────────────────────────────────────────────
    def products(self):
        return Product.objects.using(self.using)

    def get_active_product(self, product_id):
        return self.products().filter(pk=product_id, is_active=True).first()

    def active_product_prices(self, product_ids):
        rows = self.products().filter(pk__in=product_ids, is_active=True).values_list('pk', 'price')
        return dict(rows)

    def product_is_active(self, product_id):
        return self.products().filter(pk=product_id, is_active=True).exists()

    def conditional_decrement(self, product_id, amount):
        """Decrement stock only if enough remains. Returns affected row count."""
        return (
            self.products()
            .filter(pk=product_id, is_active=True, stock_quantity__gte=amount)
            .update(stock_quantity=F('stock_quantity') - amount)
        )

    def increment_stock(self, product_id, amount):
        return self.products().filter(pk=product_id).update(stock_quantity=F('stock_quantity') + amount)

    # ── generic find-or-create ───────────────────────────────────────────────
    def insert_if_absent(self, model, lookup, values):
        """
        Optimistic insert keyed on a unique column.

        The insert runs in its own savepoint so a uniqueness violation does not
        poison an enclosing transaction; the loser re-reads the winner's row.
        Returns (row, was_inserted).
        """
        manager = model._default_manager.db_manager(self.using)
        try:
            with transaction.atomic(using=self.using):
                return manager.create(**lookup, **values), True
        except IntegrityError:
            row = manager.filter(**lookup).first()
            if row is None:
                # The violation came from some other constraint.
                raise
            return row, False

    # ── cart ─────────────────────────────────────────────────────────────────
    def cart_items(self, customer_id):
        return CartItem.objects.using(self.using).filter(customer_id=customer_id)

    def upsert_accumulate(self, customer_id, product_id, delta):
        """Add delta to the (customer, product) cart row, creating it if needed."""
        rows = self.cart_items(customer_id).filter(product_id=product_id)
        if not rows.update(quantity=F('quantity') + delta):
            try:
                with transaction.atomic(using=self.using):
                    return CartItem.objects.using(self.using).create(
                        customer_id=customer_id, product_id=product_id, quantity=delta,
                    )
            except IntegrityError:
                # A concurrent add inserted the row first; accumulate onto it.
                if not rows.update(quantity=F('quantity') + delta):
                    raise
        return rows.get()

    def delete_cart_items(self, customer_id, product_ids=None):
        rows = self.cart_items(customer_id)
        if product_ids is not None:
            rows = rows.filter(product_id__in=product_ids)
        deleted, _ = rows.delete()
        return deleted

    # ── customers ────────────────────────────────────────────────────────────
    def customers(self):
        return Customer.objects.using(self.using)

    def get_customer(self, customer_id):
        return self.customers().filter(pk=customer_id).first()

    def get_customer_by_phone(self, phone):
        return self.customers().filter(phone=phone).first()

    # ── orders ───────────────────────────────────────────────────────────────
    def orders(self):
        return Order.objects.using(self.using)

    def get_order(self, order_id, for_update=False):
        rows = self.orders()
        if for_update:
            rows = rows.select_for_update()
        return rows.filter(pk=order_id).first()

    def create_order(self, **values):
        return self.orders().create(**values)

    def create_order_items(self, order, lines):
        items = [
            OrderItem(order=order, product_id=line.product_id, quantity=line.quantity, price=line.unit_price)
            for line in lines
        ]
        return OrderItem.objects.using(self.using).bulk_create(items)

    def order_items(self, order_id):
        return OrderItem.objects.using(self.using).filter(order_id=order_id)

    # ── reads ────────────────────────────────────────────────────────────────
    @staticmethod
    def paginate(queryset, offset, limit):
        """Return (rows, total) for one page of an already-ordered queryset."""
        total = queryset.count()
        rows = list(queryset[offset:offset + limit])
        return rows, total
