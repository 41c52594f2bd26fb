import uuid
from django.db import models
from django.db.models import Q


class Customer(models.Model):
    """Registered customers and guests identified by phone number."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=15, unique=True)
    email = models.EmailField(max_length=100, null=True, blank=True)
    password = models.CharField(max_length=255, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shop_customer'

    def __str__(self):
        return f"{self.name} ({self.phone})"

    @property
    def is_registered(self):
        return bool(self.password)


class Product(models.Model):
    """Products available for sale."""

    class Category(models.TextChoices):
        CHARGER = 'charger', 'Charger'
        EARPHONE = 'earphone', 'Earphone'
        COVER = 'cover', 'Cover'
        SCREEN = 'screen', 'Screen Guard'
        CABLE = 'cable', 'Cable'
        OTHER = 'other', 'Other'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    category = models.CharField(max_length=50, choices=Category.choices, default=Category.OTHER)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock_quantity = models.IntegerField(default=0)
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shop_product'
        constraints = [
            models.CheckConstraint(condition=Q(stock_quantity__gte=0), name='shop_product_stock_non_negative'),
            models.CheckConstraint(condition=Q(price__gte=0), name='shop_product_price_non_negative'),
        ]
        indexes = [
            models.Index(fields=['category'], name='shop_product_category_idx'),
            models.Index(fields=['is_active'], name='shop_product_active_idx'),
        ]

    def __str__(self):
        return self.name


class Order(models.Model):
    """Customer purchase orders. total_amount is fixed when the order is placed."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        CONFIRMED = 'confirmed', 'Confirmed'
        PROCESSING = 'processing', 'Processing'
        SHIPPED = 'shipped', 'Shipped'
        DELIVERED = 'delivered', 'Delivered'
        CANCELLED = 'cancelled', 'Cancelled'

    class PaymentStatus(models.TextChoices):
        PENDING = 'pending', 'Pending'
        PAID = 'paid', 'Paid'

    class PaymentMethod(models.TextChoices):
        COD = 'cod', 'Cash on delivery'
        UPI = 'upi', 'UPI'
        CARD = 'card', 'Card'
        NETBANKING = 'netbanking', 'Net banking'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(
        Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name='orders',
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING,
    )
    payment_method = models.CharField(
        max_length=50, choices=PaymentMethod.choices, default=PaymentMethod.COD,
    )
    delivery_address = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shop_order'
        indexes = [
            models.Index(fields=['status'], name='shop_order_status_idx'),
            models.Index(fields=['-created_at', '-id'], name='shop_order_created_idx'),
            models.Index(fields=['customer', '-created_at'], name='shop_order_customer_idx'),
        ]

    def __str__(self):
        return f"Order #{self.id} - {self.total_amount}"


class OrderItem(models.Model):
    """Line items inside an order. price is the unit price at order time."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='order_items')
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shop_order_item'
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name='shop_order_item_quantity_positive'),
        ]

    def __str__(self):
        return f"{self.product_id} x{self.quantity}"

    @property
    def line_total(self):
        return self.price * self.quantity


class CartItem(models.Model):
    """One row per (customer, product); repeated adds accumulate quantity."""

    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='cart_items')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='cart_items')
    quantity = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shop_cart_item'
        constraints = [
            models.UniqueConstraint(fields=['customer', 'product'], name='shop_cart_item_customer_product_uniq'),
            models.CheckConstraint(condition=Q(quantity__gt=0), name='shop_cart_item_quantity_positive'),
        ]

    def __str__(self):
        return f"{self.customer_id}: {self.product_id} x{self.quantity}"
