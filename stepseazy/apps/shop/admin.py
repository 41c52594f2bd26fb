from django.contrib import admin
from .models import CartItem, Customer, Order, OrderItem, Product


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'quantity', 'price', 'created_at')
    can_delete = False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ('name', 'phone', 'email', 'is_registered', 'created_at')
    search_fields = ('name', 'phone', 'email')
    exclude = ('password',)

    def get_readonly_fields(self, request, obj=None):
        # Phone is the identity key once the row exists.
        return ('phone',) if obj is not None else ()

    @admin.display(boolean=True)
    def is_registered(self, obj):
        return obj.is_registered


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'stock_quantity', 'is_active', 'created_at')
    list_filter = ('category', 'is_active')
    search_fields = ('name',)
    # Stock moves only through orders, cancellations and the restock endpoint.
    readonly_fields = ('stock_quantity',)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer', 'total_amount', 'status', 'payment_status', 'created_at')
    list_filter = ('status', 'payment_status', 'created_at')
    search_fields = ('customer__name', 'customer__phone')
    # Status changes go through the API so cancellations return stock.
    readonly_fields = ('customer', 'total_amount', 'status', 'payment_method', 'created_at', 'updated_at')
    inlines = [OrderItemInline]


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ('customer', 'product', 'quantity', 'created_at')
    search_fields = ('customer__phone', 'product__name')
