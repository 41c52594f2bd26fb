from rest_framework import serializers

from .models import CartItem, Order, Product


class OrderItemIn(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class OrderCreateIn(serializers.Serializer):
    """Checkout body. Prices and totals sent by the client are ignored."""

    items = OrderItemIn(many=True, required=False)
    from_cart = serializers.BooleanField(default=False)
    payment_method = serializers.ChoiceField(choices=Order.PaymentMethod.choices, default=Order.PaymentMethod.COD)
    delivery_address = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        if not attrs.get('from_cart') and not attrs.get('items'):
            raise serializers.ValidationError({'items': 'At least one item is required.'})
        if attrs.get('from_cart') and attrs.get('items'):
            raise serializers.ValidationError({'items': 'Send either items or from_cart, not both.'})
        return attrs


class GuestCheckoutIn(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=15)
    items = OrderItemIn(many=True, allow_empty=False)
    payment_method = serializers.ChoiceField(choices=Order.PaymentMethod.choices, default=Order.PaymentMethod.COD)
    delivery_address = serializers.CharField(required=False, allow_blank=True, default='')


class CartAddIn(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class OrderStatusIn(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)


class ListQueryIn(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)
    status = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)


class ProductSerializer(serializers.ModelSerializer):

    class Meta:
        model = Product
        fields = (
            'id', 'name', 'description', 'price', 'category', 'stock_quantity',
            'images', 'is_active', 'created_at',
        )
        read_only_fields = ('id', 'created_at')
        extra_kwargs = {'price': {'min_value': 0}}

    def validate_images(self, value):
        if not isinstance(value, list) or not all(isinstance(url, str) for url in value):
            raise serializers.ValidationError('images must be a list of URLs.')
        return value


class ProductCreateSerializer(ProductSerializer):

    class Meta(ProductSerializer.Meta):
        extra_kwargs = {
            'price': {'min_value': 0},
            'stock_quantity': {'min_value': 0},
        }


class ProductUpdateSerializer(ProductSerializer):
    """Stock is changed only through the restock endpoint."""

    class Meta(ProductSerializer.Meta):
        read_only_fields = ('id', 'created_at', 'stock_quantity')


class RestockIn(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    customer_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = CartItem
        fields = ('id', 'customer_id', 'product_id', 'quantity', 'created_at')


class OrderSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = (
            'id', 'customer_id', 'total_amount', 'status', 'payment_status', 'payment_method',
            'delivery_address', 'created_at', 'updated_at',
        )
