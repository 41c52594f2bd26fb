import logging
import math
from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsCustomer, IsShopAdmin
from .apps import get_repository
from .exceptions import NotFoundError
from .serializers import (
    CartAddIn, CartItemSerializer, GuestCheckoutIn, ListQueryIn, OrderCreateIn, OrderSerializer,
    OrderStatusIn, ProductCreateSerializer, ProductSerializer, ProductUpdateSerializer, RestockIn,
)
from .services.analytics import AnalyticsService
from .services.cart import CartConsolidator
from .services.guest_identity import GuestIdentityResolver
from .services.order_assembler import OrderAssembler
from .services.order_query import OrderQueryProjection
from .services.order_status import OrderStatusService
from .services.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


def page_params(query_params):
    """Parse ?page=&limit= into (params, page, limit, offset)."""
    params = ListQueryIn(data=query_params)
    params.is_valid(raise_exception=True)
    page = params.validated_data['page']
    limit = min(
        params.validated_data.get('limit') or settings.SHOP_DEFAULT_PAGE_SIZE,
        settings.SHOP_MAX_PAGE_SIZE,
    )
    return params.validated_data, page, limit, (page - 1) * limit


def pagination(page, limit, total):
    return {
        'page': page,
        'limit': limit,
        'total': total,
        'pages': math.ceil(total / limit) if limit else 0,
    }


def status_filter(params):
    value = params.get('status')
    return None if not value or value == 'all' else value


class ShopAPIView(APIView):
    """Gives each request the process-wide repository and the core services."""

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.repository = get_repository()

    @property
    def cart(self):
        return CartConsolidator(self.repository)

    @property
    def assembler(self):
        return OrderAssembler(self.repository, cart=self.cart)

    @property
    def orders(self):
        return OrderQueryProjection(self.repository)


# ─────────────────────────────────────────
#  Health
# ─────────────────────────────────────────
@api_view(['GET'])
def health(request):
    return Response({
        'success': True,
        'message': "Step'sEazy API is running",
        'timestamp': timezone.now().isoformat(),
        'version': '1.0.0',
        'environment': settings.ENVIRONMENT,
    })


# ─────────────────────────────────────────
#  Catalog
# ─────────────────────────────────────────
class ProductListView(ShopAPIView):

    def get(self, request):
        params, page, limit, offset = page_params(request.query_params)

        queryset = self.repository.products().filter(is_active=True)
        category = params.get('category')
        if category and category != 'all':
            queryset = queryset.filter(category=category)
        if params.get('search'):
            queryset = queryset.filter(name__icontains=params['search'])

        rows, total = self.repository.paginate(queryset.order_by('-created_at', 'id'), offset, limit)
        return Response({
            'success': True,
            'data': ProductSerializer(rows, many=True).data,
            'pagination': pagination(page, limit, total),
        })


class ProductDetailView(ShopAPIView):

    def get(self, request, product_id):
        product = self.repository.products().filter(pk=product_id).first()
        if product is None:
            raise NotFoundError('Product not found')
        return Response({'success': True, 'data': ProductSerializer(product).data})


# ─────────────────────────────────────────
#  Orders
# ─────────────────────────────────────────
class OrderCreateView(ShopAPIView):
    permission_classes = [IsCustomer]

    def post(self, request):
        body = OrderCreateIn(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data
        customer_id = request.user.id

        logger.info("REQUEST - checkout | customer: %s | from_cart: %s", customer_id, data['from_cart'])

        if data['from_cart']:
            order = self.assembler.place_order_from_cart(
                customer_id, data['payment_method'], data['delivery_address'],
            )
        else:
            lines = self.assembler.quote_lines((item['product_id'], item['quantity']) for item in data['items'])
            order = self.assembler.place_order(
                customer_id, lines, data['payment_method'], data['delivery_address'],
            )

        return Response({
            'success': True,
            'message': 'Order created successfully',
            'order_id': str(order.id),
            'data': OrderSerializer(order).data,
        }, status=status.HTTP_201_CREATED)


class GuestCheckoutView(ShopAPIView):

    def post(self, request):
        body = GuestCheckoutIn(data=request.data)
        body.is_valid(raise_exception=True)
        data = body.validated_data

        customer = GuestIdentityResolver(self.repository).resolve_guest_customer(data['name'], data['phone'])
        lines = self.assembler.quote_lines((item['product_id'], item['quantity']) for item in data['items'])
        order = self.assembler.place_order(customer.id, lines, data['payment_method'], data['delivery_address'])

        return Response({
            'success': True,
            'message': 'Order created successfully',
            'order_id': str(order.id),
            'customer_id': str(customer.id),
            'data': OrderSerializer(order).data,
        }, status=status.HTTP_201_CREATED)


class MyOrdersView(ShopAPIView):
    permission_classes = [IsCustomer]

    def get(self, request):
        params, page, limit, offset = page_params(request.query_params)
        rows, total = self.orders.list_orders(
            customer_id=request.user.id, status=status_filter(params), offset=offset, limit=limit,
        )
        return Response({'success': True, 'data': rows, 'pagination': pagination(page, limit, total)})


class TrackOrderView(ShopAPIView):

    def get(self, request, order_id):
        return Response({'success': True, 'data': self.orders.track_order(order_id)})


# ─────────────────────────────────────────
#  Cart
# ─────────────────────────────────────────
class CartView(ShopAPIView):
    permission_classes = [IsCustomer]

    def post(self, request):
        body = CartAddIn(data=request.data)
        body.is_valid(raise_exception=True)
        item = self.cart.add_to_cart(request.user.id, body.validated_data['product_id'], body.validated_data['quantity'])
        return Response({
            'success': True,
            'message': 'Item added to cart',
            'data': CartItemSerializer(item).data,
        })

    def get(self, request):
        data = [
            {**ProductSerializer(product).data, 'cart_quantity': quantity}
            for product, quantity in self.cart.get_cart(request.user.id)
        ]
        return Response({'success': True, 'data': data})


class CartItemView(ShopAPIView):
    permission_classes = [IsCustomer]

    def delete(self, request, product_id):
        self.cart.remove_from_cart(request.user.id, product_id)
        return Response({'success': True, 'message': 'Item removed from cart'})


# ─────────────────────────────────────────
#  Admin
# ─────────────────────────────────────────
class AdminOrderListView(ShopAPIView):
    permission_classes = [IsShopAdmin]

    def get(self, request):
        params, page, limit, offset = page_params(request.query_params)
        rows, total = self.orders.list_orders(
            status=status_filter(params), offset=offset, limit=limit, with_customer=True,
        )
        return Response({'success': True, 'data': rows, 'pagination': pagination(page, limit, total)})


class AdminOrderDetailView(ShopAPIView):
    permission_classes = [IsShopAdmin]

    def get(self, request, order_id):
        return Response({'success': True, 'data': self.orders.get_order_detail(order_id)})


class AdminOrderStatusView(ShopAPIView):
    permission_classes = [IsShopAdmin]

    def put(self, request, order_id):
        body = OrderStatusIn(data=request.data)
        body.is_valid(raise_exception=True)
        order = OrderStatusService(self.repository).update_status(order_id, body.validated_data['status'])
        return Response({
            'success': True,
            'message': 'Order status updated successfully',
            'data': OrderSerializer(order).data,
        })


class AdminProductCreateView(ShopAPIView):
    permission_classes = [IsShopAdmin]

    def post(self, request):
        body = ProductCreateSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        product = body.save()
        logger.info("ADMIN - product %s created (stock %d)", product.id, product.stock_quantity)
        return Response({
            'success': True,
            'message': 'Product added successfully',
            'data': ProductSerializer(product).data,
        }, status=status.HTTP_201_CREATED)


class ProductLookupMixin:

    def get_product(self, product_id):
        product = self.repository.products().filter(pk=product_id).first()
        if product is None:
            raise NotFoundError('Product not found')
        return product


class AdminProductView(ProductLookupMixin, ShopAPIView):
    permission_classes = [IsShopAdmin]

    def put(self, request, product_id):
        body = ProductUpdateSerializer(self.get_product(product_id), data=request.data, partial=True)
        body.is_valid(raise_exception=True)
        product = body.save()
        return Response({
            'success': True,
            'message': 'Product updated successfully',
            'data': ProductSerializer(product).data,
        })

    def delete(self, request, product_id):
        # Soft delete; order history keeps pointing at the row.
        updated = self.repository.products().filter(pk=product_id).update(is_active=False)
        if not updated:
            raise NotFoundError('Product not found')
        return Response({'success': True, 'message': 'Product deleted successfully'})


class AdminProductRestockView(ProductLookupMixin, ShopAPIView):
    permission_classes = [IsShopAdmin]

    def post(self, request, product_id):
        body = RestockIn(data=request.data)
        body.is_valid(raise_exception=True)
        product = self.get_product(product_id)
        StockLedger(self.repository).release(product.pk, body.validated_data['quantity'])
        product.refresh_from_db(fields=['stock_quantity'])
        return Response({
            'success': True,
            'message': 'Stock updated successfully',
            'data': ProductSerializer(product).data,
        })


class AdminAnalyticsView(ShopAPIView):
    permission_classes = [IsShopAdmin]

    def get(self, request):
        return Response({'success': True, 'data': AnalyticsService().get_summary()})


class AdminCustomerListView(ShopAPIView):
    permission_classes = [IsShopAdmin]

    def get(self, request):
        params, page, limit, offset = page_params(request.query_params)
        queryset = (
            self.repository.customers()
            .values('id', 'name', 'phone', 'email', 'created_at')
            .order_by('-created_at', 'id')
        )
        rows, total = self.repository.paginate(queryset, offset, limit)
        return Response({
            'success': True,
            'data': [{**row, 'id': str(row['id'])} for row in rows],
            'pagination': pagination(page, limit, total),
        })

