from django.urls import path
from . import views

urlpatterns = [
    path('health', views.health, name='health'),
    path('products', views.ProductListView.as_view(), name='product-list'),
    path('products/<uuid:product_id>', views.ProductDetailView.as_view(), name='product-detail'),
    path('orders', views.OrderCreateView.as_view(), name='order-create'),
    path('my-orders', views.MyOrdersView.as_view(), name='my-orders'),
    path('guest-checkout', views.GuestCheckoutView.as_view(), name='guest-checkout'),
    path('track-order/<uuid:order_id>', views.TrackOrderView.as_view(), name='track-order'),
    path('cart', views.CartView.as_view(), name='cart'),
    path('cart/<uuid:product_id>', views.CartItemView.as_view(), name='cart-item'),
    path('admin/orders', views.AdminOrderListView.as_view(), name='admin-orders'),
    path('admin/orders/<uuid:order_id>', views.AdminOrderDetailView.as_view(), name='admin-order-detail'),
    path('admin/orders/<uuid:order_id>/status', views.AdminOrderStatusView.as_view(), name='admin-order-status'),
    path('admin/products', views.AdminProductCreateView.as_view(), name='admin-products'),
    path('admin/products/<uuid:product_id>', views.AdminProductView.as_view(), name='admin-product'),
    path('admin/products/<uuid:product_id>/restock', views.AdminProductRestockView.as_view(), name='admin-product-restock'),
    path('admin/analytics', views.AdminAnalyticsView.as_view(), name='admin-analytics'),
    path('admin/customers', views.AdminCustomerListView.as_view(), name='admin-customers'),
]
