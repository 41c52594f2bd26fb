import logging
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.apps import apps
from django.conf import settings
from django.core.cache import cache
from django.db.models import Count, Q, Sum
from django.utils import timezone

from ..models import Customer, Order, Product

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Dashboard counters for the admin app. Cached briefly; read-only."""

    CACHE_KEY = 'shop_admin_analytics_v1'

    def get_summary(self):
        cached = cache.get(self.CACHE_KEY)
        if cached:
            logger.debug("ANALYTICS - loaded from cache")
            return cached
        summary = self._build_summary()
        cache.set(self.CACHE_KEY, summary, settings.SHOP_ANALYTICS_CACHE_SECONDS)
        return summary

    def invalidate(self):
        cache.delete(self.CACHE_KEY)

    def _build_summary(self):
        now = timezone.localtime()
        start_of_today = timezone.make_aware(datetime.combine(now.date(), time.min))
        start_of_tomorrow = start_of_today + timedelta(days=1)

        paid = Q(payment_status=Order.PaymentStatus.PAID)
        today = Q(created_at__gte=start_of_today, created_at__lt=start_of_tomorrow)
        totals = Order.objects.aggregate(
            today_revenue=Sum('total_amount', filter=paid & today),
            total_revenue=Sum('total_amount', filter=paid),
            total_orders=Count('id'),
            pending_orders=Count('id', filter=Q(status=Order.Status.PENDING)),
        )

        ServiceRequest = apps.get_model('repairs', 'ServiceRequest')

        return {
            'today_revenue': totals['today_revenue'] or Decimal('0'),
            'total_revenue': totals['total_revenue'] or Decimal('0'),
            'total_orders': totals['total_orders'],
            'pending_orders': totals['pending_orders'],
            'total_customers': Customer.objects.count(),
            'total_products': Product.objects.filter(is_active=True).count(),
            'pending_services': ServiceRequest.objects.filter(status=ServiceRequest.Status.PENDING).count(),
            'date': now.date().isoformat(),
        }
