import random
from decimal import Decimal
from django.core.management.base import BaseCommand
from apps.shop.apps import get_repository
from apps.shop.exceptions import StockUnavailable
from apps.shop.models import Product, Order, OrderItem, CartItem
from apps.shop.services.guest_identity import GuestIdentityResolver
from apps.shop.services.order_assembler import OrderAssembler


PRODUCTS = [
    ('Fast USB Charger 20W', 'Fast charging for all smartphones', 'charger', '499.00', 50),
    ('Premium Wireless Earphones', 'Bluetooth 5.0, 20hrs battery', 'earphone', '699.00', 30),
    ('Designer Mobile Cover', 'Shockproof, all phone models', 'cover', '299.00', 100),
    ('Tempered Glass Screen Guard', '9H hardness, anti-scratch', 'screen', '199.00', 150),
    ('Type-C Fast Charging Cable', '3A fast charging, 1.5m length', 'cable', '249.00', 80),
]

CUSTOMERS = [
    ('Aarav Sharma', '9000000001'),
    ('Diya Patel', '9000000002'),
    ('Kabir Singh', '9000000003'),
    ('Meera Iyer', '9000000004'),
    ('Rohan Gupta', '9000000005'),
]

PAYMENT_METHODS = ['cod', 'cod', 'upi', 'card']


class Command(BaseCommand):
    help = 'Seed the sample catalog and optionally place random orders through the checkout path'

    def add_arguments(self, parser):
        parser.add_argument('--orders', type=int, default=0, help='Number of orders to place')
        parser.add_argument('--clear', action='store_true', help='Clear existing orders, carts and products first')

    def handle(self, *args, **options):
        if options['clear']:
            CartItem.objects.all().delete()
            OrderItem.objects.all().delete()
            Order.objects.all().delete()
            Product.objects.all().delete()
            self.stdout.write(self.style.WARNING('Cleared existing data.'))

        # Create products
        products = []
        for name, description, category, price, stock in PRODUCTS:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={
                    'description': description,
                    'category': category,
                    'price': Decimal(price),
                    'stock_quantity': stock,
                },
            )
            products.append(product)
        self.stdout.write(f'Products ready: {len(products)}')

        repository = get_repository()
        guests = GuestIdentityResolver(repository)
        assembler = OrderAssembler(repository)

        placed = rejected = 0
        for _ in range(options['orders']):
            customer = guests.resolve_guest_customer(*random.choice(CUSTOMERS))
            picks = random.sample(products, random.randint(1, 3))
            try:
                lines = assembler.quote_lines((product.pk, random.randint(1, 3)) for product in picks)
                assembler.place_order(
                    customer.pk, lines,
                    payment_method=random.choice(PAYMENT_METHODS),
                    delivery_address=customer.address or 'Store pickup',
                )
            except StockUnavailable as exc:
                rejected += 1
                self.stdout.write(self.style.WARNING(f'Skipped order: {exc.detail}'))
                continue
            placed += 1

        if options['orders']:
            self.stdout.write(self.style.SUCCESS(f'Placed {placed} orders ({rejected} rejected for stock).'))
