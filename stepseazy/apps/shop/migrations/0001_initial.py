import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('phone', models.CharField(max_length=15, unique=True)),
                ('email', models.EmailField(blank=True, max_length=100, null=True)),
                ('password', models.CharField(blank=True, max_length=255, null=True)),
                ('address', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'shop_customer',
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('category', models.CharField(
                    choices=[
                        ('charger', 'Charger'),
                        ('earphone', 'Earphone'),
                        ('cover', 'Cover'),
                        ('screen', 'Screen Guard'),
                        ('cable', 'Cable'),
                        ('other', 'Other'),
                    ],
                    default='other',
                    max_length=50,
                )),
                ('price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('stock_quantity', models.IntegerField(default=0)),
                ('images', models.JSONField(blank=True, default=list)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'shop_product',
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(stock_quantity__gte=0),
                        name='shop_product_stock_non_negative',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(price__gte=0),
                        name='shop_product_price_non_negative',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('status', models.CharField(
                    choices=[
                        ('pending', 'Pending'),
                        ('confirmed', 'Confirmed'),
                        ('processing', 'Processing'),
                        ('shipped', 'Shipped'),
                        ('delivered', 'Delivered'),
                        ('cancelled', 'Cancelled'),
                    ],
                    default='pending',
                    max_length=20,
                )),
                ('payment_status', models.CharField(
                    choices=[('pending', 'Pending'), ('paid', 'Paid')],
                    default='pending',
                    max_length=20,
                )),
                ('payment_method', models.CharField(
                    choices=[
                        ('cod', 'Cash on delivery'),
                        ('upi', 'UPI'),
                        ('card', 'Card'),
                        ('netbanking', 'Net banking'),
                    ],
                    default='cod',
                    max_length=50,
                )),
                ('delivery_address', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('customer', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='orders',
                    to='shop.customer',
                )),
            ],
            options={
                'db_table': 'shop_order',
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField()),
                ('price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('order', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='items',
                    to='shop.order',
                )),
                ('product', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='order_items',
                    to='shop.product',
                )),
            ],
            options={
                'db_table': 'shop_order_item',
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gt=0),
                        name='shop_order_item_quantity_positive',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='CartItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('customer', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='cart_items',
                    to='shop.customer',
                )),
                ('product', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='cart_items',
                    to='shop.product',
                )),
            ],
            options={
                'db_table': 'shop_cart_item',
                'constraints': [
                    models.UniqueConstraint(
                        fields=('customer', 'product'),
                        name='shop_cart_item_customer_product_uniq',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(quantity__gt=0),
                        name='shop_cart_item_quantity_positive',
                    ),
                ],
            },
        ),
    ]
