from django.db import migrations, models


class Migration(migrations.Migration):
    """
    Add indexes for the checkout and listing paths:
      - shop_order.status                  (admin filter WHERE status = ...)
      - shop_order.(created_at, id) desc   (stable pagination order)
      - shop_order.(customer, created_at)  (my-orders listing)
      - shop_product.category              (catalog filter)
      - shop_product.is_active             (WHERE is_active = 1)
    """

    dependencies = [
        ('shop', '0001_initial'),
    ]

    operations = [
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['status'], name='shop_order_status_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['-created_at', '-id'], name='shop_order_created_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['customer', '-created_at'], name='shop_order_customer_idx'),
        ),
        migrations.AddIndex(
            model_name='product',
            index=models.Index(fields=['category'], name='shop_product_category_idx'),
        ),
        migrations.AddIndex(
            model_name='product',
            index=models.Index(fields=['is_active'], name='shop_product_active_idx'),
        ),
    ]
