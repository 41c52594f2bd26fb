from django.apps import AppConfig


class ShopConfig(AppConfig):
    name = 'apps.shop'
    label = 'shop'
    default_auto_field = 'django.db.models.BigAutoField'

    repository = None

    def ready(self):
        # One repository per process; services receive it explicitly.
        from .repository import ShopRepository

        self.repository = ShopRepository()


def get_repository():
    from django.apps import apps

    return apps.get_app_config('shop').repository
