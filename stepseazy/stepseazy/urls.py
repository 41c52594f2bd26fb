from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('apps.shop.urls')),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.repairs.urls')),
]
