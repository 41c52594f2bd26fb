from django.urls import path
from . import views

urlpatterns = [
    path('services', views.ServiceRequestView.as_view(), name='service-create'),
    path('my-services', views.MyServicesView.as_view(), name='my-services'),
    path('quick-order', views.QuickOrderView.as_view(), name='quick-order'),
    path('track-service/<uuid:ticket_id>', views.TrackServiceView.as_view(), name='track-service'),
    path('admin/services', views.AdminServiceListView.as_view(), name='admin-services'),
    path('admin/services/<uuid:ticket_id>/status', views.AdminServiceStatusView.as_view(), name='admin-service-status'),
]
