"""URL configuration for Room Reservation Service."""
from django.contrib import admin
from django.urls import path, include

from shared.common.health import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('apps.api.urls')),
    path('health/', health_check, name='health'),
]
