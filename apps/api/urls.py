"""
Room Reservation API URL Configuration
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from shared.common.health import health_check

from .views import (
    ReservationViewSet,
    DailyAvailabilityView,
    RoomViewSet,
    CurrentUserView,
)

app_name = 'api'

router = DefaultRouter()
router.register(r'reservations', ReservationViewSet, basename='reservation')
router.register(r'rooms', RoomViewSet, basename='room')

urlpatterns = [
    path('', include(router.urls)),
    path('availability/', DailyAvailabilityView.as_view(), name='availability'),
    path('users/me/', CurrentUserView.as_view(), name='current-user'),
    path('health/', health_check, name='health'),
]
