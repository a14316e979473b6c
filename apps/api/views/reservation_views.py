"""
Reservation API Views
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from shared.common.permissions import IsAdminRole

from apps.core.services import ReservationService
from apps.api.serializers import (
    ReservationDetailSerializer,
    ReservationCreateSerializer,
    ReservationOnBehalfSerializer,
    MyReservationsSerializer,
)

logger = logging.getLogger(__name__)


class ReservationViewSet(viewsets.ViewSet):
    """
    Booking, lookup and cancellation of room reservations.

    Business errors raised by the service propagate to the exception
    handler, which renders them with their error code.
    """

    permission_classes = [IsAuthenticated]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.reservation_service = ReservationService()

    def get_permissions(self):
        if self.action in ('on_behalf', 'by_room'):
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def create(self, request):
        """Book a room for the requester."""
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        reservation = self.reservation_service.create_reservation(
            user_email=request.user.email,
            room_id=data['room_id'],
            start_at=data.get('start_at'),
            end_at=data.get('end_at'),
            add_to_calendar=data.get('add_to_google_calendar', False),
        )
        return Response(
            ReservationDetailSerializer(reservation).data,
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, pk=None):
        reservation = self.reservation_service.get_reservation(pk)
        return Response(ReservationDetailSerializer(reservation).data)

    def destroy(self, request, pk=None):
        """Cancel a reservation. Owners cancel their own, admins any."""
        self.reservation_service.cancel_reservation(pk, request.user.email)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'], url_path='on-behalf')
    def on_behalf(self, request):
        """Book a room for another user (admin)."""
        serializer = ReservationOnBehalfSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        reservation = self.reservation_service.create_reservation_on_behalf(
            requester_email=request.user.email,
            beneficiary_email=data['user_email'],
            room_id=data['room_id'],
            start_at=data.get('start_at'),
            end_at=data.get('end_at'),
        )
        return Response(
            ReservationDetailSerializer(reservation).data,
            status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=['get'], url_path='my-reservations')
    def my_reservations(self, request):
        """Requester's reservations split into current, future and past."""
        buckets = self.reservation_service.get_my_reservations(request.user.email)
        return Response(MyReservationsSerializer(buckets).data)

    @action(detail=False, methods=['get'], url_path=r'room/(?P<room_id>[^/.]+)')
    def by_room(self, request, room_id=None):
        """All reservations of one room (admin)."""
        reservations = self.reservation_service.get_reservations_by_room(room_id, request.user.email)
        return Response(ReservationDetailSerializer(reservations, many=True).data)
