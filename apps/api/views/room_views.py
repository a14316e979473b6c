"""
Room API Views
"""

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, status, filters
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from shared.common.permissions import IsAdminRole

from apps.core.models import Room
from apps.core.services import RoomService
from apps.api.serializers import RoomSerializer


class RoomViewSet(viewsets.ModelViewSet):
    """
    Rooms. Anyone authenticated may read; writes need the admin role and go
    through ``RoomService`` so the deletion policy applies.
    """

    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['floor']
    search_fields = ['name']
    ordering_fields = ['id', 'name', 'capacity', 'floor']
    ordering = ['id']

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.room_service = RoomService()

    def get_permissions(self):
        if self.action in ('create', 'update', 'partial_update', 'destroy'):
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def retrieve(self, request, pk=None):
        return Response(RoomSerializer(self.room_service.get_room(pk)).data)

    def create(self, request, *args, **kwargs):
        serializer = RoomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = self.room_service.create_room(**serializer.validated_data)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        room = self.room_service.get_room(kwargs.get('pk'))
        serializer = RoomSerializer(room, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        room = self.room_service.update_room(room.pk, **serializer.validated_data)
        return Response(RoomSerializer(room).data)

    def destroy(self, request, *args, **kwargs):
        self.room_service.delete_room(kwargs.get('pk'))
        return Response(status=status.HTTP_204_NO_CONTENT)
