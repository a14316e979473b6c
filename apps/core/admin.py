from django.contrib import admin
from .models import Room, Reservation, User


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'capacity', 'floor']
    list_filter = ['floor']
    search_fields = ['name']


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ['id', 'room', 'user', 'start_at', 'end_at', 'google_event_id']
    list_filter = ['room']
    raw_id_fields = ['room', 'user']


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['id', 'email', 'name', 'role']
    list_filter = ['role']
    search_fields = ['email', 'name']
