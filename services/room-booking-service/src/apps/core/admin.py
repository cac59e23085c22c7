from django.contrib import admin
from .models import Room, Booking, RecurringPattern

@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'capacity', 'status']
    list_filter = ['status', 'location']
    search_fields = ['name', 'room_number']

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'room', 'title', 'status', 'start_time', 'end_time']
    list_filter = ['status', 'meeting_type']

@admin.register(RecurringPattern)
class RecurringPatternAdmin(admin.ModelAdmin):
    list_display = ['id', 'room', 'frequency', 'interval', 'start_date', 'end_date']
