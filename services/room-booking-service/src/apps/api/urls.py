# services/room-booking-service/src/apps/api/urls.py
"""
Room Booking API URL Configuration

Defines all API routes for the room booking service.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    RoomViewSet,
    BookingViewSet,
    RecurrenceExpandView,
    RecurringPatternViewSet,
)

app_name = 'api'

# Create router and register viewsets
router = DefaultRouter()
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'bookings', BookingViewSet, basename='booking')
router.register(r'recurring', RecurringPatternViewSet, basename='recurring')

urlpatterns = [
    # Router URLs
    path('', include(router.urls)),

    # Recurrence
    path('recurrence/expand/', RecurrenceExpandView.as_view(), name='recurrence-expand'),
]
