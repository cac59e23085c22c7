"""
URL configuration for Room Booking Service
"""

from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.db import DatabaseError


def health_check(request):
    return JsonResponse({'status': 'ok', 'service': 'room-booking-service'})


def readiness_check(request):
    from django.db import connection
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        return JsonResponse({'status': 'ready', 'service': 'room-booking-service'})
    except DatabaseError as e:
        return JsonResponse({'status': 'not_ready', 'error': str(e)}, status=503)


urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health_check'),
    path('ready/', readiness_check, name='readiness_check'),
    path('api/v1/rooms/', include('apps.api.urls', namespace='api')),
]
