# services/room-booking-service/src/apps/core/models/room.py
"""
Room Model

Meeting rooms that can be reserved.
"""

from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Room(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """
    Bookable meeting room.

    Only rooms in AVAILABLE status accept new bookings; rooms under
    maintenance still show up in listings, inactive rooms do not.
    """

    class Status(models.TextChoices):
        AVAILABLE = 'available', 'Available'
        MAINTENANCE = 'maintenance', 'Under Maintenance'
        INACTIVE = 'inactive', 'Inactive'

    name = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    location = models.CharField(max_length=255)
    floor = models.CharField(max_length=50, blank=True, null=True)
    room_number = models.CharField(max_length=50, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    image_url = models.URLField(blank=True, null=True)

    amenities = models.JSONField(
        default=list,
        blank=True,
        help_text="Amenity names, e.g. projector, whiteboard"
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
        db_index=True
    )

    class Meta:
        db_table = 'rooms'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.location})"

    @property
    def is_bookable(self) -> bool:
        """Check if the room accepts new bookings."""
        return self.status == self.Status.AVAILABLE

    @classmethod
    def get_listed(cls):
        """Rooms that appear in listings and searches."""
        return cls.objects.exclude(status=cls.Status.INACTIVE)
