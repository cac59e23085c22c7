# services/room-booking-service/src/apps/core/models/booking.py
"""
Booking Model

Room reservations and their status workflow.
"""

from django.db import models
from django.utils import timezone

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """
    Booking of a room for a time period.

    Bookings are confirmed on creation. Cancelled bookings are kept for
    history but never block the room.
    """

    class Status(models.TextChoices):
        CONFIRMED = 'confirmed', 'Confirmed'
        CANCELLED = 'cancelled', 'Cancelled'
        COMPLETED = 'completed', 'Completed'

    class MeetingType(models.TextChoices):
        INTERNAL = 'internal', 'Internal Meeting'
        CLIENT = 'client', 'Client Meeting'
        INTERVIEW = 'interview', 'Interview'
        TRAINING = 'training', 'Training'
        OTHER = 'other', 'Other'

    room = models.ForeignKey(
        'core.Room',
        on_delete=models.CASCADE,
        related_name='bookings'
    )
    user_id = models.UUIDField(db_index=True)

    # Description
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    meeting_type = models.CharField(
        max_length=20,
        choices=MeetingType.choices,
        blank=True,
        null=True
    )
    attendees = models.JSONField(default=list, blank=True)
    equipment_needed = models.JSONField(default=list, blank=True)
    special_requests = models.TextField(blank=True, null=True)

    # Time
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField()

    # Status
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
        db_index=True
    )

    # Cancellation
    cancelled_at = models.DateTimeField(blank=True, null=True)
    cancellation_reason = models.TextField(blank=True, null=True)

    # Recurring
    recurring_pattern = models.ForeignKey(
        'core.RecurringPattern',
        on_delete=models.SET_NULL,
        related_name='bookings',
        blank=True,
        null=True
    )

    class Meta:
        db_table = 'bookings'
        ordering = ['start_time']
        indexes = [
            models.Index(fields=['room', 'start_time', 'end_time']),
            models.Index(fields=['user_id', 'start_time']),
            models.Index(fields=['status', 'start_time']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F('start_time')),
                name='valid_booking_times'
            ),
        ]

    def __str__(self):
        return f"{self.title}: {self.start_time.strftime('%Y-%m-%d %H:%M')}"

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def duration_minutes(self) -> int:
        """Duration in minutes."""
        return int((self.end_time - self.start_time).total_seconds() / 60)

    @property
    def is_recurring(self) -> bool:
        return self.recurring_pattern_id is not None

    @property
    def can_cancel(self) -> bool:
        """Check if booking can be cancelled."""
        return self.status == self.Status.CONFIRMED

    @property
    def can_modify(self) -> bool:
        return self.status == self.Status.CONFIRMED

    # ==========================================================================
    # Status Transitions
    # ==========================================================================

    def cancel(self, reason: str = None):
        """Cancel the booking."""
        self.status = self.Status.CANCELLED
        self.cancelled_at = timezone.now()
        self.cancellation_reason = reason or None
        self.save(update_fields=[
            'status', 'cancelled_at', 'cancellation_reason', 'updated_at'
        ])

    def complete(self):
        """Mark the booking as completed."""
        self.status = self.Status.COMPLETED
        self.save(update_fields=['status', 'updated_at'])
