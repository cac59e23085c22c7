# services/room-booking-service/src/apps/core/models/recurring_pattern.py
"""
Recurring Pattern Model

Stores the recurrence rule behind a series of room bookings.
"""

from django.db import models

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class RecurringPattern(UUIDPrimaryKeyMixin, TimestampMixin, models.Model):
    """
    Recurring pattern for creating repeated bookings.

    Supports daily, weekly and monthly recurrence. Weekly patterns may
    restrict occurrences to ISO weekdays (1=Monday ... 7=Sunday).
    """

    class Frequency(models.TextChoices):
        DAILY = 'daily', 'Daily'
        WEEKLY = 'weekly', 'Weekly'
        MONTHLY = 'monthly', 'Monthly'

    user_id = models.UUIDField(db_index=True)
    room = models.ForeignKey(
        'core.Room',
        on_delete=models.CASCADE,
        related_name='recurring_patterns'
    )

    # Recurrence Rule
    frequency = models.CharField(
        max_length=20,
        choices=Frequency.choices
    )
    interval = models.PositiveIntegerField(default=1)
    days_of_week = models.JSONField(
        default=list,
        blank=True,
        help_text="ISO weekdays for weekly patterns (1=Monday, 7=Sunday)"
    )

    # Range
    start_date = models.DateField()
    end_date = models.DateField(blank=True, null=True)
    max_occurrences = models.PositiveIntegerField(
        blank=True,
        null=True,
        help_text="Max number of occurrences"
    )

    # Time of Day
    start_time = models.TimeField()
    end_time = models.TimeField()

    class Meta:
        db_table = 'recurring_patterns'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_frequency_display()} pattern starting {self.start_date}"

    def to_rule(self):
        """Build the recurrence rule for this pattern."""
        from apps.core.services.recurrence import RecurrenceRule

        return RecurrenceRule(
            start_date=self.start_date,
            frequency=self.frequency,
            interval=self.interval,
            days_of_week=frozenset(self.days_of_week) if self.days_of_week else None,
            end_date=self.end_date,
            max_occurrences=self.max_occurrences,
        )

    @property
    def description(self) -> str:
        from apps.core.services.recurrence import describe_recurrence

        return describe_recurrence(self.to_rule())
