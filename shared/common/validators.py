"""
Shared Validators Module.

Validation helpers shared by the booking services.
"""
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from django.core.exceptions import ValidationError


# =============================================================================
# UUID VALIDATORS
# =============================================================================

def validate_uuid(value: Any, field_name: str = "value") -> UUID:
    """Validate and convert a value to UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError):
        raise ValidationError(f"Invalid UUID format for {field_name}")


# =============================================================================
# TIME VALIDATORS
# =============================================================================

def validate_time_slot(
    start_time: datetime,
    end_time: datetime,
    min_duration_minutes: int = 15,
    max_duration_hours: int = 24,
) -> None:
    """Validate a time slot's ordering and length."""
    if start_time >= end_time:
        raise ValidationError("Start time must be before end time")

    duration = end_time - start_time
    min_delta = timedelta(minutes=min_duration_minutes)
    max_delta = timedelta(hours=max_duration_hours)

    if duration < min_delta:
        raise ValidationError(f"Duration must be at least {min_duration_minutes} minutes")

    if duration > max_delta:
        raise ValidationError(f"Duration cannot exceed {max_duration_hours} hours")
