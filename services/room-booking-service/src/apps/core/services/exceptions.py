# services/room-booking-service/src/apps/core/services/exceptions.py
"""
Room Booking Service Exceptions

Custom exceptions for availability, recurrence and booking operations.
"""

from typing import Optional, Dict, Any, List


class BookingServiceError(Exception):
    """Base exception for booking service errors."""

    def __init__(
        self,
        message: str,
        code: str = "BOOKING_SERVICE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidWindowError(BookingServiceError):
    """Raised when a time window does not start before it ends."""

    def __init__(self, message: str = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Start time must be before end time",
            code="INVALID_WINDOW",
            details=details
        )


class InvalidRecurrenceRuleError(BookingServiceError):
    """Raised when a recurrence rule is malformed."""

    def __init__(
        self,
        message: str,
        field: str = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code="INVALID_RECURRENCE_RULE",
            details=error_details
        )


class DataSourceUnavailableError(BookingServiceError):
    """
    Raised when bookings cannot be read.

    Availability is unknown in this case; callers must not treat it as
    available or unavailable.
    """

    def __init__(self, message: str = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Booking data source is unavailable",
            code="DATA_SOURCE_UNAVAILABLE",
            details=details
        )


class BookingNotFoundError(BookingServiceError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str = None, message: str = None):
        super().__init__(
            message=message or f"Booking {booking_id} not found",
            code="BOOKING_NOT_FOUND",
            details={"booking_id": str(booking_id)}
        )


class RoomNotFoundError(BookingServiceError):
    """Raised when a room is not found."""

    def __init__(self, room_id: str = None, message: str = None):
        super().__init__(
            message=message or f"Room {room_id} not found",
            code="ROOM_NOT_FOUND",
            details={"room_id": str(room_id)}
        )


class RoomUnavailableError(BookingServiceError):
    """Raised when a room does not accept bookings (maintenance, inactive)."""

    def __init__(self, room_id: str = None, status: str = None):
        super().__init__(
            message=f"Room {room_id} is not available for booking ({status})",
            code="ROOM_UNAVAILABLE",
            details={"room_id": str(room_id), "status": status}
        )


class BookingConflictError(BookingServiceError):
    """Raised when a booking overlaps an existing reservation."""

    def __init__(self, message: str = None, conflicts: Optional[List[Any]] = None):
        self.conflicts = conflicts or []
        super().__init__(
            message=message or "The room is not available during the selected time period",
            code="BOOKING_CONFLICT",
            details={"conflict_ids": [str(c.id) for c in self.conflicts]}
        )


class BookingValidationError(BookingServiceError):
    """Raised when booking data validation fails."""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message=message,
            code="BOOKING_VALIDATION_ERROR",
            details={"field": field} if field else None
        )


class BookingStateError(BookingServiceError):
    """Raised for an invalid booking state transition."""

    def __init__(self, message: str, current_status: str = None):
        super().__init__(
            message=message,
            code="INVALID_BOOKING_STATE",
            details={"current_status": current_status} if current_status else None
        )
