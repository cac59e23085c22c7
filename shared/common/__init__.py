# Shared Common Library for the Room Booking System
# Model mixins, validators, middleware and the DRF exception handler
# used by the booking services.

__version__ = "1.0.0"

from .validators import (
    validate_uuid,
    validate_time_slot,
)

__all__ = [
    # Version
    '__version__',

    # Validators
    'validate_uuid',
    'validate_time_slot',
]
