"""
Validator services for names and order measurements.
"""

from .name_validator import (
    MAX_NAME_LENGTH,
    NamePolicy,
    NameValidator,
    is_valid_name,
    is_valid_strict_name,
    validate_name,
)
from .order_validator import MAX_DISTANCE_MILES, MAX_WEIGHT_LBS, OrderValidator

__all__ = [
    "MAX_DISTANCE_MILES",
    "MAX_NAME_LENGTH",
    "MAX_WEIGHT_LBS",
    "NamePolicy",
    "NameValidator",
    "OrderValidator",
    "is_valid_name",
    "is_valid_strict_name",
    "validate_name",
]
