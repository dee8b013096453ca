"""
OrderValidator service for validating order input before it reaches the store.

Follows SRP: only validation, no persistence.
"""

import logging

from shipping_orders.services.orders.validators.name_validator import NamePolicy, NameValidator
from shipping_orders.utils.error_handler import ErrorCode, ValidationException

logger = logging.getLogger(__name__)

MAX_WEIGHT_LBS = 150.0
MAX_DISTANCE_MILES = 3000


class OrderValidator:
    """
    Validates the fields of a new or updated shipping order.

    Responsibilities:
    - Customer and shipper names (lenient policy by default)
    - Weight range 0 < weight <= 150 lb
    - Distance range 0 < distance <= 3000 mi
    """

    def __init__(self, name_policy: NamePolicy = NamePolicy.LENIENT):
        """
        Args:
            name_policy: Policy applied to customer and shipper names
        """
        self.name_validator = NameValidator(name_policy)

    def validate_new_order(self, customer_name: str, shipper_name: str, weight: float, distance: int) -> None:
        """
        Validate everything needed to create an order.

        Raises:
            ValidationException: If any field is invalid
        """
        self.name_validator.check(customer_name, field="customer_name")
        self.name_validator.check(shipper_name, field="shipper_name")
        self.validate_measurements(weight, distance)

    def validate_measurements(self, weight: float, distance: int) -> None:
        """
        Validate weight and distance ranges.

        Raises:
            ValidationException: If a value is outside its range
        """
        self._validate_weight(weight)
        self._validate_distance(distance)

    def is_valid_measurements(self, weight: float, distance: int) -> bool:
        try:
            self.validate_measurements(weight, distance)
        except ValidationException:
            return False
        return True

    def _validate_weight(self, weight: float) -> None:
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not 0 < weight <= MAX_WEIGHT_LBS:
            raise ValidationException(
                message=f"Weight must be greater than 0 and at most {MAX_WEIGHT_LBS:g} lb",
                field="weight",
                invalid_value=weight,
                expected_format=f"0 < weight <= {MAX_WEIGHT_LBS:g}",
                error_code=ErrorCode.VALUE_OUT_OF_RANGE,
            )

    def _validate_distance(self, distance: int) -> None:
        if isinstance(distance, bool) or not isinstance(distance, int) or not 0 < distance <= MAX_DISTANCE_MILES:
            raise ValidationException(
                message=f"Distance must be a whole number greater than 0 and at most {MAX_DISTANCE_MILES} mi",
                field="distance",
                invalid_value=distance,
                expected_format=f"0 < distance <= {MAX_DISTANCE_MILES}",
                error_code=ErrorCode.VALUE_OUT_OF_RANGE,
            )
