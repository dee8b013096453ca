"""
Name validation for customers and shippers.

Two policies exist:

- LENIENT: not empty, at most 30 characters, no digits. Used wherever a name
  is resolved against the store (OrderManager.add_order, bulk load,
  EntityResolver).
- STRICT: letters only, words separated by a single space, at most 30
  characters. Meant for interactive entry forms.
"""

import logging
import re
from enum import Enum

from shipping_orders.utils.error_handler import InvalidNameException

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 30

_DIGIT_PATTERN = re.compile(r"\d")
_STRICT_PATTERN = re.compile(r"[A-Za-z]+(?: [A-Za-z]+)*")


class NamePolicy(Enum):
    LENIENT = "lenient"
    STRICT = "strict"


def is_valid_name(name: str | None) -> bool:
    """Lenient check: non-empty, <= 30 chars, no digits."""
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    return _DIGIT_PATTERN.search(name) is None


def is_valid_strict_name(name: str | None) -> bool:
    """Strict check: letters and single interior spaces only, <= 30 chars."""
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    return _STRICT_PATTERN.fullmatch(name) is not None


def validate_name(name: str | None, policy: NamePolicy = NamePolicy.LENIENT) -> bool:
    """Check a name against the given policy."""
    if policy is NamePolicy.STRICT:
        return is_valid_strict_name(name)
    return is_valid_name(name)


class NameValidator:
    """
    Raising wrapper around a name policy.

    Used where a bad name must abort the operation (EntityResolver) rather
    than produce a boolean.
    """

    def __init__(self, policy: NamePolicy = NamePolicy.LENIENT):
        self.policy = policy

    def is_valid(self, name: str | None) -> bool:
        return validate_name(name, self.policy)

    def check(self, name: str | None, field: str = "name") -> str:
        """
        Validate a name and return it unchanged.

        Raises:
            InvalidNameException: If the name breaks the policy
        """
        if not self.is_valid(name):
            logger.debug(f"Rejected {field} {name!r} under {self.policy.value} policy")
            raise InvalidNameException(name, field=field, policy=self.policy.value)
        return name
