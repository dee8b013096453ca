"""EntityResolver service - maps display names to Customer/Shipper IDs."""

import logging
from typing import Callable, Optional

from shipping_orders.db.repositories import CustomerRepository, ShipperRepository
from shipping_orders.services.orders.validators import NamePolicy, NameValidator

logger = logging.getLogger(__name__)


class EntityResolver:
    """
    Resolves customer and shipper names to store IDs, creating missing rows.

    Lookup happens before insert, so one process never creates two rows for
    the same exact name. Concurrent writers in separate processes can still
    race between the lookup and the insert.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        shipper_repo: ShipperRepository,
        name_validator: Optional[NameValidator] = None,
    ):
        """
        Args:
            customer_repo: Repository for customer operations
            shipper_repo: Repository for shipper operations
            name_validator: Validator applied before any lookup (lenient policy by default)
        """
        self.customer_repo = customer_repo
        self.shipper_repo = shipper_repo
        self.name_validator = name_validator or NameValidator(NamePolicy.LENIENT)

    def resolve_customer_id(self, name: str) -> int:
        """
        Return the ID of the named customer, creating it if needed.

        Raises:
            InvalidNameException: If the name is invalid (no store access happens)
            StoreException: If a store operation fails
        """
        return self._resolve(
            name,
            field="customer_name",
            find=self.customer_repo.find_id_by_name,
            create=self.customer_repo.create,
        )

    def resolve_shipper_id(self, name: str) -> int:
        """
        Return the ID of the named shipper, creating it if needed.

        Raises:
            InvalidNameException: If the name is invalid (no store access happens)
            StoreException: If a store operation fails
        """
        return self._resolve(
            name,
            field="shipper_name",
            find=self.shipper_repo.find_id_by_name,
            create=self.shipper_repo.create,
        )

    def _resolve(
        self,
        name: str,
        field: str,
        find: Callable[[str], Optional[int]],
        create: Callable[[str], int],
    ) -> int:
        self.name_validator.check(name, field=field)

        existing_id = find(name)
        if existing_id is not None:
            logger.debug(f"Found existing {field} {name!r}: {existing_id}")
            return existing_id

        new_id = create(name)
        logger.info(f"Created {field} {name!r} with ID {new_id}")
        return new_id
