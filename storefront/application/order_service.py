"""Order application service.

Orchestrates order placement and fulfilment:
- Assigning human-readable order IDs and sequential invoice numbers
- Updating product stock from the ordered cart lines
- Validating status changes against the order state machine
"""

import secrets
import string
from datetime import datetime
from typing import Any, Callable

import structlog

from storefront.catalog.repository import ProductRepository
from storefront.domain.exceptions import DuplicateError, InvalidIdentifierError
from storefront.domain.state_machines import OrderStatus, validate_order_transition
from storefront.infrastructure.database import BaseRepository, MongoDatabase, utcnow

logger = structlog.get_logger()

ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits
ORDER_ID_LENGTH = 6
MAX_ORDER_ID_ATTEMPTS = 5
MAX_INSERT_ATTEMPTS = 5
FIRST_INVOICE = 1000


def generate_order_id(now: datetime | None = None) -> str:
    """Generate an order ID in the form ``ORD-YYYYMMDD-XXXXXX``."""
    day = (now or utcnow()).strftime("%Y%m%d")
    code = "".join(secrets.choice(ORDER_ID_ALPHABET) for _ in range(ORDER_ID_LENGTH))
    return f"ORD-{day}-{code}"


class OrderRepository(BaseRepository):
    """Repository for orders."""

    collection_name = "orders"
    entity_type = "Order"
    unique_field = "order_id"

    def exists_with_order_id(self, order_id: str) -> bool:
        return self.find_one({"order_id": order_id}) is not None

    def next_invoice(self) -> int:
        """Next invoice number: highest existing plus one."""
        latest = self.find({"invoice": {"$exists": True}}, sort=[("invoice", -1)], limit=1)
        if not latest:
            return FIRST_INVOICE
        return latest[0]["invoice"] + 1


class OrderService:
    """Service for order operations.

    Example usage:
        service = OrderService(database)
        order = service.create_order({...})
        service.update_status(str(order["_id"]), OrderStatus.PROCESSING)
    """

    def __init__(
        self,
        database: MongoDatabase,
        order_id_factory: Callable[[], str] = generate_order_id,
    ) -> None:
        """Initialize service.

        Args:
            database: Storefront database.
            order_id_factory: Generator for human-readable order IDs.
        """
        self.repository = OrderRepository(database)
        self.products = ProductRepository(database)
        self.order_id_factory = order_id_factory

    def create_order(self, data: dict[str, Any]) -> dict[str, Any]:
        """Place an order.

        Orders without a user are flagged as guest orders. Each cart line
        decrements the stock of its product.

        Args:
            data: Validated order fields.

        Returns:
            The stored order.
        """
        order = self._insert_order(
            {
                "discount": 0,
                **data,
                "is_guest_order": not data.get("user"),
                "status": OrderStatus.PENDING.value,
            }
        )

        logger.info(
            "Order created",
            order_id=order["order_id"],
            invoice=order["invoice"],
            total_amount=order.get("total_amount"),
            is_guest_order=order["is_guest_order"],
        )

        self._update_stock(order)
        return order

    def list_orders(self) -> list[dict[str, Any]]:
        """All orders, newest first."""
        return self.repository.find(sort=[("created_at", -1)])

    def get_order(self, order_id: str) -> dict[str, Any]:
        """Get order by ID."""
        return self.repository.get_by_id(order_id)

    def update_status(self, order_id: str, status: OrderStatus) -> dict[str, Any]:
        """Move an order to a new status.

        Raises:
            NotFoundError: If the order does not exist.
            InvalidStateTransitionError: If the transition is not allowed.
        """
        order = self.repository.get_by_id(order_id)
        current = OrderStatus(order["status"])
        validate_order_transition(order_id, current, status)

        updated = self.repository.update_by_id(order_id, {"status": status.value})
        logger.info(
            "Order status updated",
            order_id=order["order_id"],
            from_status=current.value,
            to_status=status.value,
        )
        return updated

    def _insert_order(self, document: dict[str, Any]) -> dict[str, Any]:
        """Insert with a fresh order ID and invoice number.

        Numbers are read before the insert, so a concurrent order can take
        them first; the unique indexes reject the loser, which retries.
        """
        for attempt in range(1, MAX_INSERT_ATTEMPTS):
            numbered = self._with_numbers(document)
            try:
                return self.repository.insert(numbered)
            except DuplicateError:
                logger.warning(
                    "Order number taken, retrying",
                    attempt=attempt,
                    order_id=numbered["order_id"],
                    invoice=numbered["invoice"],
                )
        return self.repository.insert(self._with_numbers(document))

    def _with_numbers(self, document: dict[str, Any]) -> dict[str, Any]:
        return {
            **document,
            "order_id": self._unique_order_id(),
            "invoice": self.repository.next_invoice(),
        }

    def _unique_order_id(self) -> str:
        for _ in range(MAX_ORDER_ID_ATTEMPTS):
            order_id = self.order_id_factory()
            if not self.repository.exists_with_order_id(order_id):
                return order_id
        raise RuntimeError(
            f"Failed to generate unique order ID after {MAX_ORDER_ID_ATTEMPTS} attempts"
        )

    def _update_stock(self, order: dict[str, Any]) -> None:
        for line in order.get("cart", []):
            try:
                product = self.products.record_sale(line["product_id"], line["order_quantity"])
            except InvalidIdentifierError:
                product = None
            if product is None:
                logger.warning(
                    "Ordered product not found, stock not updated",
                    order_id=order["order_id"],
                    product_id=line["product_id"],
                )
