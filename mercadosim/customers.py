"""Customers of the market: products bought, timings, queue and service state."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence

CYCLE_MINUTES = 1
"""Simulated minutes that pass in one simulation cycle."""

FIRST_BASE_CUSTOMER_ID = 1


@dataclass
class Product:
    """An item a customer can pick up and pay for."""

    id: int
    name: str
    price: float
    search_time: int
    payment_time: int


@dataclass
class CustomerRecord:
    """A known customer from the customer base: just an id and a name."""

    id: int
    name: str


class CustomerState(enum.Enum):
    """Where a customer is in the shopping process."""

    SHOPPING = "shopping"
    IN_QUEUE = "in_queue"
    IN_SERVICE = "in_service"
    SERVED = "served"


@dataclass
class Customer:
    """A customer moving through shopping, queueing and payment."""

    id: int = 0
    name: str = ""
    products: list[Product] = field(default_factory=list)
    state: CustomerState = CustomerState.SHOPPING
    register_id: int | None = None
    entered_at: int = 0
    expected_shopping_end: int = 0
    queue_entered_at: int | None = None
    service_started_at: int | None = None
    service_ended_at: int | None = None
    remaining_shopping: int = 0
    remaining_service: int = 0
    total_shopping_time: int = 0
    total_payment_time: int = 0
    received_offer: bool = False
    changed_queue: bool = False
    total_value: float = 0.0
    offer_value: float = 0.0
    offered_product_name: str = ""

    @property
    def n_products(self) -> int:
        """Number of products the customer carries."""
        return len(self.products)

    def compute_derived(self) -> None:
        """Recompute shopping time, payment time and total value from the products."""
        self.total_shopping_time = sum(p.search_time for p in self.products)
        self.total_payment_time = sum(p.payment_time for p in self.products)
        self.total_value = sum(p.price for p in self.products)

    def sort_products_by_price(self) -> None:
        """Order the products from cheapest to most expensive, keeping ties in place."""
        self.products.sort(key=lambda p: p.price)

    def enter_queue(self, instant: int) -> None:
        """Record that the customer joined a queue at the given instant."""
        self.queue_entered_at = instant
        self.register_id = None
        self.state = CustomerState.IN_QUEUE

    def wait_time(self, instant: int) -> int:
        """Time spent since joining a queue; 0 if never queued or instant is earlier."""
        if self.queue_entered_at is None or self.queue_entered_at < 0:
            return 0
        if instant < self.queue_entered_at:
            return 0
        return instant - self.queue_entered_at

    def start_service(self, instant: int) -> None:
        """Begin payment at a register."""
        self.service_started_at = instant
        self.remaining_service = self.total_payment_time
        self.state = CustomerState.IN_SERVICE

    def tick_service(self) -> None:
        """Advance payment by one cycle, never below zero; no effect unless in service."""
        if self.state is not CustomerState.IN_SERVICE:
            return
        if self.remaining_service > 0:
            self.remaining_service = max(self.remaining_service - CYCLE_MINUTES, 0)

    def service_finished(self) -> bool:
        """Whether the customer is in service with no payment time left."""
        return self.state is CustomerState.IN_SERVICE and self.remaining_service <= 0

    def finish_service(self, instant: int) -> None:
        """Mark the customer as served at the given instant."""
        self.service_ended_at = instant
        self.remaining_service = 0
        self.state = CustomerState.SERVED
        self.register_id = None

    def entitled_to_offer(self, max_wait: int, instant: int) -> bool:
        """Whether the customer has waited longer than max_wait and has no offer yet."""
        if self.received_offer:
            return False
        return self.wait_time(instant) > max_wait

    def apply_offer(self) -> None:
        """Give away the cheapest product, once."""
        if self.received_offer:
            return
        index = self.cheapest_product_index()
        if index is None:
            return
        product = self.products[index]
        self.received_offer = True
        self.offer_value = product.price
        self.offered_product_name = product.name

    def cheapest_product_index(self) -> int | None:
        """Index of the first cheapest product, or None with no products."""
        if not self.products:
            return None
        return min(range(len(self.products)), key=lambda i: self.products[i].price)

    def mark_queue_change(self) -> None:
        """Record that the customer has moved to another queue."""
        self.changed_queue = True


def next_base_customer_id(records: Sequence[CustomerRecord]) -> int:
    """Id following the last record in the customer base, or 1 if it is empty."""
    if not records:
        return FIRST_BASE_CUSTOMER_ID
    return records[-1].id + 1