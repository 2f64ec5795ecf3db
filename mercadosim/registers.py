"""Checkout registers: state, queue, current customer and sales totals."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from mercadosim.customers import Customer
from mercadosim.queues import CustomerQueue
from mercadosim.staff import Collaborator


class RegisterState(enum.Enum):
    """Operating state of a register."""

    CLOSED = "closed"
    OPEN = "open"
    CLOSING = "closing"


@dataclass
class Register:
    """A checkout register with its queue and running totals."""

    id: int
    state: RegisterState = RegisterState.CLOSED
    manual_control: bool = False
    auto_locked: bool = False
    queue: CustomerQueue = field(default_factory=CustomerQueue)
    current: Customer | None = None
    estimated_queue_time: int = 0
    served: int = 0
    products_sold: int = 0
    value_sold: float = 0.0
    products_offered: int = 0
    value_offered: float = 0.0
    operator: Collaborator | None = None
    history: list[Customer] = field(default_factory=list)

    def is_open(self) -> bool:
        """Whether the register is open."""
        return self.state is RegisterState.OPEN

    def is_closed(self) -> bool:
        """Whether the register is closed."""
        return self.state is RegisterState.CLOSED

    def is_closing(self) -> bool:
        """Whether the register is finishing its queue before closing."""
        return self.state is RegisterState.CLOSING

    def accepts_customers(self) -> bool:
        """Only an open register takes new customers."""
        return self.state is RegisterState.OPEN

    def has_customers(self) -> bool:
        """Whether someone is being served or waiting in the queue."""
        return self.current is not None or bool(self.queue)

    def remaining_current_time(self) -> int:
        """Payment time left for the customer being served, 0 if none."""
        if self.current is None:
            return 0
        return max(self.current.remaining_service, 0)

    def estimated_time(self) -> int:
        """Time left for the current customer plus payment times of everyone queued."""
        return self.remaining_current_time() + sum(
            customer.total_payment_time for customer in self.queue
        )

    def customer_count(self) -> int:
        """Customers queued plus the one being served."""
        return len(self.queue) + (1 if self.current is not None else 0)

    def refresh_estimate(self) -> int:
        """Store and return the current estimated time."""
        self.estimated_queue_time = self.estimated_time()
        return self.estimated_queue_time

    def add_customer(self, customer: Customer, instant: int) -> bool:
        """Queue a customer at the given instant; False if the register is not open."""
        if customer is None:
            raise ValueError("cannot add a missing customer")
        if not self.accepts_customers():
            return False
        customer.enter_queue(instant)
        customer.register_id = self.id
        self.queue.push(customer)
        self.refresh_estimate()
        return True

    def record_served(self, customer: Customer) -> None:
        """Add a finished customer to this register's totals and history."""
        self.served += 1
        self.products_sold += customer.n_products
        self.value_sold += customer.total_value
        if customer.received_offer:
            self.products_offered += 1
            self.value_offered += customer.offer_value
        self.history.append(customer)