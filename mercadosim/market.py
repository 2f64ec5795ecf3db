"""The market: registers, customers and collaborators brought together."""

from __future__ import annotations

import dataclasses
import random
from typing import Iterable, Protocol, Sequence

from mercadosim.config import Config
from mercadosim.customers import Customer, CustomerRecord, CustomerState, Product
from mercadosim.hashtable import CustomerTable
from mercadosim.registers import Register, RegisterState
from mercadosim.shopping import ShoppingList
from mercadosim.staff import Collaborator, find_by_register
from mercadosim.statistics import Statistics

INITIAL_OPEN_REGISTERS = 2
"""Registers opened when the market starts."""

MAX_CUSTOMERS = 200
"""Most customers the market holds at once."""

HASH_BUCKETS = 50
"""Buckets of the customer table."""

MIN_PRODUCTS_PER_CUSTOMER = 1
DEFAULT_MAX_PRODUCTS_PER_CUSTOMER = Config().max_products_per_customer
DEFAULT_MIN_NEW_CUSTOMERS = Config().min_new_customers_per_cycle
DEFAULT_MAX_NEW_CUSTOMERS = Config().max_new_customers_per_cycle

ARRIVAL_CHANCE_PERCENT = 25
"""Chance, in percent, that new customers arrive in a cycle."""


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class Market:
    """State of one market simulation."""

    def __init__(
        self,
        config: Config | None = None,
        customer_records: Iterable[CustomerRecord] = (),
        products: Iterable[Product] = (),
        collaborators: Iterable[Collaborator] = (),
        rng: RandomSource | None = None,
    ) -> None:
        self.config = config if config is not None else Config()
        self.customer_records: list[CustomerRecord] = list(customer_records)
        self.products: list[Product] = list(products)
        self.collaborators: list[Collaborator] = list(collaborators)
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.time = 0
        self.next_customer_id = 1
        self.statistics = Statistics()
        self.customers = CustomerTable(HASH_BUCKETS)
        self.shopping = ShoppingList()
        self.registers: list[Register] = [
            Register(i) for i in range(max(self.config.n_registers, 0))
        ]
        for register in self.registers[:INITIAL_OPEN_REGISTERS]:
            register.state = RegisterState.OPEN
            register.manual_control = False
            register.auto_locked = False

    # Lookup and counting

    def register(self, register_id: int) -> Register:
        """Return the register with the given id; KeyError if there is none."""
        if not 0 <= register_id < len(self.registers):
            raise KeyError(f"no register with id {register_id}")
        return self.registers[register_id]

    def first_open_register(self) -> Register | None:
        """The open register with the lowest id, or None."""
        return next((r for r in self.registers if r.is_open()), None)

    def fastest_register(self) -> Register | None:
        """The accepting register with the least estimated time; ties go to the lowest id."""
        candidates = [r for r in self.registers if r.accepts_customers()]
        if not candidates:
            return None
        return min(candidates, key=lambda r: (r.estimated_time(), r.id))

    def count_open(self) -> int:
        """Number of open registers."""
        return sum(1 for r in self.registers if r.is_open())

    def count_closing(self) -> int:
        """Number of registers finishing their queue before closing."""
        return sum(1 for r in self.registers if r.is_closing())

    def count_customers_at_registers(self) -> int:
        """Customers queued or being served at any register."""
        return sum(r.customer_count() for r in self.registers)

    def count_customers(self) -> int:
        """Customers shopping plus those at the registers."""
        return len(self.shopping) + self.count_customers_at_registers()

    # Operators

    def _activate_operator(self, register: Register) -> None:
        collaborator = find_by_register(self.collaborators, register.id)
        if collaborator is None:
            return
        collaborator.activate(register.id)
        register.operator = collaborator

    def _deactivate_operator(self, register: Register) -> None:
        collaborator = find_by_register(self.collaborators, register.id)
        if collaborator is not None:
            collaborator.deactivate()
        register.operator = collaborator

    def assign_collaborators(self) -> None:
        """Pair collaborators with registers by position; only open registers' are active."""
        for register, collaborator in zip(self.registers, self.collaborators):
            collaborator.register_id = register.id
            register.operator = collaborator
            collaborator.active = register.is_open()

    # Opening and closing

    def open_register(self, register_id: int, manual: bool = False) -> bool:
        """Open a register; automatic requests are refused on manually controlled ones."""
        register = self.register(register_id)
        if manual:
            register.manual_control = True
            register.auto_locked = False
        elif register.manual_control:
            return False
        if register.is_open():
            return True
        register.state = RegisterState.OPEN
        self._activate_operator(register)
        register.refresh_estimate()
        return True

    def begin_closing(self, register_id: int, manual: bool = False) -> bool:
        """Stop a register taking customers, closing it at once if it has none.

        A manual request also moves the waiting customers to other registers.
        """
        register = self.register(register_id)
        if manual:
            register.manual_control = True
            register.auto_locked = True
        elif register.manual_control:
            return False
        else:
            register.manual_control = False
            register.auto_locked = False

        if register.is_closed():
            register.estimated_queue_time = 0
            self._deactivate_operator(register)
            return True
        if register.is_closing():
            return True

        register.state = RegisterState.CLOSING
        if manual:
            self.redistribute(register_id)
        register.refresh_estimate()
        if not register.has_customers():
            return self.close_register(register_id, manual)
        return True

    def close_register(self, register_id: int, manual: bool = False) -> bool:
        """Close a register for good; False while a customer is still being served."""
        register = self.register(register_id)
        if manual:
            register.manual_control = True
            register.auto_locked = True
        if register.is_closed():
            return True
        if register.current is not None:
            return False
        if register.queue:
            self.redistribute(register_id)
        register.state = RegisterState.CLOSED
        register.estimated_queue_time = 0
        if not manual and not register.manual_control:
            register.manual_control = False
            register.auto_locked = False
        self._deactivate_operator(register)
        return True

    def set_automatic(self, register_id: int) -> bool:
        """Hand a register back to automatic control; False if it already was."""
        register = self.register(register_id)
        if not register.manual_control:
            return False
        register.manual_control = False
        register.auto_locked = False
        return True

    # Customers at the registers

    def route_customer(self, customer: Customer) -> bool:
        """Queue a customer at the register with the shortest estimated wait."""
        if customer is None:
            raise ValueError("cannot route a missing customer")
        destination = self.fastest_register() or self.first_open_register()
        if destination is None:
            return False
        return destination.add_customer(customer, self.time)

    def redistribute(self, register_id: int) -> int:
        """Move a register's waiting customers elsewhere; return how many moved.

        Stops at the first customer who cannot be placed, who goes back to the queue.
        """
        origin = self.register(register_id)
        moved = 0
        while origin.queue:
            customer = origin.queue.pop()
            customer.register_id = None
            if not self.route_customer(customer):
                origin.queue.push(customer)
                break
            moved += 1
        origin.refresh_estimate()
        return moved

    def start_service_if_needed(self, register: Register) -> bool:
        """Start serving the next queued customer if the register is free."""
        if register.current is not None:
            return False
        if not register.queue:
            if register.is_closing():
                self.close_register(register.id, False)
            register.refresh_estimate()
            return False
        if not register.is_open() and not register.is_closing():
            return False
        customer = register.queue.pop()
        register.current = customer
        customer.register_id = register.id
        customer.start_service(self.time)
        register.refresh_estimate()
        return True

    def finish_service_if_done(self, register: Register) -> bool:
        """Finish the current customer if payment is complete, updating all totals."""
        customer = register.current
        if customer is None:
            return False
        if not customer.service_finished():
            register.refresh_estimate()
            return False

        customer.finish_service(self.time)
        register.record_served(customer)
        if customer.received_offer:
            self.statistics.record_offer(customer.offer_value)
        self.statistics.record_served()
        self.statistics.record_sale(customer.n_products, customer.total_value)
        started = customer.service_started_at
        self.statistics.add_wait_time(
            customer.wait_time(started if started is not None else self.time)
        )
        if register.operator is not None:
            register.operator.record_service()
        self.customers.remove(customer.id)

        register.current = None
        register.refresh_estimate()
        if register.is_closing() and not register.has_customers():
            self.close_register(register.id, False)
        return True

    # Customer generation

    def new_customer(self) -> Customer:
        """Create a customer entering the market now, with the next generated id."""
        customer = Customer(
            id=self.next_customer_id,
            state=CustomerState.SHOPPING,
            entered_at=self.time,
        )
        self.next_customer_id += 1
        return customer

    def _product_count(self) -> int:
        maximum = self.config.max_products_per_customer
        if maximum < MIN_PRODUCTS_PER_CUSTOMER:
            maximum = DEFAULT_MAX_PRODUCTS_PER_CUSTOMER
        return self.rng.randint(MIN_PRODUCTS_PER_CUSTOMER, maximum)

    def _new_customer_count(self) -> int:
        minimum = self.config.min_new_customers_per_cycle
        maximum = self.config.max_new_customers_per_cycle
        if minimum < 0:
            minimum = DEFAULT_MIN_NEW_CUSTOMERS
        if maximum < minimum:
            maximum = DEFAULT_MAX_NEW_CUSTOMERS
        return self.rng.randint(minimum, maximum)

    def _pick(self, items: Sequence[object]) -> object:
        return items[self.rng.randint(0, len(items) - 1)]

    def random_customer(self) -> Customer | None:
        """Build a customer from a random base record with random products.

        Returns None when there are no records or no products to draw from.
        """
        if not self.customer_records or not self.products:
            return None
        record = self._pick(self.customer_records)
        customer = self.new_customer()
        customer.id = record.id
        customer.name = record.name
        customer.products = [
            dataclasses.replace(self._pick(self.products))
            for _ in range(self._product_count())
        ]
        if not customer.products:
            return None
        customer.sort_products_by_price()
        customer.compute_derived()
        customer.remaining_shopping = customer.total_shopping_time
        customer.remaining_service = customer.total_payment_time
        customer.expected_shopping_end = customer.entered_at + customer.total_shopping_time
        return customer

    def generate_customers(self) -> int:
        """Maybe let new customers in this cycle; return how many entered."""
        if len(self.customers) >= MAX_CUSTOMERS:
            return 0
        if self.rng.randint(1, 100) > ARRIVAL_CHANCE_PERCENT:
            return 0
        generated = 0
        for _ in range(self._new_customer_count()):
            if len(self.customers) >= MAX_CUSTOMERS:
                break
            customer = self.random_customer()
            if customer is None:
                continue
            if not self.customers.insert(customer):
                continue
            self.shopping.insert(customer)
            self.statistics.record_generated()
            generated += 1
        return generated