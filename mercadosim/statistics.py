"""Running totals and derived figures of a market simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass
class Statistics:
    """Counters gathered while the simulation runs."""

    simulation_time: int = 0
    generated: int = 0
    served: int = 0
    products_sold: int = 0
    value_sold: float = 0.0
    products_offered: int = 0
    value_offered: float = 0.0
    queue_changes: int = 0
    auto_openings: int = 0
    auto_closings: int = 0
    wait_sum: float = 0.0
    average_wait: float = 0.0
    register_most_customers: int | None = None
    register_most_products: int | None = None
    operator_fewest_services: int | None = None
    operator_most_services: int | None = None

    @property
    def net_revenue(self) -> float:
        """Value sold minus the value given away in offers."""
        return self.value_sold - self.value_offered

    def record_generated(self) -> None:
        """Count one more customer generated."""
        self.generated += 1

    def record_served(self) -> None:
        """Count one more customer served."""
        self.served += 1

    def record_sale(self, quantity: int, value: float) -> None:
        """Add a sale of ``quantity`` products worth ``value``."""
        self.products_sold += quantity
        self.value_sold += value

    def record_offer(self, value: float) -> None:
        """Count one product given away, worth ``value``."""
        self.products_offered += 1
        self.value_offered += value

    def record_queue_change(self) -> None:
        """Count one customer moving to another queue."""
        self.queue_changes += 1

    def record_auto_opening(self) -> None:
        """Count one register opened automatically."""
        self.auto_openings += 1

    def record_auto_closing(self) -> None:
        """Count one register closed automatically."""
        self.auto_closings += 1

    def add_wait_time(self, wait: int) -> None:
        """Accumulate a customer's waiting time."""
        self.wait_sum += wait

    def compute_average_wait(self) -> float:
        """Update and return the mean wait per served customer (0 with none served)."""
        if self.served <= 0:
            self.average_wait = 0.0
        else:
            self.average_wait = self.wait_sum / self.served
        return self.average_wait

    def update_registers(self, registers: Iterable[Any]) -> None:
        """Find the registers that served most customers and sold most products.

        Ties go to the earlier register.
        """
        best_customers: Any = None
        best_products: Any = None
        for register in registers:
            if best_customers is None or register.served > best_customers.served:
                best_customers = register
            if best_products is None or register.products_sold > best_products.products_sold:
                best_products = register
        self.register_most_customers = best_customers.id if best_customers else None
        self.register_most_products = best_products.id if best_products else None

    def update_operators(self, registers: Iterable[Any]) -> None:
        """Find the operators with the fewest and the most customers served.

        Registers without an operator are skipped; ties go to the earlier register.
        """
        fewest: Any = None
        most: Any = None
        for register in registers:
            operator = register.operator
            if operator is None:
                continue
            if fewest is None or operator.served < fewest.served:
                fewest = operator
            if most is None or operator.served > most.served:
                most = operator
        self.operator_fewest_services = fewest.id if fewest else None
        self.operator_most_services = most.id if most else None