"""Customers still shopping, ordered by when they are expected to finish."""

from __future__ import annotations

import bisect
from typing import Any, Iterator


def finished_shopping(customer: Any, instant: int) -> bool:
    """Return whether the customer's expected shopping end has been reached."""
    return instant >= customer.expected_shopping_end


class ShoppingList:
    """Customers sorted by ``expected_shopping_end``; ties keep arrival order."""

    def __init__(self) -> None:
        self._items: list[Any] = []

    def insert(self, customer: Any) -> None:
        """Insert a customer after every customer finishing no later than it."""
        if customer is None:
            raise ValueError("cannot insert a missing customer")
        bisect.insort_right(
            self._items, customer, key=lambda c: c.expected_shopping_end
        )

    def peek(self) -> Any | None:
        """Return the customer due to finish first, or None if the list is empty."""
        return self._items[0] if self._items else None

    def pop(self) -> Any:
        """Remove and return the customer due to finish first; IndexError if empty."""
        if not self._items:
            raise IndexError("pop from an empty shopping list")
        return self._items.pop(0)

    def update_remaining(self, instant: int) -> None:
        """Set each customer's remaining shopping time as of the given instant."""
        for customer in self._items:
            customer.remaining_shopping = max(customer.expected_shopping_end - instant, 0)

    def clear(self) -> None:
        """Remove every customer."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)