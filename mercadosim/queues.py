"""First-in, first-out queue of customers waiting at a register."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator


class CustomerQueue:
    """A FIFO queue of customers, each identified by an ``id`` attribute."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def push(self, customer: Any) -> None:
        """Append a customer to the back of the queue."""
        if customer is None:
            raise ValueError("cannot queue a missing customer")
        self._items.append(customer)

    def pop(self) -> Any:
        """Remove and return the customer at the front; IndexError if empty."""
        if not self._items:
            raise IndexError("pop from an empty customer queue")
        return self._items.popleft()

    def remove_by_id(self, customer_id: int) -> bool:
        """Remove the first customer with the given id; return whether one was found."""
        for customer in self._items:
            if customer.id == customer_id:
                self._items.remove(customer)
                return True
        return False

    def clear(self) -> None:
        """Remove every customer from the queue."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)