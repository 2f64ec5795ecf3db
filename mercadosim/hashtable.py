"""Chained hash table of customers keyed by customer id."""

from __future__ import annotations

from typing import Any


def hash_index(key: int, n_buckets: int) -> int:
    """Return the bucket index for a key; 0 when there are no buckets."""
    if n_buckets <= 0:
        return 0
    return abs(key) % n_buckets


class CustomerTable:
    """Customers stored in a fixed number of buckets, newest first within a bucket."""

    def __init__(self, n_buckets: int) -> None:
        self.n_buckets = max(n_buckets, 0)
        self._buckets: list[list[tuple[int, Any]]] = [[] for _ in range(self.n_buckets)]
        self._count = 0

    def _bucket(self, key: int) -> list[tuple[int, Any]] | None:
        if self.n_buckets <= 0:
            return None
        return self._buckets[hash_index(key, self.n_buckets)]

    def insert(self, customer: Any) -> bool:
        """Add a customer under its id; return False if the id is taken or there are no buckets."""
        if customer is None:
            raise ValueError("cannot insert a missing customer")
        bucket = self._bucket(customer.id)
        if bucket is None or customer.id in self:
            return False
        bucket.insert(0, (customer.id, customer))
        self._count += 1
        return True

    def get(self, key: int) -> Any | None:
        """Return the customer stored under key, or None."""
        bucket = self._bucket(key)
        if bucket is None:
            return None
        for stored_key, customer in bucket:
            if stored_key == key:
                return customer
        return None

    def remove(self, key: int) -> bool:
        """Remove the customer stored under key; return whether one was removed."""
        bucket = self._bucket(key)
        if bucket is None:
            return False
        for position, (stored_key, _) in enumerate(bucket):
            if stored_key == key:
                del bucket[position]
                self._count -= 1
                return True
        return False

    def clear(self) -> None:
        """Drop every stored customer, keeping the buckets."""
        for bucket in self._buckets:
            bucket.clear()
        self._count = 0

    def __contains__(self, key: int) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return self._count