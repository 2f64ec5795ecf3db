"""Collaborators who operate the registers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass
class Collaborator:
    """A register operator and how many customers they have served."""

    id: int
    name: str
    served: int = 0
    register_id: int | None = None
    active: bool = False

    def activate(self, register_id: int) -> None:
        """Put the collaborator to work at the given register."""
        self.active = True
        self.register_id = register_id

    def deactivate(self) -> None:
        """Take the collaborator off duty, keeping the register association."""
        self.active = False

    def record_service(self) -> None:
        """Count one more customer served."""
        self.served += 1


def find_by_id(
    collaborators: Iterable[Collaborator], collaborator_id: int
) -> Collaborator | None:
    """Return the first collaborator with the given id, or None."""
    return next((c for c in collaborators if c.id == collaborator_id), None)


def find_by_register(
    collaborators: Iterable[Collaborator], register_id: int
) -> Collaborator | None:
    """Return the first collaborator associated with the given register, or None."""
    return next((c for c in collaborators if c.register_id == register_id), None)