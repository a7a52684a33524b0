"""
Error taxonomy shared by the services and the HTTP layer.

Every failure a service reports is one of the classes below, all
derived from ``WasteCollectionError``.  The API layer maps each kind
to a status code in ``api/exception_handlers.py``; callers using the
services directly can handle them exhaustively.
"""

from decimal import Decimal
from typing import Any, Dict


class WasteCollectionError(Exception):
    """Base class for all errors raised by the services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message}


class ValidationError(WasteCollectionError):
    """Input violates a business invariant (non-positive value, duplicate plate)."""


class CapacityExceededError(ValidationError):
    """Collected volume is larger than the vehicle can carry."""

    def __init__(self, volume: Decimal, capacity: Decimal) -> None:
        super().__init__(
            f"Collected volume ({volume} m3) exceeds the vehicle's "
            f"maximum capacity ({capacity} m3)."
        )
        self.volume = volume
        self.capacity = capacity

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(volume=str(self.volume), capacity=str(self.capacity))
        return data


class NotFoundError(WasteCollectionError):
    """A referenced identifier does not resolve to an existing entity."""

    def __init__(self, entity: str, identifier: int) -> None:
        super().__init__(f"{entity.capitalize()} with id {identifier} not found.")
        self.entity = entity
        self.identifier = identifier

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(entity=self.entity, identifier=str(self.identifier))
        return data


class PersistenceError(WasteCollectionError):
    """The underlying store failed for a reason unrelated to business rules."""
