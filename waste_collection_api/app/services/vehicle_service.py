"""
Business logic for vehicles.

A vehicle's maximum capacity bounds the volume of every service record
it is used for.  Capacity and fuel consumption must be positive and
the plate must be unique.
"""

import logging
from typing import List, Optional

from ..core.errors import NotFoundError, ValidationError
from ..core.store import EntityStore
from ..schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from .rules import require_positive

logger = logging.getLogger(__name__)

TABLE = "vehicles"


class VehicleService:
    """Service for managing the vehicle fleet."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def _ensure_plate_free(self, plate: str, vehicle_id: Optional[int] = None) -> None:
        owner = self.store.find_one(TABLE, plate=plate)
        if owner is not None and owner["id"] != vehicle_id:
            logger.warning("Rejected duplicate plate %s", plate)
            raise ValidationError(f"A vehicle with plate {plate} already exists.")

    async def create_vehicle(self, data: VehicleCreate) -> VehicleRead:
        require_positive(data.max_capacity_m3, "maximum capacity")
        require_positive(data.fuel_consumption, "fuel consumption")
        self._ensure_plate_free(data.plate)
        row = self.store.create(TABLE, data.model_dump())
        logger.info("Created vehicle %s (%s)", row["id"], data.plate)
        return VehicleRead(**row)

    async def list_vehicles(self) -> List[VehicleRead]:
        return [VehicleRead(**row) for row in self.store.find_all(TABLE)]

    async def get_vehicle(self, vehicle_id: int) -> Optional[VehicleRead]:
        row = self.store.find_by_id(TABLE, vehicle_id)
        return VehicleRead(**row) if row else None

    async def update_vehicle(self, vehicle_id: int, data: VehicleUpdate) -> VehicleRead:
        """Apply the supplied fields to an existing vehicle.

        Lowering the capacity does not revisit service records already
        stored for the vehicle; they are checked again only when
        updated.
        """
        changes = data.model_dump(exclude_none=True)
        if "max_capacity_m3" in changes:
            require_positive(changes["max_capacity_m3"], "maximum capacity")
        if "fuel_consumption" in changes:
            require_positive(changes["fuel_consumption"], "fuel consumption")
        existing = self.store.find_by_id(TABLE, vehicle_id)
        if existing is None:
            raise NotFoundError("vehicle", vehicle_id)
        if "plate" in changes:
            self._ensure_plate_free(changes["plate"], vehicle_id)
        if not changes:
            return VehicleRead(**existing)
        row = self.store.update(TABLE, vehicle_id, changes)
        logger.info("Updated vehicle %s: %s", vehicle_id, sorted(changes))
        return VehicleRead(**row)

    async def delete_vehicle(self, vehicle_id: int) -> VehicleRead:
        row = self.store.delete(TABLE, vehicle_id)
        logger.info("Deleted vehicle %s", vehicle_id)
        return VehicleRead(**row)
