"""
Business logic for collection-service records.

This is the only service with rules spanning several entities.  On
every create and update the effective values are checked in a fixed
order, failing on the first violation:

1. the collected volume is strictly positive;
2. the vehicle exists;
3. the volume does not exceed the vehicle's maximum capacity;
4. the client exists;
5. the worker exists.

Only then is the cost derived as ``volume * client rate`` rounded
half-up to cents, and the record written with a single store call, so
a rejected request never leaves a partial write behind.

Two concurrent updates of the same record may both validate against a
capacity that changes in between; no locking is attempted.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from ..core.errors import CapacityExceededError, NotFoundError
from ..core.store import EntityStore
from ..schemas.client import ClientRead
from ..schemas.service_record import (
    ServiceRecordCreate,
    ServiceRecordRead,
    ServiceRecordUpdate,
)
from ..schemas.vehicle import VehicleRead
from ..schemas.worker import WorkerRead
from .rules import compute_cost, require_positive

logger = logging.getLogger(__name__)

TABLE = "service_records"

Row = Dict[str, Any]


class ServiceRecordService:
    """Service for creating, pricing and querying service records."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def _validate(self, data: ServiceRecordCreate) -> Tuple[Row, Row, Row]:
        """Run the validation chain and return the client, vehicle and worker rows."""
        require_positive(data.volume_m3, "collected volume")

        vehicle = self.store.find_by_id("vehicles", data.vehicle_id)
        if vehicle is None:
            raise NotFoundError("vehicle", data.vehicle_id)

        capacity = Decimal(vehicle["max_capacity_m3"])
        if data.volume_m3 > capacity:
            logger.warning(
                "Rejected volume %s m3 for vehicle %s with capacity %s m3",
                data.volume_m3, data.vehicle_id, capacity,
            )
            raise CapacityExceededError(data.volume_m3, capacity)

        client = self.store.find_by_id("clients", data.client_id)
        if client is None:
            raise NotFoundError("client", data.client_id)

        worker = self.store.find_by_id("workers", data.worker_id)
        if worker is None:
            raise NotFoundError("worker", data.worker_id)

        return client, vehicle, worker

    def _fields(self, data: ServiceRecordCreate, client: Row) -> Row:
        return {
            "client_id": data.client_id,
            "vehicle_id": data.vehicle_id,
            "worker_id": data.worker_id,
            "date": data.date,
            "volume_m3": data.volume_m3,
            "cost": compute_cost(data.volume_m3, Decimal(client["rate_per_m3"])),
        }

    @staticmethod
    def _to_read(row: Row, client: Optional[Row], vehicle: Optional[Row], worker: Optional[Row]) -> ServiceRecordRead:
        return ServiceRecordRead(
            **row,
            client=ClientRead(**client) if client else None,
            vehicle=VehicleRead(**vehicle) if vehicle else None,
            worker=WorkerRead(**worker) if worker else None,
        )

    @staticmethod
    def _merge(existing: Row, changes: ServiceRecordUpdate) -> ServiceRecordCreate:
        """Combine the stored record with the supplied fields.

        Every field not present in ``changes`` takes the stored value;
        the stored volume is read back from its exact text form.
        """
        supplied = changes.model_dump(exclude_none=True)
        effective = {
            "client_id": existing["client_id"],
            "vehicle_id": existing["vehicle_id"],
            "worker_id": existing["worker_id"],
            "date": existing["date"],
            "volume_m3": Decimal(existing["volume_m3"]),
        }
        effective.update(supplied)
        return ServiceRecordCreate(**effective)

    async def create_service_record(self, data: ServiceRecordCreate) -> ServiceRecordRead:
        """Validate, price and persist a new service record."""
        client, vehicle, worker = self._validate(data)
        row = self.store.create(TABLE, self._fields(data, client))
        logger.info(
            "Created service record %s: %s m3 for client %s, cost %s",
            row["id"], data.volume_m3, data.client_id, row["cost"],
        )
        return self._to_read(row, client, vehicle, worker)

    async def update_service_record(self, record_id: int, changes: ServiceRecordUpdate) -> ServiceRecordRead:
        """Merge ``changes`` into a stored record, re-validate and re-price it.

        Raises ``NotFoundError`` before any merge if the record does not
        exist.  The whole validation chain runs on the merged values, so
        changing only the vehicle re-checks the stored volume against
        the new capacity.
        """
        existing = self.store.find_by_id(TABLE, record_id)
        if existing is None:
            raise NotFoundError("service record", record_id)
        data = self._merge(existing, changes)
        client, vehicle, worker = self._validate(data)
        row = self.store.update(TABLE, record_id, self._fields(data, client))
        logger.info("Updated service record %s, cost %s", record_id, row["cost"])
        return self._to_read(row, client, vehicle, worker)

    async def get_service_record(self, record_id: int) -> Optional[ServiceRecordRead]:
        """Return the record with its client, vehicle and worker, or ``None``."""
        row = self.store.find_by_id(TABLE, record_id)
        if row is None:
            return None
        return self._to_read(
            row,
            self.store.find_by_id("clients", row["client_id"]),
            self.store.find_by_id("vehicles", row["vehicle_id"]),
            self.store.find_by_id("workers", row["worker_id"]),
        )

    async def list_service_records(self) -> List[ServiceRecordRead]:
        """Return every record, ordered by id, with referenced entities attached."""
        rows = self.store.find_all(TABLE)
        if not rows:
            return []
        clients = {c["id"]: c for c in self.store.find_all("clients")}
        vehicles = {v["id"]: v for v in self.store.find_all("vehicles")}
        workers = {w["id"]: w for w in self.store.find_all("workers")}
        return [
            self._to_read(
                row,
                clients.get(row["client_id"]),
                vehicles.get(row["vehicle_id"]),
                workers.get(row["worker_id"]),
            )
            for row in rows
        ]

    async def delete_service_record(self, record_id: int) -> ServiceRecordRead:
        """Delete a record.  Raises ``NotFoundError`` if it does not exist."""
        row = self.store.delete(TABLE, record_id)
        logger.info("Deleted service record %s", record_id)
        return ServiceRecordRead(**row)
