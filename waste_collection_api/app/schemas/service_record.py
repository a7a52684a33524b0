"""
Pydantic models for collection-service records.

A service record links a client, a vehicle and a worker with the
volume collected on a given date.  The ``cost`` is never part of a
request: ``ServiceRecordService`` derives it from the volume and the
client's rate on every create and update.  ``ServiceRecordRead``
carries the referenced entities when they have been resolved.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .client import ClientRead
from .common import Amount, Identifier
from .vehicle import VehicleRead
from .worker import WorkerRead


class ServiceRecordBase(BaseModel):
    client_id: Identifier = Field(..., examples=["1"])
    vehicle_id: Identifier = Field(..., examples=["1"])
    worker_id: Identifier = Field(..., examples=["1"])
    date: datetime.date = Field(..., examples=["2025-03-14"])
    volume_m3: Amount = Field(..., description="Volume collected in cubic meters", examples=["15"])


class ServiceRecordCreate(ServiceRecordBase):
    """Schema for creating a service record."""
    pass


class ServiceRecordUpdate(BaseModel):
    """Schema for updating a service record.

    Every field is optional.  Fields left unset keep the value stored
    on the record; the merged values are validated again as a whole
    and the cost is recomputed.
    """
    client_id: Optional[Identifier] = None
    vehicle_id: Optional[Identifier] = None
    worker_id: Optional[Identifier] = None
    date: Optional[datetime.date] = None
    volume_m3: Optional[Amount] = None


class ServiceRecordRead(ServiceRecordBase):
    id: Identifier
    cost: Amount = Field(..., description="volume_m3 x client rate, rounded half-up to 2 decimals")
    client: Optional[ClientRead] = None
    vehicle: Optional[VehicleRead] = None
    worker: Optional[WorkerRead] = None

    model_config = {
        "from_attributes": True,
    }
