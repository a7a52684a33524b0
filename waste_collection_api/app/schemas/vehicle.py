"""
Pydantic models for vehicle data.

The plate must be unique across vehicles; uniqueness and positivity of
capacity and consumption are enforced by ``VehicleService``.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .common import Amount, Identifier


class VehicleBase(BaseModel):
    plate: str = Field(..., min_length=1, examples=["4821-KLM"])
    max_capacity_m3: Amount = Field(..., description="Maximum volume the vehicle carries per service", examples=["20"])
    fuel_consumption: Amount = Field(..., description="Fuel consumption in litres per unit of distance", examples=["0.35"])


class VehicleCreate(VehicleBase):
    """Schema for creating a vehicle."""
    pass


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle.  Unset fields keep their stored value."""
    plate: Optional[str] = Field(default=None, min_length=1)
    max_capacity_m3: Optional[Amount] = None
    fuel_consumption: Optional[Amount] = None


class VehicleRead(VehicleBase):
    id: Identifier

    model_config = {
        "from_attributes": True,
    }
