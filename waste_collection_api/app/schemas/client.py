"""
Pydantic models for client data.

``ClientBase`` holds the shared fields; ``ClientCreate`` is used for
requests and ``ClientRead`` adds the ``id`` for responses.
``ClientUpdate`` makes every field optional for partial updates.
Positivity of the rate is a business rule checked by
``ClientService``, not here, so that it is reported the same way
whether the service is called over HTTP or directly.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .common import Amount, Identifier


class ClientType(str, Enum):
    HOTEL = "HOTEL"
    HEALTH = "HEALTH"
    HOUSE = "HOUSE"


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Hotel Miramar"])
    type: ClientType = Field(..., examples=["HOTEL"])
    address: str = Field(..., min_length=1, examples=["Av. del Puerto 12"])
    rate_per_m3: Amount = Field(..., description="Price charged per cubic meter collected", examples=["5.50"])


class ClientCreate(ClientBase):
    """Schema for creating a client."""
    pass


class ClientUpdate(BaseModel):
    """Schema for updating a client.

    All fields are optional; only provided fields will be updated.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ClientType] = None
    address: Optional[str] = Field(default=None, min_length=1)
    rate_per_m3: Optional[Amount] = None


class ClientRead(ClientBase):
    """Schema for reading a client from the API."""

    id: Identifier

    model_config = {
        "from_attributes": True,
    }
