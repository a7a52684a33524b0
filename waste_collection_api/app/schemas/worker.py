"""Pydantic models for worker data."""

from typing import Optional

from pydantic import BaseModel, Field

from .common import Amount, Identifier


class WorkerBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Lucía Torres"])
    role: str = Field(..., min_length=1, examples=["driver"])
    base_salary: Amount = Field(..., examples=["1450.00"])


class WorkerCreate(WorkerBase):
    pass


class WorkerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = Field(default=None, min_length=1)
    base_salary: Optional[Amount] = None


class WorkerRead(WorkerBase):
    id: Identifier

    model_config = {
        "from_attributes": True,
    }
