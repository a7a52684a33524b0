"""
Service record endpoints for API v1.

The handlers only translate between HTTP and ``ServiceRecordService``;
validation, pricing and the joins with clients, vehicles and workers
live in the service.  The request body never carries a cost.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from waste_collection_api.app.core.store import EntityStore, get_store
from waste_collection_api.app.schemas.service_record import (
    ServiceRecordCreate,
    ServiceRecordRead,
    ServiceRecordUpdate,
)
from waste_collection_api.app.services.service_record_service import ServiceRecordService


router = APIRouter()


def get_service_record_service(store: EntityStore = Depends(get_store)) -> ServiceRecordService:
    return ServiceRecordService(store)


@router.post("/", response_model=ServiceRecordRead, status_code=status.HTTP_201_CREATED)
async def create_service_record(
    record: ServiceRecordCreate,
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordRead:
    """Record a collection.

    Returns 400 if the volume is not positive or exceeds the vehicle's
    capacity, and 404 if the client, vehicle or worker does not exist.
    """
    return await service.create_service_record(record)


@router.get("/", response_model=List[ServiceRecordRead])
async def list_service_records(
    service: ServiceRecordService = Depends(get_service_record_service),
) -> List[ServiceRecordRead]:
    return await service.list_service_records()


@router.get("/{record_id}", response_model=ServiceRecordRead)
async def get_service_record(
    record_id: int,
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordRead:
    record = await service.get_service_record(record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service record not found.")
    return record


@router.put("/{record_id}", response_model=ServiceRecordRead)
async def update_service_record(
    record_id: int,
    updates: ServiceRecordUpdate,
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordRead:
    """Update a record.  The merged values are validated again and the cost recomputed."""
    return await service.update_service_record(record_id, updates)


@router.delete("/{record_id}", response_model=ServiceRecordRead)
async def delete_service_record(
    record_id: int,
    service: ServiceRecordService = Depends(get_service_record_service),
) -> ServiceRecordRead:
    return await service.delete_service_record(record_id)
