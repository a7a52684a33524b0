"""
Vehicle endpoints for API v1.

CRUD operations for the vehicle fleet.  Duplicate plates and
non-positive capacity or consumption are rejected with 400.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from waste_collection_api.app.core.store import EntityStore, get_store
from waste_collection_api.app.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from waste_collection_api.app.services.vehicle_service import VehicleService


router = APIRouter()


def get_vehicle_service(store: EntityStore = Depends(get_store)) -> VehicleService:
    return VehicleService(store)


@router.post("/", response_model=VehicleRead, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle: VehicleCreate,
    service: VehicleService = Depends(get_vehicle_service),
) -> VehicleRead:
    return await service.create_vehicle(vehicle)


@router.get("/", response_model=List[VehicleRead])
async def list_vehicles(service: VehicleService = Depends(get_vehicle_service)) -> List[VehicleRead]:
    return await service.list_vehicles()


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(
    vehicle_id: int,
    service: VehicleService = Depends(get_vehicle_service),
) -> VehicleRead:
    vehicle = await service.get_vehicle(vehicle_id)
    if vehicle is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vehicle not found.")
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: int,
    updates: VehicleUpdate,
    service: VehicleService = Depends(get_vehicle_service),
) -> VehicleRead:
    return await service.update_vehicle(vehicle_id, updates)


@router.delete("/{vehicle_id}", response_model=VehicleRead)
async def delete_vehicle(
    vehicle_id: int,
    service: VehicleService = Depends(get_vehicle_service),
) -> VehicleRead:
    return await service.delete_vehicle(vehicle_id)
