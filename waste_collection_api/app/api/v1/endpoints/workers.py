"""Worker endpoints for API v1."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from waste_collection_api.app.core.store import EntityStore, get_store
from waste_collection_api.app.schemas.worker import WorkerCreate, WorkerRead, WorkerUpdate
from waste_collection_api.app.services.worker_service import WorkerService


router = APIRouter()


def get_worker_service(store: EntityStore = Depends(get_store)) -> WorkerService:
    return WorkerService(store)


@router.post("/", response_model=WorkerRead, status_code=status.HTTP_201_CREATED)
async def create_worker(
    worker: WorkerCreate,
    service: WorkerService = Depends(get_worker_service),
) -> WorkerRead:
    return await service.create_worker(worker)


@router.get("/", response_model=List[WorkerRead])
async def list_workers(service: WorkerService = Depends(get_worker_service)) -> List[WorkerRead]:
    return await service.list_workers()


@router.get("/{worker_id}", response_model=WorkerRead)
async def get_worker(
    worker_id: int,
    service: WorkerService = Depends(get_worker_service),
) -> WorkerRead:
    worker = await service.get_worker(worker_id)
    if worker is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Worker not found.")
    return worker


@router.put("/{worker_id}", response_model=WorkerRead)
async def update_worker(
    worker_id: int,
    updates: WorkerUpdate,
    service: WorkerService = Depends(get_worker_service),
) -> WorkerRead:
    return await service.update_worker(worker_id, updates)


@router.delete("/{worker_id}", response_model=WorkerRead)
async def delete_worker(
    worker_id: int,
    service: WorkerService = Depends(get_worker_service),
) -> WorkerRead:
    return await service.delete_worker(worker_id)
