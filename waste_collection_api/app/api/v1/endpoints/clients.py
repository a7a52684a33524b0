"""
Client endpoints for API v1.

CRUD operations for clients.  Business rule violations (non-positive
rate) and missing clients are reported by ``ClientService`` and
translated by the application's exception handlers.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from waste_collection_api.app.core.store import EntityStore, get_store
from waste_collection_api.app.schemas.client import ClientCreate, ClientRead, ClientUpdate
from waste_collection_api.app.services.client_service import ClientService


router = APIRouter()


def get_client_service(store: EntityStore = Depends(get_store)) -> ClientService:
    return ClientService(store)


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
    client: ClientCreate,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    """Create a new client.  The rate per m3 must be positive."""
    return await service.create_client(client)


@router.get("/", response_model=List[ClientRead])
async def list_clients(service: ClientService = Depends(get_client_service)) -> List[ClientRead]:
    return await service.list_clients()


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    client = await service.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found.")
    return client


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: int,
    updates: ClientUpdate,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    """Update an existing client.  Unspecified fields remain unchanged."""
    return await service.update_client(client_id, updates)


@router.delete("/{client_id}", response_model=ClientRead)
async def delete_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    """Delete a client and return it.

    Clients still referenced by service records cannot be removed; the
    store rejects the deletion.
    """
    return await service.delete_client(client_id)
