"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import clients, service_records, vehicles, workers

router = APIRouter()

router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
router.include_router(workers.router, prefix="/workers", tags=["workers"])
router.include_router(service_records.router, prefix="/service-records", tags=["service records"])
