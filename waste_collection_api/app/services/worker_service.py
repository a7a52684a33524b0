"""Business logic for workers."""

import logging
from typing import List, Optional

from ..core.errors import NotFoundError
from ..core.store import EntityStore
from ..schemas.worker import WorkerCreate, WorkerRead, WorkerUpdate
from .rules import require_positive

logger = logging.getLogger(__name__)

TABLE = "workers"


class WorkerService:
    """Service for managing workers."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    async def create_worker(self, data: WorkerCreate) -> WorkerRead:
        require_positive(data.base_salary, "base salary")
        row = self.store.create(TABLE, data.model_dump())
        logger.info("Created worker %s (%s)", row["id"], data.name)
        return WorkerRead(**row)

    async def list_workers(self) -> List[WorkerRead]:
        return [WorkerRead(**row) for row in self.store.find_all(TABLE)]

    async def get_worker(self, worker_id: int) -> Optional[WorkerRead]:
        row = self.store.find_by_id(TABLE, worker_id)
        return WorkerRead(**row) if row else None

    async def update_worker(self, worker_id: int, data: WorkerUpdate) -> WorkerRead:
        changes = data.model_dump(exclude_none=True)
        if "base_salary" in changes:
            require_positive(changes["base_salary"], "base salary")
        existing = self.store.find_by_id(TABLE, worker_id)
        if existing is None:
            raise NotFoundError("worker", worker_id)
        if not changes:
            return WorkerRead(**existing)
        row = self.store.update(TABLE, worker_id, changes)
        logger.info("Updated worker %s: %s", worker_id, sorted(changes))
        return WorkerRead(**row)

    async def delete_worker(self, worker_id: int) -> WorkerRead:
        row = self.store.delete(TABLE, worker_id)
        logger.info("Deleted worker %s", worker_id)
        return WorkerRead(**row)
