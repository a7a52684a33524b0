"""
Business logic for clients.

Clients carry the rate charged per cubic meter collected, which
``ServiceRecordService`` uses to price every service record.  The rate
must be strictly positive.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import NotFoundError
from ..core.store import EntityStore
from ..schemas.client import ClientCreate, ClientRead, ClientUpdate
from .rules import require_positive

logger = logging.getLogger(__name__)

TABLE = "clients"


def _to_row(fields: Dict[str, Any]) -> Dict[str, Any]:
    if "type" in fields:
        fields["type"] = fields["type"].value
    return fields


class ClientService:
    """Service for managing clients."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    async def create_client(self, data: ClientCreate) -> ClientRead:
        """Validate the rate and persist a new client."""
        require_positive(data.rate_per_m3, "rate per m3")
        row = self.store.create(TABLE, _to_row(data.model_dump()))
        logger.info("Created client %s (%s)", row["id"], data.name)
        return ClientRead(**row)

    async def list_clients(self) -> List[ClientRead]:
        return [ClientRead(**row) for row in self.store.find_all(TABLE)]

    async def get_client(self, client_id: int) -> Optional[ClientRead]:
        """Return the client or ``None`` if it does not exist."""
        row = self.store.find_by_id(TABLE, client_id)
        return ClientRead(**row) if row else None

    async def update_client(self, client_id: int, data: ClientUpdate) -> ClientRead:
        """Apply the supplied fields to an existing client.

        A new rate, when given, must be positive.  Raises
        ``NotFoundError`` if the client does not exist.
        """
        changes = data.model_dump(exclude_none=True)
        if "rate_per_m3" in changes:
            require_positive(changes["rate_per_m3"], "rate per m3")
        existing = self.store.find_by_id(TABLE, client_id)
        if existing is None:
            raise NotFoundError("client", client_id)
        if not changes:
            return ClientRead(**existing)
        row = self.store.update(TABLE, client_id, _to_row(changes))
        logger.info("Updated client %s: %s", client_id, sorted(changes))
        return ClientRead(**row)

    async def delete_client(self, client_id: int) -> ClientRead:
        """Delete a client.  Raises ``NotFoundError`` if it does not exist."""
        row = self.store.delete(TABLE, client_id)
        logger.info("Deleted client %s", client_id)
        return ClientRead(**row)
