"""
Client service with business logic.
"""

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError
from app.services.base_service import BaseService
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.quote_repository import QuoteRepository
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse

logger = logging.getLogger(__name__)


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.client_repo = ClientRepository(session)
        self.quote_repo = QuoteRepository(session)

    async def create_client(self, client_data: ClientCreate, created_by: UUID) -> ClientResponse:
        """Create a new client owned by ``created_by``."""
        client_dict = client_data.model_dump(exclude_unset=True)
        client = await self.client_repo.create(**client_dict, created_by=created_by)
        await self.session.commit()
        logger.info(f"Created client {client.name}", extra={"client_id": str(client.id)})
        return ClientResponse.model_validate(client)

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        """Get client by ID."""
        client = await self.client_repo.get(client_id)
        if not client:
            return None
        return ClientResponse.model_validate(client)

    async def list_clients(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[ClientResponse], int]:
        """List clients, newest first."""
        clients = await self.client_repo.list(skip=skip, limit=limit)
        total = await self.client_repo.count()
        return [ClientResponse.model_validate(client) for client in clients], total

    async def update_client(
        self,
        client_id: UUID,
        client_data: ClientUpdate,
    ) -> Optional[ClientResponse]:
        """Update a client's contact fields."""
        client = await self.client_repo.get(client_id)
        if not client:
            return None

        update_dict = client_data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_dict:
            return ClientResponse.model_validate(client)
        updated = await self.client_repo.update(client_id, **update_dict)
        await self.session.commit()
        return ClientResponse.model_validate(updated)

    async def delete_client(self, client_id: UUID) -> bool:
        """Delete a client. Clients referenced by quotes are kept."""
        if not await self.client_repo.get(client_id):
            return False
        quote_count = await self.quote_repo.count_by_client(client_id)
        if quote_count:
            raise ConflictError(
                "Client has quotes and cannot be deleted",
                details={"client_id": str(client_id), "quotes": quote_count},
            )
        deleted = await self.client_repo.delete(client_id)
        await self.session.commit()
        logger.info("Deleted client", extra={"client_id": str(client_id)})
        return deleted
