"""
Client controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.models.user import User
from app.services.activity_log_service import ActivityLogService
from app.services.client_service import ClientService
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse, ClientListResponse


class ClientController(BaseController):
    """Controller for client operations."""

    def __init__(self, session: AsyncSession):
        self.client_service = ClientService(session)
        self.activity_log_service = ActivityLogService(session)

    async def create_client(self, client_data: ClientCreate, current_user: User) -> ClientResponse:
        """Create a new client."""
        client = await self.client_service.create_client(client_data, created_by=current_user.id)
        await self.activity_log_service.log(current_user.id, "create_client", "client", client.id)
        return client

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        """Get client by ID."""
        return await self.client_service.get_client(client_id)

    async def list_clients(self, skip: int = 0, limit: int = 100) -> ClientListResponse:
        """List clients, newest first."""
        clients, total = await self.client_service.list_clients(skip=skip, limit=limit)
        return ClientListResponse(items=clients, total=total)

    async def update_client(
        self,
        client_id: UUID,
        client_data: ClientUpdate,
        current_user: User,
    ) -> Optional[ClientResponse]:
        """Update a client."""
        client = await self.client_service.update_client(client_id, client_data)
        if client:
            await self.activity_log_service.log(current_user.id, "update_client", "client", client_id)
        return client

    async def delete_client(self, client_id: UUID, current_user: User) -> bool:
        """Delete a client."""
        deleted = await self.client_service.delete_client(client_id)
        if deleted:
            await self.activity_log_service.log(current_user.id, "delete_client", "client", client_id)
        return deleted
