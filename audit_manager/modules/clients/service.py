from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.clients.schemas import ClientCreate, ClientUpdate, ClientResponse
from typing import List
from fastapi import HTTPException


class ClientService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.clients = TableRepository(supabase, "clients")

    async def create_client(self, client_data: ClientCreate, user_id: str) -> ClientResponse:
        """Create a new client"""
        row = await self.clients.insert({
            **client_data.model_dump(),
            "created_by": user_id,
        })
        return ClientResponse(**row)

    async def get_client_by_id(self, client_id: str) -> ClientResponse:
        row = await self.clients.get(client_id)
        if not row:
            raise HTTPException(status_code=404, detail="Client not found")
        return ClientResponse(**row)

    async def list_clients(self, order_by: str = "created_at") -> List[ClientResponse]:
        """Newest first, or alphabetical when ordered by name"""
        if order_by == "name":
            rows = await self.clients.query(order="name", desc=False)
        else:
            rows = await self.clients.query(order="created_at", desc=True)
        return [ClientResponse(**row) for row in rows]

    async def update_client(self, client_id: str, client_data: ClientUpdate) -> ClientResponse:
        update_data = client_data.model_dump(exclude_unset=True)
        if not update_data:
            # No changes, return existing
            return await self.get_client_by_id(client_id)
        update_data["updated_at"] = utc_now()
        row = await self.clients.update(client_id, update_data)
        if not row:
            raise HTTPException(status_code=404, detail="Client not found")
        return ClientResponse(**row)

    async def delete_client(self, client_id: str) -> bool:
        """Delete only the client row; dependent tasks, audits and folders are kept"""
        return await self.clients.delete(client_id)
