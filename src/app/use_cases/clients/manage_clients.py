"""Client Use Cases

CRUD over an owner's clients.
"""

import logging
from typing import List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client
from .dtos import ClientCommandDTO, ClientResponseDTO

logger = logging.getLogger(__name__)


def _to_response(client: Client) -> ClientResponseDTO:
    return ClientResponseDTO.model_validate(client, from_attributes=True)


def _not_found(client_id: str) -> Error:
    return Error(
        code="CLIENT_NOT_FOUND",
        message=f"Client with ID {client_id} not found",
        reason="Client does not exist or belongs to another user",
    )


class CreateClient:
    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, user_id: str, command: ClientCommandDTO) -> Result[ClientResponseDTO]:
        try:
            client = Client(user_id=user_id, **command.model_dump())
            created = await self.client_repo.create(client)
            await self.uow.commit()
            logger.info(f"Created client {created.id} for user {user_id}")
            return Return.ok(_to_response(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="PERSISTENCE_ERROR", message="Failed to create client", reason=str(e))
            )


class GetClient:
    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(self, user_id: str, client_id: str) -> Result[ClientResponseDTO]:
        client = await self.client_repo.get_by_id(user_id, client_id)
        if not client:
            return Return.err(_not_found(client_id))
        return Return.ok(_to_response(client))


class ListClients:
    def __init__(self, client_repo: ClientRepository):
        self.client_repo = client_repo

    async def execute(self, user_id: str) -> Result[List[ClientResponseDTO]]:
        clients = await self.client_repo.list_by_user_id(user_id)
        return Return.ok([_to_response(client) for client in clients])


class UpdateClient:
    """
    Use Case: Update client

    Invoices reference clients, so the change shows on every later render
    of the client's invoices.
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(
        self, user_id: str, client_id: str, command: ClientCommandDTO
    ) -> Result[ClientResponseDTO]:
        try:
            client = await self.client_repo.get_by_id(user_id, client_id)
            if not client:
                return Return.err(_not_found(client_id))

            for key, value in command.model_dump().items():
                setattr(client, key, value)

            updated = await self.client_repo.update(client)
            await self.uow.commit()
            return Return.ok(_to_response(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="PERSISTENCE_ERROR", message="Failed to update client", reason=str(e))
            )


class DeleteClient:
    """
    Use Case: Delete client

    Fails with PERSISTENCE_ERROR while invoices still reference the client.
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, user_id: str, client_id: str) -> Result[str]:
        try:
            client = await self.client_repo.get_by_id(user_id, client_id)
            if not client:
                return Return.err(_not_found(client_id))

            await self.client_repo.delete(client)
            await self.uow.commit()
            logger.info(f"Deleted client {client_id} for user {user_id}")
            return Return.ok(client_id)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to delete client",
                    reason=str(e),
                )
            )
