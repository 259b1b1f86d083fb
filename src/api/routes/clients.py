"""Client API Routes"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.dependencies import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.client_request import ClientRequestSchema
from src.app.use_cases.clients import (
    ClientCommandDTO,
    ClientResponseDTO,
    CreateClient,
    DeleteClient,
    GetClient,
    ListClients,
    UpdateClient,
)
from src.adapter.repositories import SqlAlchemyClientRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/clients", tags=["Clients"])


def _command(request: ClientRequestSchema) -> ClientCommandDTO:
    return ClientCommandDTO.model_validate(request.model_dump())


@router.get("", response_model=List[ClientResponseDTO])
async def list_clients(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """List the owner's clients, most recently added first."""
    result = await ListClients(SqlAlchemyClientRepository(session)).execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{client_id}", response_model=ClientResponseDTO)
async def get_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    result = await GetClient(SqlAlchemyClientRepository(session)).execute(user_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("", response_model=ClientResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_client(
    request: ClientRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a client.

    **Returns:**
    - 201: Client created
    - 400: Missing name or malformed email
    """
    use_case = CreateClient(SqlAlchemyUnitOfWork(session), SqlAlchemyClientRepository(session))
    result = await use_case.execute(user_id, _command(request))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{client_id}", response_model=ClientResponseDTO)
async def update_client(
    client_id: str,
    request: ClientRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    use_case = UpdateClient(SqlAlchemyUnitOfWork(session), SqlAlchemyClientRepository(session))
    result = await use_case.execute(user_id, client_id, _command(request))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Delete a client. Fails while invoices still reference it."""
    use_case = DeleteClient(SqlAlchemyUnitOfWork(session), SqlAlchemyClientRepository(session))
    result = await use_case.execute(user_id, client_id)

    if result.is_err():
        raise ClientError(result.error)

    return {"message": "Client deleted", "id": result.value}
