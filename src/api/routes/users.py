"""User Profile API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.dependencies import get_current_user_id
from src.api.error import ClientError
from src.app.use_cases.users import (
    GetProfile,
    ProfileResponseDTO,
    UpdateProfile,
    UpdateProfileCommandDTO,
)
from src.adapter.repositories import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile", response_model=ProfileResponseDTO)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Owner profile, including the next invoice number that will be allocated."""
    result = await GetProfile(SqlAlchemyUserRepository(session)).execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/profile", response_model=ProfileResponseDTO)
async def update_profile(
    request: UpdateProfileCommandDTO,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Update branding and numbering settings.

    Only the fields present in the body change. The invoice counter itself
    is not writable.
    """
    use_case = UpdateProfile(SqlAlchemyUnitOfWork(session), SqlAlchemyUserRepository(session))
    result = await use_case.execute(user_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
