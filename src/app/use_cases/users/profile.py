"""Profile Use Cases

Read and update the owner's profile: branding and invoice numbering settings.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.domain.user import User
from .dtos import ProfileResponseDTO, UpdateProfileCommandDTO

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"invoice_prefix", "default_currency"}


def _to_response(user: User) -> ProfileResponseDTO:
    return ProfileResponseDTO(
        id=user.id,
        email=user.email,
        company_name=user.company_name,
        tax_id=user.tax_id,
        address=user.address,
        city=user.city,
        state=user.state,
        zip_code=user.zip_code,
        country=user.country,
        phone=user.phone,
        website=user.website,
        logo_url=user.logo_url,
        brand_color=user.brand_color,
        invoice_prefix=user.invoice_prefix,
        invoice_counter=user.invoice_counter,
        default_currency=user.default_currency,
        next_invoice_number=user.next_invoice_number(),
        updated_at=user.updated_at,
    )


def _not_found(user_id: str) -> Error:
    return Error(
        code="USER_NOT_FOUND",
        message=f"User with ID {user_id} not found",
        reason="Owner account does not exist",
    )


class GetProfile:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self, user_id: str) -> Result[ProfileResponseDTO]:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            return Return.err(_not_found(user_id))
        return Return.ok(_to_response(user))


class UpdateProfile:
    """
    Use Case: Update owner profile

    Business Rules:
    1. Only provided fields change
    2. invoice_counter is never writable here; changing the prefix only
       affects numbers allocated afterwards
    """

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, user_id: str, command: UpdateProfileCommandDTO) -> Result[ProfileResponseDTO]:
        try:
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                return Return.err(_not_found(user_id))

            for key, value in command.model_dump(exclude_unset=True).items():
                if value is None and key in REQUIRED_FIELDS:
                    continue
                setattr(user, key, value)

            updated = await self.user_repo.update(user)
            await self.uow.commit()
            logger.info(f"Updated profile for user {user_id}")
            return Return.ok(_to_response(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="PERSISTENCE_ERROR", message="Failed to update profile", reason=str(e))
            )
