"""User Repository Interface

Defines the contract for owner persistence, including the invoice counter.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.user import User


class UserRepository(ABC):
    """
    Repository interface for User persistence

    The invoice counter is advanced first, then the invoice is written in
    the same transaction.
    """

    @abstractmethod
    async def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """
        Retrieve user by ID

        Args:
            user_id: User identifier
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user

        Args:
            user: User entity to persist

        Returns:
            Created User
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Update profile fields of a user

        Args:
            user: User entity with updated values

        Returns:
            Updated User
        """
        pass

    @abstractmethod
    async def increment_invoice_counter(self, user: User) -> int:
        """
        Advance the user's invoice counter by exactly one

        Must be called inside the transaction that writes the invoice,
        before the invoice row is inserted. The atomic UPDATE takes the
        write lock, so the value it returns is reserved for this caller
        until the transaction ends.

        Args:
            user: Locked User entity

        Returns:
            The new counter value
        """
        pass
