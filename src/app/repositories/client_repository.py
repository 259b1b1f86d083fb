"""Client Repository Interface

Defines the contract for client persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.client import Client


class ClientRepository(ABC):
    """
    Repository interface for Client persistence

    All lookups are scoped to the owning user.
    """

    @abstractmethod
    async def get_by_id(self, user_id: str, client_id: str) -> Optional[Client]:
        """
        Retrieve an owner's client by ID

        Args:
            user_id: Owning user
            client_id: Client ID

        Returns:
            Client if found and owned by user_id, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: str) -> List[Client]:
        """
        Retrieve all clients of an owner, newest first

        Args:
            user_id: Owning user

        Returns:
            List of clients
        """
        pass

    @abstractmethod
    async def count_by_user_id(self, user_id: str) -> int:
        """
        Count clients of an owner

        Args:
            user_id: Owning user

        Returns:
            Number of clients
        """
        pass

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """
        Create a new client

        Args:
            client: Client entity to persist

        Returns:
            Created Client
        """
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """
        Update an existing client

        Args:
            client: Client entity with updated values

        Returns:
            Updated Client
        """
        pass

    @abstractmethod
    async def delete(self, client: Client) -> None:
        """
        Delete a client

        Args:
            client: Client entity to remove
        """
        pass
