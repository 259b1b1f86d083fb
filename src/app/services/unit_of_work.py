"""Unit of Work Interface

Groups repository writes into a single all-or-nothing transaction.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary for use cases

    Repositories flush into the open transaction; nothing is durable until
    commit(). Use cases call rollback() on any failure.
    """

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
