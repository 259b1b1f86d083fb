"""Client use cases"""
from .manage_clients import CreateClient, GetClient, ListClients, UpdateClient, DeleteClient
from .dtos import ClientCommandDTO, ClientResponseDTO

__all__ = [
    "CreateClient",
    "GetClient",
    "ListClients",
    "UpdateClient",
    "DeleteClient",
    "ClientCommandDTO",
    "ClientResponseDTO",
]
