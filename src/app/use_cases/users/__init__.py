"""User profile use cases"""
from .profile import GetProfile, UpdateProfile
from .dtos import UpdateProfileCommandDTO, ProfileResponseDTO

__all__ = [
    "GetProfile",
    "UpdateProfile",
    "UpdateProfileCommandDTO",
    "ProfileResponseDTO",
]
