"""Request-scoped dependencies shared by the routers"""

from fastapi import Header
from libs.result import Error
from src.api.error import ClientError


async def get_current_user_id(x_user_id: str = Header(default=None)) -> str:
    """
    Owner identity supplied by the authentication layer in front of the API

    Requests without it are rejected with 401.
    """
    if not x_user_id:
        raise ClientError(
            Error(
                code="UNAUTHENTICATED",
                message="Missing X-User-Id header",
                reason="Requests must carry the authenticated owner identity",
            ),
            status_code=401,
        )
    return x_user_id
