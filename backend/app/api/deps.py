"""Request-scoped dependencies: collaborators built from settings, and auth."""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from app.adapters.account_service import AccountServiceClient
from app.config import settings
from app.errors import AccountServiceError, AuthorizationError
from app.schemas.user_schema import AccountUser, Role
from app.storage.image_storage import ImageStorage

logger = logging.getLogger(__name__)

FORBIDDEN_ROLE_MESSAGE = "user doesn't have authority to access this API"


def get_account_client() -> AccountServiceClient:
    return AccountServiceClient(
        settings.ACCOUNT_SERVICE_URL, timeout=settings.ACCOUNT_SERVICE_TIMEOUT_SECONDS
    )


def get_image_storage() -> ImageStorage:
    return ImageStorage(settings.MEDIA_DIR)


def token_from_header(authorization: Optional[str]) -> str:
    """Return the bearer token from an Authorization header value, or ""."""
    if not authorization:
        return ""
    parts = authorization.split("Bearer ", 1)
    if len(parts) <= 1:
        return ""
    return parts[1].strip()


def get_current_user(
    authorization: Optional[str] = Header(None),
    accounts: AccountServiceClient = Depends(get_account_client),
) -> AccountUser:
    token = token_from_header(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Token authorization empty/not found",
        )
    try:
        return accounts.authorize(token)
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    except AccountServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message
        )


def require_role(role: Role):
    """Dependency factory: the current user must hold ``role``."""

    def _checker(user: AccountUser = Depends(get_current_user)) -> AccountUser:
        if not user.has_role(role):
            logger.info("User %s denied, %s role required", user.id, role.value)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_ROLE_MESSAGE
            )
        return user

    return _checker
