import logging
from typing import Optional

import requests
from pydantic import ValidationError

from app.errors import AccountServiceError, AuthorizationError
from app.schemas.product_schema import SellerInfo
from app.schemas.user_schema import AccountUser

logger = logging.getLogger(__name__)


class AccountServiceClient:
    """
    Thin HTTP client for the external account service.

    The service owns users and tokens; this catalog only asks it who a token
    belongs to and for a seller's public contact info.
    """

    def __init__(self, base_url: str, timeout: Optional[float] = 10.0, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def authorize(self, token: str) -> AccountUser:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthorizationError: the account service rejected the token.
            AccountServiceError: transport failure or undecodable response.
        """
        try:
            # the account service expects multipart form data
            resp = self.http.post(
                f"{self.base_url}/api/authorize/",
                files={"token": (None, token)},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Account service unreachable during authorize: %s", e)
            raise AccountServiceError(str(e)) from e

        if resp.status_code != 200:
            raise AuthorizationError("Token authorization invalid")

        try:
            return AccountUser.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise AccountServiceError(f"Invalid authorization response => {e}") from e

    def get_user(self, user_id: int) -> SellerInfo:
        """Fetch a seller's public info by account user id."""
        try:
            resp = self.http.get(
                f"{self.base_url}/api/user/",
                params={"id": user_id},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AccountServiceError(
                f"There's an error when getting seller info => {e}"
            ) from e

        if resp.status_code != 200:
            raise AccountServiceError(
                f"Status code invalid when getting seller info => {resp.status_code}"
            )

        try:
            return SellerInfo.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise AccountServiceError(
                f"There's an error when decoding seller info => {e}"
            ) from e
