import os
import tempfile

# Point settings at a throwaway database/media folder before the app is imported
_TMP = tempfile.mkdtemp(prefix="product_service_tests_")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP, "test.db")
os.environ["MEDIA_DIR"] = os.path.join(_TMP, "media")
os.environ["ACCOUNT_SERVICE_URL"] = "http://account.test"

import pytest

from app.api.deps import get_account_client
from app.db import SessionLocal, init_db
from app.errors import AccountServiceError, AuthorizationError
from app.main import app
from app.schemas.product_schema import SellerInfo
from app.schemas.user_schema import AccountUser

SELLER_ID = 1
OTHER_SELLER_ID = 2
BUYER_ID = 10

USERS = {
    "seller-token": {"id": SELLER_ID, "email": "seller@example.com", "full_name": "Sam Seller", "role": "seller"},
    "seller2-token": {"id": OTHER_SELLER_ID, "email": "other@example.com", "full_name": "Olive Other", "role": "seller"},
    "buyer-token": {"id": BUYER_ID, "email": "buyer@example.com", "full_name": "Bea Buyer", "role": "buyer"},
    "admin-token": {"id": 99, "email": "admin@example.com", "full_name": "Ada Admin", "role": "admin"},
}


class FakeAccountClient:
    """Stands in for the account service: fixed tokens, canned seller info."""

    unreachable_user_ids = set()

    def authorize(self, token):
        if token not in USERS:
            raise AuthorizationError("Token authorization invalid")
        return AccountUser.model_validate(USERS[token])

    def get_user(self, user_id):
        if user_id in self.unreachable_user_ids:
            raise AccountServiceError("Status code invalid when getting seller info => 502")
        for u in USERS.values():
            if u["id"] == user_id:
                return SellerInfo(
                    email=u["email"],
                    full_name=u["full_name"],
                    address="1 Market Street",
                    phone_number="555-0100",
                )
        raise AccountServiceError("Status code invalid when getting seller info => 404")


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    yield


@pytest.fixture(autouse=True)
def fake_accounts():
    app.dependency_overrides[get_account_client] = FakeAccountClient
    yield
    app.dependency_overrides.pop(get_account_client, None)
    FakeAccountClient.unreachable_user_ids = set()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
