from unittest.mock import MagicMock

import pytest
import requests

from app.adapters.account_service import AccountServiceClient
from app.api.deps import token_from_header
from app.errors import AccountServiceError, AuthorizationError
from app.schemas.user_schema import Role


def _response(status_code, payload=None):
    resp = MagicMock(status_code=status_code)
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def client(http):
    return AccountServiceClient("http://account.test/", timeout=3, session=http)


class TestAuthorize:
    def test_returns_user_with_role(self, client, http):
        http.post.return_value = _response(
            200, {"id": 5, "email": "s@example.com", "password": "hash", "role": "seller"}
        )

        user = client.authorize("tok-123")

        assert user.id == 5
        assert user.role is Role.SELLER
        assert user.has_role(Role.SELLER)
        assert not user.has_role(Role.BUYER)
        args, kwargs = http.post.call_args
        assert args[0] == "http://account.test/api/authorize/"
        assert kwargs["files"] == {"token": (None, "tok-123")}
        assert kwargs["timeout"] == 3

    def test_unknown_role_has_no_capability(self, client, http):
        http.post.return_value = _response(200, {"id": 5, "role": "superuser"})

        user = client.authorize("tok")

        assert user.role is None
        assert not user.has_role(Role.BUYER)
        assert not user.has_role(Role.SELLER)

    def test_rejected_token(self, client, http):
        http.post.return_value = _response(401, "Token authorization invalid")

        with pytest.raises(AuthorizationError):
            client.authorize("bad")

    def test_transport_failure(self, client, http):
        http.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(AccountServiceError):
            client.authorize("tok")

    def test_undecodable_body(self, client, http):
        http.post.return_value = _response(200, ValueError("Expecting value"))

        with pytest.raises(AccountServiceError):
            client.authorize("tok")


class TestGetUser:
    def test_returns_seller_info(self, client, http):
        http.get.return_value = _response(
            200,
            {"id": 1, "email": "s@example.com", "full_name": "Sam", "address": "Main St", "phone_number": "555"},
        )

        info = client.get_user(1)

        assert info.email == "s@example.com"
        assert info.full_name == "Sam"
        assert info.address == "Main St"
        assert info.phone_number == "555"
        args, kwargs = http.get.call_args
        assert args[0] == "http://account.test/api/user/"
        assert kwargs["params"] == {"id": 1}

    def test_non_200_is_an_error(self, client, http):
        http.get.return_value = _response(404, {"message": "not found"})

        with pytest.raises(AccountServiceError) as exc:
            client.get_user(1)
        assert "404" in exc.value.message

    def test_transport_failure(self, client, http):
        http.get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(AccountServiceError):
            client.get_user(1)


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, ""),
        ("", ""),
        ("Token abc", ""),
        ("Bearer ", ""),
        ("Bearer abc.def", "abc.def"),
    ],
)
def test_token_from_header(header, expected):
    assert token_from_header(header) == expected
