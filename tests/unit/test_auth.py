import pytest
from unittest.mock import AsyncMock

from invoicedash.actions.auth import authenticate
from invoicedash.identity import (
    AccessDenied,
    AuthError,
    CredentialsSignin,
    Identity,
    InvalidProvider,
    SignInResult,
    decode_access_token,
    hash_password,
)
from invoicedash.models.state import Redirect
from invoicedash.models.user import User
from invoicedash.repositories.base import PersistenceError
from invoicedash.repositories.user import UserRepository

FORM = {"email": "user@nextmail.com", "password": "123456"}

@pytest.fixture
def mock_identity():
    return AsyncMock(spec=Identity)

@pytest.fixture
def mock_users():
    users = AsyncMock(spec=UserRepository)
    users.get_by_email.return_value = User(
        id="410544b2-4001-4271-9855-fec4b6a6442a",
        name="User",
        email="user@nextmail.com",
        password=hash_password("123456"),
    )
    return users

@pytest.mark.asyncio
async def test_authenticate_invalid_credentials(mock_identity):
    mock_identity.sign_in.side_effect = CredentialsSignin()

    assert await authenticate(None, FORM, mock_identity) == "Invalid credentials."
    mock_identity.sign_in.assert_awaited_once_with("credentials", FORM)

@pytest.mark.asyncio
@pytest.mark.parametrize("error", [AccessDenied(), InvalidProvider(), AuthError()])
async def test_authenticate_other_auth_errors(mock_identity, error):
    mock_identity.sign_in.side_effect = error

    assert await authenticate("Invalid credentials.", FORM, mock_identity) == "Something went wrong."

@pytest.mark.asyncio
async def test_authenticate_reraises_unclassified_errors(mock_identity):
    mock_identity.sign_in.side_effect = PersistenceError("database is down")

    with pytest.raises(PersistenceError):
        await authenticate(None, FORM, mock_identity)

@pytest.mark.asyncio
async def test_authenticate_success_hands_back_sign_in(mock_identity):
    signed_in = SignInResult(user_id="u1", token="t", redirect=Redirect(path="/dashboard"))
    mock_identity.sign_in.return_value = signed_in

    result = await authenticate(None, FORM, mock_identity)

    assert result is signed_in
    assert not isinstance(result, str)

@pytest.mark.asyncio
async def test_sign_in_issues_token(mock_users):
    identity = Identity(mock_users, redirect_to="/dashboard")

    result = await identity.sign_in("credentials", FORM)

    assert result.redirect == Redirect(path="/dashboard")
    payload = decode_access_token(result.token)
    assert payload["sub"] == result.user_id
    assert payload["email"] == "user@nextmail.com"
    mock_users.get_by_email.assert_awaited_once_with("user@nextmail.com")

@pytest.mark.asyncio
async def test_sign_in_wrong_password(mock_users):
    identity = Identity(mock_users)

    with pytest.raises(CredentialsSignin):
        await identity.sign_in("credentials", {"email": "user@nextmail.com", "password": "wrong-password"})

@pytest.mark.asyncio
async def test_sign_in_unknown_user(mock_users):
    mock_users.get_by_email.return_value = None
    identity = Identity(mock_users)

    with pytest.raises(CredentialsSignin):
        await identity.sign_in("credentials", FORM)

@pytest.mark.asyncio
async def test_sign_in_rejects_malformed_credentials_without_lookup(mock_users):
    identity = Identity(mock_users)

    with pytest.raises(CredentialsSignin):
        await identity.sign_in("credentials", {"email": "user@nextmail.com", "password": "123"})
    mock_users.get_by_email.assert_not_awaited()

@pytest.mark.asyncio
async def test_sign_in_unknown_provider(mock_users):
    identity = Identity(mock_users)

    with pytest.raises(InvalidProvider) as exc:
        await identity.sign_in("github", FORM)
    assert exc.value.type == "InvalidProvider"

@pytest.mark.asyncio
async def test_sign_in_database_failure_is_not_an_auth_error(mock_users):
    mock_users.get_by_email.side_effect = PersistenceError("connection refused")
    identity = Identity(mock_users)

    with pytest.raises(PersistenceError):
        await identity.sign_in("credentials", FORM)

def test_decode_rejects_tampered_token():
    with pytest.raises(AccessDenied):
        decode_access_token("not-a-jwt")
