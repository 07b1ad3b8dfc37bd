import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from order_media_client.auth import AuthService
from order_media_client.exceptions import AuthError
from order_media_client.repositories import UserRepository

from .conftest import TEST_AUTH

pytestmark = pytest.mark.asyncio


@pytest.fixture
def auth(session_factory) -> AuthService:
    return AuthService(UserRepository(session_factory), TEST_AUTH)


async def test_sign_up_sign_in_and_session(auth):
    user = await auth.sign_up("seller@example.com", "hunter22")

    session = await auth.sign_in("seller@example.com", "hunter22")
    assert session.user.id == user.id
    assert session.token_type == "bearer"

    restored = await auth.get_session(session.access_token)
    assert restored is not None
    assert restored.user.email == "seller@example.com"


async def test_wrong_password_is_rejected(auth):
    await auth.sign_up("seller@example.com", "hunter22")

    with pytest.raises(AuthError):
        await auth.sign_in("seller@example.com", "nope")
    with pytest.raises(AuthError):
        await auth.sign_in("ghost@example.com", "hunter22")


async def test_duplicate_sign_up(auth):
    await auth.sign_up("seller@example.com", "a")
    with pytest.raises(AuthError):
        await auth.sign_up("SELLER@example.com", "b")


async def test_invalid_tokens_yield_no_session(auth):
    user = await auth.sign_up("seller@example.com", "hunter22")
    expired = jwt.encode(
        {"sub": str(user.id), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        TEST_AUTH.secret_key,
        algorithm=TEST_AUTH.algorithm,
    )
    forged = jwt.encode({"sub": str(user.id)}, "other-secret", algorithm="HS256")

    assert await auth.get_session(None) is None
    assert await auth.get_session("garbage") is None
    assert await auth.get_session(expired) is None
    assert await auth.get_session(forged) is None
