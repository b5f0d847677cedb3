"""Tests for local login and logout."""

from unittest.mock import AsyncMock, patch

import pytest

from idgate.core.exceptions import GENERIC_LOGIN_FAILURE, UnauthorizedError
from idgate.domain.services.authentication.user_authentication_service import (
    UserAuthenticationService,
)
from idgate.domain.services.session.session_service import SessionIssuanceService
from idgate.domain.value_objects.session import SessionPrincipal
from idgate.utils.security import verify_password
from tests.factories.user import TEST_ROUNDS, create_fake_user

VERIFY_PASSWORD = "idgate.domain.services.authentication.user_authentication_service.verify_password"


@pytest.fixture
def mock_user_repository():
    return AsyncMock()


@pytest.fixture
def mock_session_store():
    store = AsyncMock()
    store.create.return_value = "session-handle"
    return store


@pytest.fixture
def service(mock_user_repository, mock_session_store):
    return UserAuthenticationService(
        mock_user_repository, SessionIssuanceService(mock_session_store), pbkdf2_rounds=TEST_ROUNDS
    )


class TestUserAuthenticationService:
    @pytest.mark.asyncio
    async def test_successful_login_issues_session(self, service, mock_user_repository, mock_session_store):
        # Arrange
        user = create_fake_user(id=5, username="alice", password="pw", sysadmin_flag=True)
        mock_user_repository.lookup_by_principal.return_value = user

        # Act
        session = await service.login("alice", "pw")

        # Assert
        assert session.handle == "session-handle"
        assert session.principal.user_id == 5
        assert session.principal.username == "alice"
        assert session.principal.is_sysadmin is True
        mock_session_store.create.assert_awaited_once_with(5, "alice", True)

    @pytest.mark.asyncio
    async def test_login_by_email(self, service, mock_user_repository):
        user = create_fake_user(username="alice", email="alice@example.com", password="pw")
        mock_user_repository.lookup_by_principal.return_value = user

        session = await service.login("alice@example.com", "pw")

        mock_user_repository.lookup_by_principal.assert_awaited_once_with("alice@example.com")
        assert session.principal.username == "alice"

    @pytest.mark.asyncio
    async def test_unknown_principal_and_wrong_password_are_indistinguishable(
        self, service, mock_user_repository, mock_session_store
    ):
        mock_user_repository.lookup_by_principal.return_value = None
        with pytest.raises(UnauthorizedError) as unknown:
            await service.login("ghost", "pw")

        mock_user_repository.lookup_by_principal.return_value = create_fake_user(password="right")
        with pytest.raises(UnauthorizedError) as wrong:
            await service.login("alice", "wrong")

        assert str(unknown.value) == str(wrong.value) == GENERIC_LOGIN_FAILURE
        mock_session_store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_without_local_password_cannot_login(self, service, mock_user_repository):
        mock_user_repository.lookup_by_principal.return_value = create_fake_user()

        with pytest.raises(UnauthorizedError):
            await service.login("oauth-user", "anything")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("principal,password", [("", "pw"), ("alice", "")])
    async def test_blank_credentials_are_unauthorized(self, service, mock_user_repository, principal, password):
        with pytest.raises(UnauthorizedError):
            await service.login(principal, password)
        mock_user_repository.lookup_by_principal.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_logout_destroys_session(self, service, mock_session_store):
        mock_session_store.get.return_value = SessionPrincipal(user_id=5, username="alice", is_sysadmin=False)

        await service.logout("session-handle")

        mock_session_store.get.assert_awaited_once_with("session-handle")
        mock_session_store.destroy.assert_awaited_once_with("session-handle")

    @pytest.mark.asyncio
    async def test_logout_of_unknown_handle_is_ignored(self, service, mock_session_store):
        mock_session_store.get.return_value = None

        await service.logout("stale-handle")

        mock_session_store.destroy.assert_awaited_once_with("stale-handle")


class TestLoginHashingWork:
    """Every failed login runs exactly one password hash, whether or not the account exists."""

    @pytest.mark.asyncio
    async def test_unknown_principal_still_hashes(self, service, mock_user_repository):
        mock_user_repository.lookup_by_principal.return_value = None

        with patch(VERIFY_PASSWORD, wraps=verify_password) as verify:
            with pytest.raises(UnauthorizedError):
                await service.login("ghost", "pw")

        assert verify.call_count == 1

    @pytest.mark.asyncio
    async def test_user_without_local_password_still_hashes(self, service, mock_user_repository):
        mock_user_repository.lookup_by_principal.return_value = create_fake_user()

        with patch(VERIFY_PASSWORD, wraps=verify_password) as verify:
            with pytest.raises(UnauthorizedError):
                await service.login("oauth-user", "pw")

        assert verify.call_count == 1

    @pytest.mark.asyncio
    async def test_unknown_and_known_principal_do_equal_work(self, service, mock_user_repository):
        calls = {}
        for label, user in (("unknown", None), ("known", create_fake_user(password="right"))):
            mock_user_repository.lookup_by_principal.return_value = user
            with patch(VERIFY_PASSWORD, wraps=verify_password) as verify:
                with pytest.raises(UnauthorizedError):
                    await service.login("alice", "wrong")
            calls[label] = verify.call_count

        assert calls["unknown"] == calls["known"] == 1

    @pytest.mark.asyncio
    async def test_decoy_hash_never_matches(self, service, mock_user_repository, mock_session_store):
        mock_user_repository.lookup_by_principal.return_value = None

        for password in ("pw", "password", "admin"):
            with pytest.raises(UnauthorizedError):
                await service.login("ghost", password)

        mock_session_store.create.assert_not_awaited()
