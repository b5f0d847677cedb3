"""Route tests: status codes, cookies and error mapping, with domain services mocked."""

from unittest.mock import AsyncMock

import pytest

from idgate.core.exceptions import (
    GENERIC_LOGIN_FAILURE,
    BadRequestError,
    DatabaseError,
    DuplicateIdentityError,
    EmailServiceError,
    ForbiddenError,
    InvalidQueryError,
    InvalidTokenError,
    UnauthorizedError,
    UpstreamError,
    UserNotFoundError,
)
from idgate.domain.value_objects.session import AuthenticatedSession, SessionPrincipal
from idgate.infrastructure.dependency_injection.auth_dependencies import (
    get_oauth_service,
    get_password_reset_request_service,
    get_password_reset_service,
    get_user_authentication_service,
    get_user_repository,
)

SESSION = AuthenticatedSession(
    handle="session-handle",
    principal=SessionPrincipal(user_id=1, username="alice", is_sysadmin=False),
)


@pytest.fixture
def mock_service():
    return AsyncMock()


class TestLoginRoute:
    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, app, async_client, mock_service):
        mock_service.login.return_value = SESSION
        app.dependency_overrides[get_user_authentication_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/login", json={"principal": "alice", "password": "pw"})

        assert response.status_code == 200
        assert response.json() == {"user_id": 1, "username": "alice", "is_sysadmin": False}
        cookie = response.headers["set-cookie"]
        assert "sid=session-handle" in cookie
        assert "httponly" in cookie.lower()
        mock_service.login.assert_awaited_once_with("alice", "pw")

    @pytest.mark.asyncio
    async def test_failed_login_is_401_with_generic_message(self, app, async_client, mock_service):
        mock_service.login.side_effect = UnauthorizedError()
        app.dependency_overrides[get_user_authentication_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/login", json={"principal": "alice", "password": "bad"})

        assert response.status_code == 401
        assert response.json()["detail"] == GENERIC_LOGIN_FAILURE
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_missing_fields_are_422(self, app, async_client, mock_service):
        app.dependency_overrides[get_user_authentication_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/login", json={"principal": "alice"})

        assert response.status_code == 422


class TestLogoutRoute:
    @pytest.mark.asyncio
    async def test_logout_destroys_cookie_session(self, app, async_client, mock_service):
        app.dependency_overrides[get_user_authentication_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/logout", headers={"Cookie": "sid=session-handle"})

        assert response.status_code == 200
        mock_service.logout.assert_awaited_once_with("session-handle")

    @pytest.mark.asyncio
    async def test_logout_without_cookie_is_ok(self, app, async_client, mock_service):
        app.dependency_overrides[get_user_authentication_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        mock_service.logout.assert_not_awaited()


class TestUserExistsRoute:
    @pytest.mark.asyncio
    async def test_reports_existence(self, app, async_client):
        repository = AsyncMock()
        repository.exists.return_value = True
        app.dependency_overrides[get_user_repository] = lambda: repository

        response = await async_client.get("/api/v1/auth/user-exists", params={"target": "email", "value": "a@b.io"})

        assert response.status_code == 200
        assert response.json() == {"exists": True}
        query, target = repository.exists.await_args.args
        assert query.email == "a@b.io"
        assert target == "email"

    @pytest.mark.asyncio
    async def test_unsupported_target_is_422(self, app, async_client):
        app.dependency_overrides[get_user_repository] = lambda: AsyncMock()

        response = await async_client.get("/api/v1/auth/user-exists", params={"target": "comment", "value": "x"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_query_is_400(self, app, async_client):
        repository = AsyncMock()
        repository.exists.side_effect = InvalidQueryError()
        app.dependency_overrides[get_user_repository] = lambda: repository

        response = await async_client.get("/api/v1/auth/user-exists", params={"target": "username", "value": ""})

        assert response.status_code == 400


class TestPasswordResetRoutes:
    @pytest.mark.asyncio
    async def test_forgot_password(self, app, async_client, mock_service):
        app.dependency_overrides[get_password_reset_request_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/forgot-password", json={"email": "a@example.com"})

        assert response.status_code == 200
        mock_service.request_password_reset.assert_awaited_once_with("a@example.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,status_code",
        [
            (BadRequestError("Invalid email address."), 400),
            (ForbiddenError(), 403),
            (UserNotFoundError(), 404),
            (EmailServiceError("smtp down"), 502),
            (DatabaseError("boom"), 500),
        ],
    )
    async def test_forgot_password_error_mapping(self, app, async_client, mock_service, error, status_code):
        mock_service.request_password_reset.side_effect = error
        app.dependency_overrides[get_password_reset_request_service] = lambda: mock_service

        response = await async_client.post("/api/v1/auth/forgot-password", json={"email": "a@example.com"})

        assert response.status_code == status_code
        assert response.json()["code"] == error.code

    @pytest.mark.asyncio
    async def test_reset_password(self, app, async_client, mock_service):
        app.dependency_overrides[get_password_reset_service] = lambda: mock_service

        response = await async_client.post(
            "/api/v1/auth/reset-password", json={"reset_uuid": "tok", "password": "new-pw"}
        )

        assert response.status_code == 200
        mock_service.reset_password.assert_awaited_once_with("tok", "new-pw")

    @pytest.mark.asyncio
    async def test_reset_with_stale_token_is_404(self, app, async_client, mock_service):
        mock_service.reset_password.side_effect = UserNotFoundError()
        app.dependency_overrides[get_password_reset_service] = lambda: mock_service

        response = await async_client.post(
            "/api/v1/auth/reset-password", json={"reset_uuid": "stale", "password": "new-pw"}
        )

        assert response.status_code == 404


class TestOAuthCallbackRoute:
    @pytest.mark.asyncio
    async def test_callback_sets_cookie_and_redirects(self, app, async_client, mock_service):
        mock_service.authenticate.return_value = SESSION
        app.dependency_overrides[get_oauth_service] = lambda: mock_service

        response = await async_client.get("/api/v1/auth/oauth/callback", params={"code": "auth-code"})

        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert "sid=session-handle" in response.headers["set-cookie"]
        mock_service.authenticate.assert_awaited_once_with("auth-code")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,status_code",
        [
            (InvalidTokenError(), 401),
            (UpstreamError("provider down"), 502),
            (DuplicateIdentityError(), 409),
            (BadRequestError("Authorization code is required."), 400),
        ],
    )
    async def test_callback_error_mapping(self, app, async_client, mock_service, error, status_code):
        mock_service.authenticate.side_effect = error
        app.dependency_overrides[get_oauth_service] = lambda: mock_service

        response = await async_client.get("/api/v1/auth/oauth/callback", params={"code": "auth-code"})

        assert response.status_code == status_code
        assert "set-cookie" not in response.headers
