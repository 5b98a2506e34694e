"""
Test Case Suite: Authentication Module
Test ID Range: TC-001 to TC-017

This test suite validates signup, login, admin login, session cookies,
token handling and password changes.
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient
from sqlalchemy import select, func
from app.models.account import Account
from app.services import auth_service
from app.utils.security import create_access_token
from conftest import ADMIN_PASSWORD, USER_PASSWORD


class TestSignupAndLogin:
    """
    Test Case TC-001: Signup, Login and Wrong Password
    Description: A new visitor signs up, logs back in, then fails with a wrong password
    Expected Result: 201 with a user-role account and token, 200 on login, 401 on wrong password
    """
    @pytest.mark.asyncio
    async def test_tc001_signup_login_round_trip(self, client: AsyncClient):
        """TC-001: Signup then login returns the same account"""
        signup = await client.post(
            "/auth/signup",
            json={"name": "A", "email": "a@x.com", "password": "secret1"}
        )

        assert signup.status_code == 201
        data = signup.json()
        assert data["token"]
        assert data["token_type"] == "bearer"
        assert data["user"]["role"] == "user"
        assert data["user"]["status"] == "active"
        assert data["user"]["email"] == "a@x.com"

        client.cookies.clear()
        login = await client.post("/auth/login", json={"email": "a@x.com", "password": "secret1"})
        assert login.status_code == 200
        assert login.json()["user"]["id"] == data["user"]["id"]

        wrong = await client.post("/auth/login", json={"email": "a@x.com", "password": "wrong"})
        assert wrong.status_code == 401
        assert wrong.json()["error"] == "auth_error"

    """
    Test Case TC-002: Duplicate Email Signup
    Description: A second signup with an existing email (different case) fails
    Expected Result: 409 conflict and still exactly one account row
    """
    @pytest.mark.asyncio
    async def test_tc002_duplicate_email_rejected(self, client: AsyncClient, session_factory):
        """TC-002: Email uniqueness is enforced"""
        first = await client.post(
            "/auth/signup",
            json={"name": "Ali", "email": "ali@example.com", "password": "secret1"}
        )
        assert first.status_code == 201

        second = await client.post(
            "/auth/signup",
            json={"name": "Ali Again", "email": "ALI@example.com", "password": "secret2"}
        )
        assert second.status_code == 409
        assert second.json()["error"] == "conflict"

        async with session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(Account).where(Account.email == "ali@example.com")
            )
            assert result.scalar_one() == 1

    """
    Test Case TC-003: Signup Ignores Role Escalation
    Description: A signup body carrying role=admin still creates a regular user
    Expected Result: 201 with role user
    """
    @pytest.mark.asyncio
    async def test_tc003_signup_cannot_choose_role(self, client: AsyncClient):
        """TC-003: Signup always creates role user"""
        response = await client.post(
            "/auth/signup",
            json={"name": "Eve", "email": "eve@example.com", "password": "secret1", "role": "admin"}
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

    """
    Test Case TC-004: Signup Validation
    Description: Short passwords, bad emails and mismatched confirmation are rejected
    Expected Result: 400 validation_error with field errors
    """
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"name": "A", "email": "not-an-email", "password": "secret1"},
        {"name": "A", "email": "a@x.com", "password": "123"},
        {"name": "", "email": "a@x.com", "password": "secret1"},
        {"name": "A", "email": "a@x.com", "password": "secret1", "confirm_password": "secret2"},
        {"email": "a@x.com", "password": "secret1"},
    ])
    async def test_tc004_signup_validation(self, client: AsyncClient, body):
        """TC-004: Invalid signup payloads"""
        response = await client.post("/auth/signup", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert isinstance(data["errors"], list) and data["errors"]

    """
    Test Case TC-005: Login with Unknown Email
    Description: Verify that login fails for an email with no account
    Expected Result: 401 with a generic message
    """
    @pytest.mark.asyncio
    async def test_tc005_login_unknown_email(self, client: AsyncClient):
        """TC-005: Login with unknown email"""
        response = await client.post(
            "/auth/login",
            json={"email": "nobody@example.com", "password": "whatever"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    """
    Test Case TC-006: Login Sets Session Cookie
    Description: Successful login mirrors the token into an httpOnly cookie
    Expected Result: Set-Cookie header with the token cookie
    """
    @pytest.mark.asyncio
    async def test_tc006_login_sets_cookie(self, client: AsyncClient, user_account):
        """TC-006: Login cookie"""
        response = await client.post(
            "/auth/login",
            json={"email": user_account["email"], "password": USER_PASSWORD}
        )

        assert response.status_code == 200
        set_cookie = response.headers.get("set-cookie", "")
        assert f"token={response.json()['token']}" in set_cookie
        assert "httponly" in set_cookie.lower()

    """
    Test Case TC-007: Blocked Account Login
    Description: A blocked account with the right password cannot log in
    Expected Result: 403 auth_error
    """
    @pytest.mark.asyncio
    async def test_tc007_blocked_account_login(self, client: AsyncClient, user_account, session_factory):
        """TC-007: Blocked account login"""
        async with session_factory() as session:
            account = await session.get(Account, user_account["id"])
            account.status = "blocked"
            await session.commit()

        response = await client.post(
            "/auth/login",
            json={"email": user_account["email"], "password": USER_PASSWORD}
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Account is blocked"


class TestAdminLogin:
    """
    Test Case TC-008: Admin Login with Valid Credentials
    Description: Verify that an admin can log in through the back-office endpoint
    Expected Result: 200 with token and admin role
    """
    @pytest.mark.asyncio
    async def test_tc008_admin_login_valid_credentials(self, client: AsyncClient, admin_account):
        """TC-008: Admin login with valid credentials"""
        response = await client.post(
            "/auth/admin/login",
            json={"email": "admin@example.com", "password": ADMIN_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["token"]) > 0
        assert data["user"]["role"] == "admin"

    """
    Test Case TC-009: Admin Login as Regular User
    Description: Correct credentials for a non-admin account are refused
    Expected Result: 403
    """
    @pytest.mark.asyncio
    async def test_tc009_admin_login_non_admin(self, client: AsyncClient, user_account):
        """TC-009: Admin login with a user account"""
        response = await client.post(
            "/auth/admin/login",
            json={"email": user_account["email"], "password": USER_PASSWORD}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "auth_error"

    """
    Test Case TC-010: Admin Login with Invalid Password
    Description: Verify that login fails when incorrect password is provided
    Expected Result: 401
    """
    @pytest.mark.asyncio
    async def test_tc010_admin_login_invalid_password(self, client: AsyncClient, admin_account):
        """TC-010: Admin login with invalid password"""
        response = await client.post(
            "/auth/admin/login",
            json={"email": "admin@example.com", "password": "wrong_password"}
        )

        assert response.status_code == 401

    """
    Test Case TC-011: Admin Login with Missing Email
    Description: Verify that login fails when email field is missing
    Expected Result: 400 validation error
    """
    @pytest.mark.asyncio
    async def test_tc011_admin_login_missing_email(self, client: AsyncClient):
        """TC-011: Admin login with missing email"""
        response = await client.post("/auth/admin/login", json={"password": "test_password"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestSession:
    """
    Test Case TC-012: Current Account with Bearer Token
    Description: /auth/me returns the caller's account without any password data
    Expected Result: 200 with account fields only
    """
    @pytest.mark.asyncio
    async def test_tc012_me_with_bearer(self, client: AsyncClient, user_account, user_headers):
        """TC-012: Get current account"""
        response = await client.get("/auth/me", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user_account["id"]
        assert "password" not in data
        assert "hashed_password" not in data

    """
    Test Case TC-013: Current Account with Cookie
    Description: The session cookie authenticates when no Authorization header is sent
    Expected Result: 200
    """
    @pytest.mark.asyncio
    async def test_tc013_me_with_cookie(self, client: AsyncClient, user_account):
        """TC-013: Cookie authentication"""
        token = create_access_token(account_id=user_account["id"], role="user", email=user_account["email"])
        client.cookies.set("token", token)

        response = await client.get("/auth/me")

        assert response.status_code == 200
        assert response.json()["email"] == user_account["email"]

    """
    Test Case TC-014: Invalid and Expired Tokens
    Description: Garbage and expired tokens are refused
    Expected Result: 401 with WWW-Authenticate header
    """
    @pytest.mark.asyncio
    async def test_tc014_invalid_tokens(self, client: AsyncClient, user_account):
        """TC-014: Invalid token handling"""
        garbage = await client.get("/auth/me", headers={"Authorization": "Bearer not.a.token"})
        assert garbage.status_code == 401
        assert garbage.headers.get("www-authenticate") == "Bearer"

        expired_token = create_access_token(
            account_id=user_account["id"],
            role="user",
            email=user_account["email"],
            expires_delta=timedelta(minutes=-5),
        )
        expired = await client.get("/auth/me", headers={"Authorization": f"Bearer {expired_token}"})
        assert expired.status_code == 401

        missing = await client.get("/auth/me")
        assert missing.status_code == 401

    """
    Test Case TC-015: Logout Clears Cookie
    Description: Logout expires the session cookie
    Expected Result: 200 and a Set-Cookie that clears the token
    """
    @pytest.mark.asyncio
    async def test_tc015_logout(self, client: AsyncClient, user_headers):
        """TC-015: Logout"""
        response = await client.post("/auth/logout", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        set_cookie = response.headers.get("set-cookie", "")
        assert set_cookie.startswith("token=")
        assert "max-age=0" in set_cookie.lower()

    """
    Test Case TC-016: Change Password
    Description: The current password must match; afterwards only the new one works
    Expected Result: 401 for a wrong current password, then 200 and login with the new password
    """
    @pytest.mark.asyncio
    async def test_tc016_change_password(self, client: AsyncClient, user_account, user_headers):
        """TC-016: Change password"""
        wrong = await client.patch(
            "/auth/password",
            json={"current_password": "nope", "new_password": "NewPass123"},
            headers=user_headers,
        )
        assert wrong.status_code == 401

        response = await client.patch(
            "/auth/password",
            json={"current_password": USER_PASSWORD, "new_password": "NewPass123"},
            headers=user_headers,
        )
        assert response.status_code == 200

        old_login = await client.post(
            "/auth/login",
            json={"email": user_account["email"], "password": USER_PASSWORD}
        )
        assert old_login.status_code == 401

        new_login = await client.post(
            "/auth/login",
            json={"email": user_account["email"], "password": "NewPass123"}
        )
        assert new_login.status_code == 200

    """
    Test Case TC-017: Unknown Email Still Checks a Password Hash
    Description: Login for an unregistered email runs the same bcrypt comparison as a wrong password
    Expected Result: 401 and exactly one password verification in both cases
    """
    @pytest.mark.asyncio
    async def test_tc017_unknown_email_runs_hash_check(self, client: AsyncClient, user_account, monkeypatch):
        """TC-017: Uniform login cost"""
        checked = []
        original_verify = auth_service.verify_password

        def recording_verify(plain_password, hashed_password):
            checked.append(hashed_password)
            return original_verify(plain_password, hashed_password)

        monkeypatch.setattr(auth_service, "verify_password", recording_verify)

        unknown = await client.post("/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
        assert unknown.status_code == 401
        assert len(checked) == 1
        assert checked[0].startswith("$2")

        wrong = await client.post("/auth/login", json={"email": user_account["email"], "password": "whatever"})
        assert wrong.status_code == 401
        assert len(checked) == 2
        assert unknown.json() == wrong.json()
