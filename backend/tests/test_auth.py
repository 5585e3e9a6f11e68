"""
Record Shop Backend — Accounts and Session Token Tests
========================================================

Test Strategy:
    ✅ Password hashing and verification (bcrypt)
    ✅ Token encode/decode, expiry and tampering (PyJWT)
    ✅ Credential rules on signup, including the bcrypt 72-byte limit
    ✅ Unique-email violations surface as DuplicateError
    ✅ /signup, /login, /logout over HTTP, including the `token` cookie
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import jwt
import pytest

from recordshop.config import settings
from recordshop.exceptions import (
    CredentialValidationError,
    DuplicateError,
    RecordValidationError,
    UnauthorizedError,
    ValidationError,
)
from recordshop.models.user import User
from recordshop.repositories.user_repository import UserRepository
from recordshop.schemas.user import UserCredentials
from recordshop.security import (
    JWT_ALGORITHM,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from recordshop.services.user_service import UserService, validate_credentials


class TestPasswords:

    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("hunter22")

        assert hashed != "hunter22"
        assert hashed.startswith("$2")
        assert verify_password("hunter22", hashed)

    def test_wrong_password_fails(self):
        assert not verify_password("hunter23", hash_password("hunter22"))

    def test_malformed_hash_fails_closed(self):
        assert not verify_password("hunter22", "not-a-bcrypt-hash")


class TestSessionToken:

    def test_round_trip_returns_user_id(self):
        assert decode_access_token(create_access_token(user_id=42)) == 42

    def test_expiry_follows_ttl(self):
        issued = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        token = create_access_token(user_id=1, now=issued)

        claims = jwt.decode(
            token, settings.secret_key, algorithms=[JWT_ALGORITHM], options={"verify_exp": False}
        )

        assert claims["exp"] == int((issued + timedelta(hours=settings.token_ttl_hours)).timestamp())

    def test_expired_token_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=settings.token_ttl_hours + 1)
        token = create_access_token(user_id=1, now=issued)

        with pytest.raises(UnauthorizedError, match="expired"):
            decode_access_token(token)

    def test_foreign_signature_rejected(self):
        token = jwt.encode(
            {"user_id": 1, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "some-other-secret",
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(UnauthorizedError):
            decode_access_token(token)

    def test_token_without_user_id_rejected(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.secret_key,
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(UnauthorizedError):
            decode_access_token(token)


class TestCredentialRules:

    def test_valid_credentials_pass(self):
        validate_credentials(UserCredentials(email="thom@example.com", password="paranoid"))

    def test_missing_fields_reported_together(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            validate_credentials(UserCredentials())

        assert exc_info.value.errors == {
            "email": "email is required.",
            "password": "password is required.",
        }

    @pytest.mark.parametrize("password", ["short", "x" * 31])
    def test_password_length_bounds(self, password):
        with pytest.raises(CredentialValidationError) as exc_info:
            validate_credentials(UserCredentials(email="thom@example.com", password=password))

        assert list(exc_info.value.errors) == ["password"]

    def test_malformed_email_rejected(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            validate_credentials(UserCredentials(email="not-an-email", password="paranoid"))

        assert list(exc_info.value.errors) == ["email"]

    def test_multibyte_password_over_bcrypt_limit_rejected(self):
        password = "\N{MUSICAL NOTE}" * 30

        with pytest.raises(CredentialValidationError) as exc_info:
            validate_credentials(UserCredentials(email="thom@example.com", password=password))

        assert exc_info.value.errors == {
            "password": "password must be at most 72 bytes when UTF-8 encoded."
        }

    def test_multibyte_password_within_limit_passes(self):
        validate_credentials(UserCredentials(email="thom@example.com", password="é" * 30))

    def test_credential_errors_are_not_record_errors(self):
        with pytest.raises(CredentialValidationError) as exc_info:
            validate_credentials(UserCredentials())

        assert not isinstance(exc_info.value, RecordValidationError)
        assert isinstance(exc_info.value, ValidationError)


class TestUserRepository:

    def setup_method(self):
        self.repository = UserRepository()

    @pytest.mark.asyncio
    async def test_unique_email_violation_is_duplicate_error(self, db_session):
        await self.repository.create_user(db_session, User(email="thom@example.com", password="x"))

        with pytest.raises(DuplicateError) as exc_info:
            await self.repository.create_user(db_session, User(email="thom@example.com", password="y"))

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_signup_losing_a_race_is_duplicate_error(self, db_session):
        await self.repository.create_user(db_session, User(email="thom@example.com", password="x"))
        # the lookup misses, as it would for a concurrent request
        service = UserService(repository=self.repository)
        self.repository.get_by_email = AsyncMock(return_value=None)

        with pytest.raises(DuplicateError):
            await service.sign_up(
                db_session, UserCredentials(email="thom@example.com", password="paranoid")
            )


class TestAccountEndpoints:

    CREDENTIALS = {"email": "thom@example.com", "password": "paranoid"}

    @pytest.mark.asyncio
    async def test_signup_returns_201_without_password(self, test_client):
        response = await test_client.post("/signup", json=self.CREDENTIALS)

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "thom@example.com"
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_duplicate_signup_is_409(self, test_client):
        await test_client.post("/signup", json=self.CREDENTIALS)

        response = await test_client.post("/signup", json=self.CREDENTIALS)

        assert response.status_code == 409
        assert response.json()["error"] == "duplicate"
        assert response.json()["details"] == {"field": "email"}

    @pytest.mark.asyncio
    async def test_invalid_signup_is_400(self, test_client):
        response = await test_client.post("/signup", json={"email": "", "password": "abc"})

        assert response.status_code == 400
        assert set(response.json()["details"]["fields"]) == {"email", "password"}

    @pytest.mark.asyncio
    async def test_login_sets_token_cookie_usable_for_writes(self, test_client, ok_computer):
        await test_client.post("/signup", json=self.CREDENTIALS)

        response = await test_client.post("/login", json=self.CREDENTIALS)

        assert response.status_code == 200
        assert response.json() == {"message": "Logged in"}
        set_cookie = response.headers["set-cookie"]
        assert "token=" in set_cookie
        assert "httponly" in set_cookie.lower()

        token = response.cookies.get("token") or set_cookie.split("token=", 1)[1].split(";", 1)[0]
        created = await test_client.post("/records", json=ok_computer, headers={"Cookie": f"token={token}"})
        assert created.status_code == 201

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, test_client):
        await test_client.post("/signup", json=self.CREDENTIALS)

        response = await test_client.post("/login", json={**self.CREDENTIALS, "password": "wrong-one"})

        assert response.status_code == 401
        assert response.json()["error"] == "authentication_failed"
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_unknown_email_is_401(self, test_client):
        response = await test_client.post("/login", json=self.CREDENTIALS)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_expires_cookie(self, test_client):
        response = await test_client.post("/logout")

        assert response.status_code == 200
        set_cookie = response.headers["set-cookie"].lower()
        assert "token=" in set_cookie
        assert "max-age=0" in set_cookie

    @pytest.mark.asyncio
    async def test_multibyte_password_over_byte_limit_is_400(self, test_client):
        response = await test_client.post(
            "/signup", json={**self.CREDENTIALS, "password": "\N{MUSICAL NOTE}" * 30}
        )

        assert response.status_code == 400
        assert list(response.json()["details"]["fields"]) == ["password"]
