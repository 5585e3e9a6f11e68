"""
Record Shop Backend — User Service
====================================

What:  Account sign-up and login.
How:   Validates credentials (all rules, aggregated like record validation),
       hashes passwords with bcrypt, issues signed session tokens.
Who:   Called by the /signup and /login route handlers.

Credential rules:
    email      required, at most 30 characters, shaped like an address
    password   required, 6 to 30 characters, at most 72 bytes as UTF-8
"""

import logging
import re
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from recordshop.exceptions import AuthenticationError, CredentialValidationError, DuplicateError
from recordshop.models.user import User
from recordshop.repositories.user_repository import UserRepository, user_repository
from recordshop.schemas.user import UserCredentials, UserResponse
from recordshop.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
EMAIL_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 30
# bcrypt refuses longer input
PASSWORD_MAX_BYTES = 72


def validate_credentials(payload: UserCredentials) -> None:
    errors: Dict[str, str] = {}

    if not payload.email:
        errors["email"] = "email is required."
    elif len(payload.email) > EMAIL_MAX_LENGTH:
        errors["email"] = f"email must be at most {EMAIL_MAX_LENGTH} characters."
    elif not EMAIL_PATTERN.match(payload.email):
        errors["email"] = "email must be a valid email address."

    if not payload.password:
        errors["password"] = "password is required."
    elif not PASSWORD_MIN_LENGTH <= len(payload.password) <= PASSWORD_MAX_LENGTH:
        errors["password"] = (
            f"password must be between {PASSWORD_MIN_LENGTH} "
            f"and {PASSWORD_MAX_LENGTH} characters."
        )
    elif len(payload.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors["password"] = (
            f"password must be at most {PASSWORD_MAX_BYTES} bytes when UTF-8 encoded."
        )

    if errors:
        raise CredentialValidationError(errors)


class UserService:

    def __init__(self, repository: Optional[UserRepository] = None):
        self.repository = repository or user_repository

    async def sign_up(self, db: AsyncSession, payload: UserCredentials) -> UserResponse:
        """
        Register a new account.

        Raises:
            CredentialValidationError: email/password break the credential rules
            DuplicateError: the email is already registered (→ 409)
        """
        validate_credentials(payload)

        if await self.repository.get_by_email(db, payload.email) is not None:
            raise DuplicateError(field="email", value=payload.email)

        user = User(email=payload.email, password=hash_password(payload.password))
        stored = await self.repository.create_user(db, user)
        logger.info("User %s signed up", stored.id)
        return UserResponse.model_validate(stored)

    async def log_in(self, db: AsyncSession, payload: UserCredentials) -> str:
        """
        Check credentials and return a signed session token.

        Unknown email and wrong password raise the same AuthenticationError.
        """
        user = await self.repository.get_by_email(db, payload.email)
        if user is None or not verify_password(payload.password, user.password):
            logger.info("Failed login attempt")
            raise AuthenticationError()
        return create_access_token(user.id)


user_service = UserService()
