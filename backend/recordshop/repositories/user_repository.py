"""User persistence: insert and lookup by email."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recordshop.exceptions import DatabaseError, DuplicateError
from recordshop.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:

    async def create_user(self, db: AsyncSession, user: User) -> User:
        """
        Insert a user.

        Raises:
            DuplicateError: the unique email constraint rejected the row, e.g.
                a concurrent signup committed the same email first (→ 409)
            DatabaseError: any other insert failure
        """
        try:
            db.add(user)
            await db.flush()
        except IntegrityError:
            logger.info("Signup rejected by unique email constraint")
            raise DuplicateError(field="email", value=user.email)
        except SQLAlchemyError as e:
            logger.error("Failed to insert user: %s", str(e))
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return user

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user: %s", str(e))
            raise DatabaseError(
                message="Could not look up the account. Please try again.",
                context={"error_type": type(e).__name__},
            )


user_repository = UserRepository()
