"""Credential service: password hashing, authentication, user creation.

The user store and logger are injected; the AsyncSession is passed per call.
Transactions are managed by the caller (router layer) via `async with db.begin()`.

Error surfaces differ:
  - hash/compare failures are masked (HashingError / ComparisonError carry a
    generic message; the bcrypt detail only goes to the log),
  - lookup, duplicate and credential failures propagate unchanged.
"""

import logging

import anyio.to_thread
from sqlalchemy.ext.asyncio import AsyncSession

from src.cg_auth.models import PublicUser
from src.cg_auth.password import hash_password, verify_password
from src.cg_auth.repository import UserRepository, UserRepositoryProtocol
from src.cg_common.errors import (
    ComparisonError,
    DuplicateUserError,
    HashingError,
    InvalidCredentialsError,
    NotFoundError,
)

DEFAULT_ROLE = "user"


class CredentialService:
    """Stateless service — instantiate once, reuse across requests."""

    def __init__(
        self,
        repository: UserRepositoryProtocol | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository if repository is not None else UserRepository()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    async def hash_password(self, password: str) -> str:
        """Salted bcrypt hash, computed in a worker thread."""
        try:
            return await anyio.to_thread.run_sync(hash_password, password)
        except Exception as exc:
            self._logger.error("Error while hashing the password: %s", exc)
            raise HashingError() from None

    async def compare_password(self, password: str, hashed_password: str) -> bool:
        try:
            return await anyio.to_thread.run_sync(verify_password, password, hashed_password)
        except Exception as exc:
            self._logger.error("Error while comparing password: %s", exc)
            raise ComparisonError() from None

    async def authenticate_user(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> PublicUser:
        """Check credentials and return the user without its password hash.

        Unlike a login endpoint that hides which half was wrong, this reports
        NotFoundError and InvalidCredentialsError separately; mapping them to
        a single response is the handler's call.
        """
        try:
            user = await self._repository.get_by_email(db, email)
            if user is None:
                raise NotFoundError("User not found")

            if not await self.compare_password(password, user.password):
                raise InvalidCredentialsError("Invalid password")

            self._logger.info("User authenticated successfully: %s", user.id)
            return user.to_public()
        except Exception as exc:
            self._logger.error("Error while authenticating user: %s", exc)
            raise

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        db: AsyncSession,
        role: str = DEFAULT_ROLE,
    ) -> PublicUser:
        """Insert a new user unless the email is taken.

        The caller must wrap this in `async with db.begin()`.
        """
        try:
            existing = await self._repository.get_by_email(db, email)
            if existing is not None:
                raise DuplicateUserError("User already exists")

            password_hash = await self.hash_password(password)

            new_user = await self._repository.insert(
                db,
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
            )

            self._logger.info("Successfully created user: %s", new_user.id)
            return new_user
        except Exception as exc:
            self._logger.error("Error while creating user: %s", exc)
            raise
