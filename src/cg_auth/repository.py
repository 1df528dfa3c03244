"""User store — Protocol plus the SQLAlchemy implementation.

Unit tests inject a fake that conforms to UserRepositoryProtocol.
UserRepository builds its queries with the SQLAlchemy 2.0 query builder.
Transactions are managed by the caller via `async with db.begin()`.

Email uniqueness is guarded twice: CredentialService checks before insert,
and the `uq_users_email` constraint rejects whatever slips through that
window. The constraint violation surfaces as DuplicateUserError.
"""

from typing import Protocol

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cg_auth.db_models import UserModel
from src.cg_auth.models import PublicUser, UserRecord
from src.cg_common.errors import DuplicateUserError

_UNIQUE_VIOLATION = "23505"
_EMAIL_CONSTRAINT = "uq_users_email"


class UserRepositoryProtocol(Protocol):
    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> UserRecord | None: ...

    async def insert(
        self,
        db: AsyncSession,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: str,
    ) -> PublicUser: ...


def _is_email_conflict(exc: IntegrityError) -> bool:
    """True only for a unique violation on uq_users_email.

    The asyncpg adapter exposes `sqlstate` on `orig` and keeps the driver
    error, which carries `constraint_name`, as `orig.__cause__`.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None)
    if sqlstate is not None and sqlstate != _UNIQUE_VIOLATION:
        return False

    constraint = getattr(orig, "constraint_name", None) or getattr(
        getattr(orig, "__cause__", None), "constraint_name", None
    )
    if constraint:
        return constraint == _EMAIL_CONSTRAINT
    return _EMAIL_CONSTRAINT in str(exc)


def _model_to_record(user: UserModel) -> UserRecord:
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        password=user.password,
        role=user.role,
        created_at=user.created_at,
    )


class UserRepository:
    async def get_by_email(self, db: AsyncSession, email: str) -> UserRecord | None:
        # Exact match; case folding is whatever the column collation does.
        result = await db.execute(
            select(UserModel).where(UserModel.email == email).limit(1)
        )
        user = result.scalar_one_or_none()
        return _model_to_record(user) if user is not None else None

    async def insert(
        self,
        db: AsyncSession,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: str,
    ) -> PublicUser:
        stmt = (
            insert(UserModel)
            .values(name=name, email=email, password=password_hash, role=role)
            .returning(
                UserModel.id,
                UserModel.name,
                UserModel.email,
                UserModel.role,
                UserModel.created_at,
            )
        )
        try:
            result = await db.execute(stmt)
        except IntegrityError as exc:
            if _is_email_conflict(exc):
                raise DuplicateUserError() from exc
            raise

        row = result.one()
        return PublicUser(
            id=row.id,
            name=row.name,
            email=row.email,
            role=row.role,
            created_at=row.created_at,
        )
