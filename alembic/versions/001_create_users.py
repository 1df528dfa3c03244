"""001: create users table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")
    op.execute("""
        CREATE TABLE users (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            name            VARCHAR(255)    NOT NULL,
            email           VARCHAR(255)    NOT NULL,
            password        VARCHAR(255)    NOT NULL,
            role            VARCHAR(32)     NOT NULL DEFAULT 'user',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_email       UNIQUE (email)
        );
    """)
    op.execute("COMMENT ON TABLE users IS 'Users — sign-up / sign-in credentials';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
