"""Create identity users and encrypted brokerage credentials tables."""

from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Apply identity v1 storage schema.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        `password_enc` stores `iv:salt:authTag:ciphertext` hex tokens only, never plaintext.
    Raises:
        Exception: Postgres execution errors from Alembic runtime.
    Side Effects:
        Creates identity tables, constraints, and indexes.
    """
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS identity_users (
            user_id UUID PRIMARY KEY,
            email TEXT NOT NULL,
            username TEXT NOT NULL,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL,
            updated_at TIMESTAMPTZ NOT NULL,
            CONSTRAINT identity_users_email_uq UNIQUE (email),
            CONSTRAINT identity_users_username_uq UNIQUE (username),
            CONSTRAINT identity_users_email_lower_chk CHECK (email = lower(email)),
            CONSTRAINT identity_users_username_chk
                CHECK (username ~ '^[A-Za-z0-9_]{3,30}$'),
            CONSTRAINT identity_users_updated_after_created_chk
                CHECK (updated_at >= created_at)
        )
        """
    )

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS identity_brokerage_credentials (
            credential_id UUID PRIMARY KEY,
            user_id UUID NOT NULL
                REFERENCES identity_users (user_id) ON DELETE CASCADE,
            login TEXT NOT NULL,
            password_enc TEXT NOT NULL,
            mfa_enabled BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMPTZ NOT NULL,
            updated_at TIMESTAMPTZ NOT NULL,
            last_authenticated_at TIMESTAMPTZ NULL,
            CONSTRAINT identity_brokerage_credentials_user_uq UNIQUE (user_id),
            CONSTRAINT identity_brokerage_credentials_login_chk CHECK (length(login) > 0),
            CONSTRAINT identity_brokerage_credentials_token_shape_chk
                CHECK (
                    password_enc ~ '^[0-9a-fA-F]{32}:[0-9a-fA-F]{128}:[0-9a-fA-F]{32}:[0-9a-fA-F]*$'
                )
        )
        """
    )


def downgrade() -> None:
    """
    Drop identity v1 tables (credentials first because of the foreign key).

    Side Effects:
        Permanently deletes stored users and encrypted credentials.
    """
    op.execute("DROP TABLE IF EXISTS identity_brokerage_credentials")
    op.execute("DROP TABLE IF EXISTS identity_users")
