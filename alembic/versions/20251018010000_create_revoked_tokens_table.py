"""Create revoked_tokens table (append-only token revocation ledger).

Revision ID: 20251018010000
Revises: 20251018000000
Create Date: 2025-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251018010000"
down_revision: Union[str, None] = "20251018000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "revoked_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token", sa.String(length=2048), nullable=False),
        sa.Column("user_label", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("is_revoked", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "revoked_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_revoked_tokens")),
    )
    # Not unique: revoking the same token twice appends a second row.
    op.create_index(op.f("ix_revoked_tokens_token"), "revoked_tokens", ["token"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_revoked_tokens_token"), table_name="revoked_tokens")
    op.drop_table("revoked_tokens")
