"""oauth clients, sessions, access tokens and scopes

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

id_type = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "oauth_clients",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("secret", sa.String(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("request_limit", sa.Integer(), nullable=False, server_default="5000"),
        sa.Column("current_total_request", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("request_limit_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_request_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "oauth_client_endpoints",
        sa.Column("id", id_type, primary_key=True, autoincrement=True),
        sa.Column("client_id", sa.String(64), sa.ForeignKey("oauth_clients.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("redirect_uri", sa.String(255), nullable=False),
    )
    op.create_index("ix_oauth_client_endpoints_client_id", "oauth_client_endpoints", ["client_id"])

    op.create_table(
        "oauth_scopes",
        sa.Column("id", id_type, primary_key=True, autoincrement=True),
        sa.Column("scope", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_oauth_scopes_scope", "oauth_scopes", ["scope"], unique=True)

    op.create_table(
        "oauth_sessions",
        sa.Column("id", id_type, primary_key=True, autoincrement=True),
        sa.Column("client_id", sa.String(64), sa.ForeignKey("oauth_clients.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("owner_type", sa.String(32), nullable=False),
        sa.Column("owner_id", sa.String(255), nullable=False),
    )
    op.create_index("ix_oauth_sessions_client_id", "oauth_sessions", ["client_id"])

    op.create_table(
        "oauth_session_access_tokens",
        sa.Column("id", id_type, primary_key=True, autoincrement=True),
        sa.Column("session_id", id_type, sa.ForeignKey("oauth_sessions.id", ondelete="CASCADE"),
                  nullable=False),
        sa.Column("access_token", sa.String(1024), nullable=False),
        sa.Column("access_token_expires", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_oauth_session_access_tokens_session_id", "oauth_session_access_tokens", ["session_id"])
    op.create_index(
        "ix_oauth_session_access_tokens_access_token", "oauth_session_access_tokens", ["access_token"], unique=True
    )

    op.create_table(
        "oauth_session_token_scopes",
        sa.Column("access_token_id", id_type,
                  sa.ForeignKey("oauth_session_access_tokens.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("scope_id", id_type, sa.ForeignKey("oauth_scopes.id", ondelete="CASCADE"), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("oauth_session_token_scopes")
    op.drop_index("ix_oauth_session_access_tokens_access_token", table_name="oauth_session_access_tokens")
    op.drop_index("ix_oauth_session_access_tokens_session_id", table_name="oauth_session_access_tokens")
    op.drop_table("oauth_session_access_tokens")
    op.drop_index("ix_oauth_sessions_client_id", table_name="oauth_sessions")
    op.drop_table("oauth_sessions")
    op.drop_index("ix_oauth_scopes_scope", table_name="oauth_scopes")
    op.drop_table("oauth_scopes")
    op.drop_index("ix_oauth_client_endpoints_client_id", table_name="oauth_client_endpoints")
    op.drop_table("oauth_client_endpoints")
    op.drop_table("oauth_clients")
