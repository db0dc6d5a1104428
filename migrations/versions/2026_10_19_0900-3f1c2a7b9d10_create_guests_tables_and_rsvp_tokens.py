"""create guests, tables and rsvp_tokens

Revision ID: 3f1c2a7b9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a7b9d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tables",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.CheckConstraint("capacity BETWEEN 1 AND 50", name="ck_tables_capacity_range"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_tables_name", "tables", ["name"], unique=True)

    op.create_table(
        "guests",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("group_family", sa.String(length=100), nullable=True),
        sa.Column("number_of_people", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "status",
            sa.Enum("pending", "confirmed", "declined", name="guest_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("table_id", sa.UUID(), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.CheckConstraint(
            "number_of_people BETWEEN 0 AND 20", name="ck_guests_number_of_people_range"
        ),
        sa.ForeignKeyConstraint(["table_id"], ["tables.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_guests_first_name", "guests", ["first_name"])
    op.create_index("ix_guests_last_name", "guests", ["last_name"])
    op.create_index("ix_guests_email", "guests", ["email"])
    op.create_index("ix_guests_group_family", "guests", ["group_family"])
    op.create_index("ix_guests_status", "guests", ["status"])
    op.create_index("ix_guests_table_id", "guests", ["table_id"])

    op.create_table(
        "rsvp_tokens",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("token", sa.String(length=100), nullable=False),
        sa.Column("guest_id", sa.UUID(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.ForeignKeyConstraint(["guest_id"], ["guests.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("guest_id", name="uq_rsvp_tokens_guest_id"),
    )
    op.create_index("ix_rsvp_tokens_token", "rsvp_tokens", ["token"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_rsvp_tokens_token", table_name="rsvp_tokens")
    op.drop_table("rsvp_tokens")

    op.drop_index("ix_guests_table_id", table_name="guests")
    op.drop_index("ix_guests_status", table_name="guests")
    op.drop_index("ix_guests_group_family", table_name="guests")
    op.drop_index("ix_guests_email", table_name="guests")
    op.drop_index("ix_guests_last_name", table_name="guests")
    op.drop_index("ix_guests_first_name", table_name="guests")
    op.drop_table("guests")
    sa.Enum(name="guest_status_enum").drop(op.get_bind(), checkfirst=True)

    op.drop_index("ix_tables_name", table_name="tables")
    op.drop_table("tables")
