"""Create form_records table.

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
    op.execute("""
        CREATE TABLE form_records (
            id              UUID PRIMARY KEY,
            name            TEXT NOT NULL,
            mobile          TEXT NOT NULL,
            dob             TEXT NOT NULL,
            age             INT NOT NULL,
            action          TEXT NOT NULL,
            processed_at    TIMESTAMPTZ NOT NULL,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),

            CONSTRAINT valid_age CHECK (age BETWEEN 0 AND 150),
            CONSTRAINT valid_action CHECK (action IN ('create', 'update', 'delete'))
        );
    """)

    # mobile is the lookup key for update/delete but is not unique
    op.execute("CREATE INDEX idx_form_records_mobile ON form_records(mobile, created_at);")
    op.execute("CREATE INDEX idx_form_records_created ON form_records(created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS form_records CASCADE;")
