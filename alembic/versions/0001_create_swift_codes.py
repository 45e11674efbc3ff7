"""create_swift_codes

Revision ID: 0001
Revises:
Create Date: 2026-10-17 10:00:00.000000

SWIFT 코드(swift_codes) 테이블 생성.
본점-지점 관계는 저장하지 않고 8자리 접두사로 계산.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "swift_codes",
        sa.Column("swift_code", sa.String(11), primary_key=True),
        sa.Column("country_iso2", sa.String(2), nullable=False),
        sa.Column("code_type", sa.String(5), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("town_name", sa.Text(), nullable=True),
        sa.Column("country_name", sa.String(), nullable=False),
        sa.Column("is_headquarter", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("time_zone", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_swift_codes_country_iso2", "swift_codes", ["country_iso2"])


def downgrade() -> None:
    op.drop_index("ix_swift_codes_country_iso2", table_name="swift_codes")
    op.drop_table("swift_codes")
