"""SWIFT 코드 SQLAlchemy ORM 모델 정의.

SWIFT code SQLAlchemy ORM model definition.
A single table keyed by the 11-character SWIFT/BIC code. The headquarters/branch
hierarchy is not stored: branches of a headquarters are the rows sharing its
first 8 characters.

Tables:
    - swift_codes: SWIFT/BIC 은행 식별 코드 (SWIFT/BIC bank identifier codes)
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 본점 코드 접미사 — Suffix identifying a headquarters code
HEADQUARTER_SUFFIX: str = "XXX"
# 본점-지점 공통 접두사 길이 — Length of the prefix shared by an HQ and its branches
BRANCH_PREFIX_LENGTH: int = 8


def is_headquarter_code(swift_code: str) -> bool:
    """코드가 본점(XXX로 끝남)인지 여부.

    Whether the code designates a headquarters (ends with "XXX").
    """
    return swift_code.upper().endswith(HEADQUARTER_SUFFIX)


def branch_prefix(swift_code: str) -> str:
    """지점 그룹을 결정하는 8자리 접두사 — First 8 characters shared by an HQ and its branches."""
    return swift_code[:BRANCH_PREFIX_LENGTH]


class SwiftCode(Base):
    """SWIFT 코드 모델 — 본점 또는 지점 하나를 나타냄.

    SWIFT code model — One headquarters or branch record.

    Attributes:
        swift_code: 11자리 SWIFT 코드, PK (11-character code, primary key, uppercase)
        country_iso2: 국가 ISO2 코드 (2-letter country code, uppercase)
        country_name: 국가 이름 (Country name, uppercase)
        bank_name: 은행 이름 (Bank name)
        address: 주소 (Street address, optional)
        town_name: 도시 이름 (Town name, optional)
        code_type: 코드 유형 (Code type such as BIC11, max 5 chars)
        is_headquarter: 본점 여부 (True iff the code ends with "XXX")
        time_zone: 시간대 (IANA time zone, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "swift_codes"
    __table_args__ = (
        Index("ix_swift_codes_country_iso2", "country_iso2"),
    )

    # SWIFT 코드 — 11-character primary key
    swift_code: Mapped[str] = mapped_column(String(11), primary_key=True)
    # 국가 ISO2 코드 — e.g. "DE", "PL"
    country_iso2: Mapped[str] = mapped_column(String(2), nullable=False)
    # 코드 유형 — e.g. "BIC11"
    code_type: Mapped[str] = mapped_column(String(5), nullable=False)
    # 은행 이름 — column is named "name" in the source data
    bank_name: Mapped[str] = mapped_column("name", Text, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    town_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 국가 이름 — e.g. "GERMANY"
    country_name: Mapped[str] = mapped_column(String, nullable=False)
    # 본점 여부 — must match the "XXX" suffix of swift_code
    is_headquarter: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    time_zone: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<SwiftCode {self.swift_code} hq={self.is_headquarter}>"
