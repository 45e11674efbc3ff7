"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations.

Modules:
    swift_code: SWIFT/BIC 코드 (SWIFT/BIC bank identifier codes)
"""

from app.models.swift_code import SwiftCode

__all__ = [
    "SwiftCode",
]
