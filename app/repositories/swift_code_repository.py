"""SWIFT 코드 레포지토리 — SWIFT 코드 조회/생성/삭제 쿼리.

SWIFT Code Repository — Queries for the swift_codes table.
Extends BaseRepository with code lookup, country scans, branch-prefix scans
and the bulk replace used by the loader.
"""

from typing import Any, Sequence

from sqlalchemy import Select, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.swift_code import SwiftCode
from app.repositories.base import BaseRepository


class SwiftCodeRepository(BaseRepository[SwiftCode]):
    """swift_codes 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the swift_codes table.
    Holds no business rules; the headquarters/branch relation is expressed
    only as a prefix filter.
    """

    def __init__(self) -> None:
        """SwiftCodeRepository를 초기화합니다.

        Initialize the SwiftCodeRepository with the SwiftCode model.
        """
        super().__init__(SwiftCode)

    async def get_by_code(
        self,
        db: AsyncSession,
        swift_code: str,
    ) -> SwiftCode | None:
        """SWIFT 코드로 단일 레코드를 조회합니다.

        Retrieve a single record by its exact SWIFT code.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            swift_code: 11자리 SWIFT 코드 (11-character SWIFT code)

        Returns:
            SwiftCode | None: 조회된 레코드 또는 None (Found record or None)
        """
        return await self.get_by_key(db, swift_code)

    async def list_by_country(
        self,
        db: AsyncSession,
        country_iso2: str,
    ) -> list[SwiftCode]:
        """국가에 속한 모든 SWIFT 코드를 조회합니다. 본점 우선, 코드 오름차순.

        Retrieve all codes of a country, headquarters first, then by code.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            country_iso2: 국가 ISO2 코드 (2-letter country code)

        Returns:
            list[SwiftCode]: SWIFT 코드 목록 (List of records)
        """
        records: Sequence[SwiftCode] = await self.get_all(
            db,
            filters={"country_iso2": country_iso2},
            order_by=[SwiftCode.is_headquarter.desc(), SwiftCode.swift_code.asc()],
        )
        return list(records)

    def _prefix_query(self, query: Select, prefix: str, exclude_code: str) -> Select:
        """접두사 일치 + 자기 자신 제외 조건 — Prefix match excluding one code."""
        return query.where(
            SwiftCode.swift_code.startswith(prefix, autoescape=True),
            SwiftCode.swift_code != exclude_code,
        )

    async def list_by_prefix(
        self,
        db: AsyncSession,
        prefix: str,
        exclude_code: str,
    ) -> list[SwiftCode]:
        """접두사가 같은 SWIFT 코드를 조회합니다 (지점 그룹).

        Retrieve the codes sharing a prefix, excluding one code. Used to
        compute the branch group of a headquarters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            prefix: 8자리 접두사 (8-character prefix)
            exclude_code: 제외할 코드, 보통 본점 자신 (Code to exclude, usually the HQ itself)

        Returns:
            list[SwiftCode]: 코드 오름차순 목록 (Records ordered by code)
        """
        query: Select = self._prefix_query(select(SwiftCode), prefix, exclude_code)
        result = await db.execute(query.order_by(SwiftCode.swift_code))
        return list(result.scalars().all())

    async def count_by_prefix(
        self,
        db: AsyncSession,
        prefix: str,
        exclude_code: str,
    ) -> int:
        """접두사가 같은 SWIFT 코드 수를 셉니다.

        Count the codes sharing a prefix, excluding one code.
        """
        query: Select = self._prefix_query(
            select(func.count()).select_from(SwiftCode), prefix, exclude_code
        )
        return (await db.execute(query)).scalar() or 0

    async def delete_by_code(
        self,
        db: AsyncSession,
        swift_code: str,
    ) -> int:
        """SWIFT 코드 하나를 삭제하고 삭제된 행 수를 반환합니다.

        Delete one code and return the number of rows removed (0 or 1).
        """
        return await self.delete_where(db, SwiftCode.swift_code == swift_code)

    async def replace_all(
        self,
        db: AsyncSession,
        rows: list[dict[str, Any]],
        batch_size: int = 500,
    ) -> int:
        """테이블을 비우고 주어진 행을 배치 단위로 삽입합니다.

        Clear the table and insert the given rows in batches. Runs inside the
        caller's transaction, so a failure leaves the previous contents intact
        once the caller rolls back.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            rows: 삽입할 컬럼 값 딕셔너리 목록 (Column value dicts keyed by attribute name)
            batch_size: 배치당 행 수 (Rows per INSERT)

        Returns:
            int: 삽입된 행 수 (Rows inserted)
        """
        await self.delete_where(db)
        for start in range(0, len(rows), batch_size):
            await db.execute(insert(SwiftCode), rows[start:start + batch_size])
        await db.flush()
        return len(rows)


# 싱글턴 인스턴스 — Singleton instance
swift_code_repository: SwiftCodeRepository = SwiftCodeRepository()
