"""SWIFT 코드 서비스 — SWIFT 코드 레지스트리 비즈니스 로직.

SWIFT Code Service — Business logic for the SWIFT code registry.
Derives headquarters/branch relationships from the 8-character prefix,
builds hierarchical responses, enforces uniqueness on create and the
"no branches left" rule on headquarters delete.

The service keeps no state between calls. Uniqueness is finally enforced by
the primary key; the branch check before an HQ delete is best-effort
(a branch inserted concurrently with the check is not guarded against).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.swift_code import SwiftCode, branch_prefix, is_headquarter_code
from app.repositories.swift_code_repository import swift_code_repository
from app.schemas.swift_code import (
    BranchDetailResponse,
    CountrySwiftCodesResponse,
    HeadquarterDetailResponse,
    SwiftCodeCreate,
    SwiftCodeListItem,
)
from app.utils.exceptions import (
    BadRequestError,
    BranchesExistError,
    DuplicateError,
    InternalError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# 일치하는 코드가 없는 국가의 이름 — Country name reported when no code matches
UNKNOWN_COUNTRY_NAME: str = "Unknown"


class SwiftCodeService:
    """SWIFT 코드 관련 비즈니스 로직을 처리하는 서비스.

    Service handling SWIFT code business logic.
    Lookup by code, lookup by country, create and delete.
    """

    def _to_list_item(self, record: SwiftCode) -> SwiftCodeListItem:
        """모델을 요약 응답으로 변환합니다 (countryName 제외).

        Convert a record to the summary view. A missing address renders as "".
        """
        return SwiftCodeListItem(
            address=record.address or "",
            bank_name=record.bank_name,
            country_iso2=record.country_iso2,
            is_headquarter=bool(record.is_headquarter),
            swift_code=record.swift_code,
        )

    async def _get_or_404(self, db: AsyncSession, swift_code: str) -> SwiftCode:
        record: SwiftCode | None = await swift_code_repository.get_by_code(db, swift_code)
        if record is None:
            logger.warning("SWIFT code not found: %s", swift_code)
            raise NotFoundError(f"SWIFT code {swift_code} not found.")
        return record

    async def get_swift_code(
        self,
        db: AsyncSession,
        swift_code: str,
    ) -> HeadquarterDetailResponse | BranchDetailResponse:
        """SWIFT 코드 상세를 조회합니다. 본점이면 지점 목록을 포함합니다.

        Retrieve one code. A headquarters is returned with its branch group
        (codes sharing its first 8 characters, ordered by code); a branch is
        returned without a branches field.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            swift_code: 11자리 SWIFT 코드 (11-character SWIFT code)

        Returns:
            HeadquarterDetailResponse | BranchDetailResponse: 본점 또는 지점 상세

        Raises:
            NotFoundError: 코드가 존재하지 않을 때 (Code does not exist)
        """
        swift_code = swift_code.upper()
        logger.info("Finding details for SWIFT code: %s", swift_code)
        record: SwiftCode = await self._get_or_404(db, swift_code)

        detail: dict = self._to_list_item(record).model_dump()
        detail["country_name"] = record.country_name

        if not record.is_headquarter:
            return BranchDetailResponse(**detail)

        branches: list[SwiftCode] = await swift_code_repository.list_by_prefix(
            db, branch_prefix(swift_code), exclude_code=swift_code
        )
        logger.info("Found %d branches for HQ %s", len(branches), swift_code)
        return HeadquarterDetailResponse(
            **detail,
            branches=[self._to_list_item(b) for b in branches],
        )

    async def get_country_swift_codes(
        self,
        db: AsyncSession,
        country_iso2: str,
    ) -> CountrySwiftCodesResponse:
        """국가별 SWIFT 코드 목록을 조회합니다. 결과가 없어도 오류가 아닙니다.

        Retrieve every code of a country, headquarters first then by code.
        An unknown country yields countryName "Unknown" and an empty list.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            country_iso2: 국가 ISO2 코드 (2-letter country code)

        Returns:
            CountrySwiftCodesResponse: 국가 코드 목록 응답 (Country listing)
        """
        country_iso2 = country_iso2.upper()
        logger.info("Finding SWIFT codes for country: %s", country_iso2)
        records: list[SwiftCode] = await swift_code_repository.list_by_country(db, country_iso2)

        country_name: str = records[0].country_name if records else UNKNOWN_COUNTRY_NAME
        logger.info("Found %d codes for country %s", len(records), country_iso2)
        return CountrySwiftCodesResponse(
            country_iso2=country_iso2,
            country_name=country_name,
            swift_codes=[self._to_list_item(r) for r in records],
        )

    async def create_swift_code(
        self,
        db: AsyncSession,
        data: SwiftCodeCreate,
    ) -> BranchDetailResponse:
        """새 SWIFT 코드를 생성합니다.

        Create a new code. The request schema has already canonicalized and
        validated the fields; the headquarters flag is checked again here so
        that no caller can persist a record that breaks the suffix rule.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: SWIFT 코드 생성 데이터 (Creation data)

        Returns:
            BranchDetailResponse: 생성된 코드의 상세 (Flat detail of the new record)

        Raises:
            BadRequestError: isHeadquarter와 XXX 접미사가 불일치할 때
            DuplicateError: 같은 코드가 이미 존재할 때 (Code already exists)
        """
        swift_code: str = data.swift_code.upper()
        if data.is_headquarter != is_headquarter_code(swift_code):
            raise BadRequestError(
                f"isHeadquarter={data.is_headquarter} does not match SWIFT code {swift_code}"
            )

        # 중복 사전 확인 — Pre-check; the primary key remains the final guard
        if await swift_code_repository.exists(db, {"swift_code": swift_code}):
            logger.warning("SWIFT code %s already exists.", swift_code)
            raise DuplicateError(f"SWIFT code {swift_code} already exists.")

        now: datetime = datetime.now(timezone.utc)
        try:
            record: SwiftCode = await swift_code_repository.create(
                db,
                {
                    "swift_code": swift_code,
                    "bank_name": data.bank_name,
                    "address": data.address,
                    "town_name": data.town_name,
                    "country_name": data.country_name.upper(),
                    "country_iso2": data.country_iso2.upper(),
                    "is_headquarter": data.is_headquarter,
                    "time_zone": data.time_zone,
                    "code_type": data.code_type,
                    "created_at": now,
                    "updated_at": now,
                },
            )
        except IntegrityError:
            # 동시 삽입 경합 — a concurrent insert won between check and write
            await db.rollback()
            logger.warning("SWIFT code %s inserted concurrently.", swift_code)
            raise DuplicateError(f"SWIFT code {swift_code} already exists.")

        logger.info("Created SWIFT code %s", swift_code)
        return BranchDetailResponse(
            **self._to_list_item(record).model_dump(),
            country_name=record.country_name,
        )

    async def delete_swift_code(
        self,
        db: AsyncSession,
        swift_code: str,
    ) -> None:
        """SWIFT 코드를 삭제합니다. 지점이 남은 본점은 삭제할 수 없습니다.

        Delete one code. A headquarters is deleted only when its branch group
        is empty.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            swift_code: 11자리 SWIFT 코드 (11-character SWIFT code)

        Raises:
            NotFoundError: 코드가 존재하지 않을 때 (Code does not exist)
            BranchesExistError: 본점에 지점이 남아있을 때 (HQ still has branches)
            InternalError: 확인 후 삭제된 행이 없을 때 (Row vanished after the check)
        """
        swift_code = swift_code.upper()
        logger.info("Attempting to delete SWIFT code: %s", swift_code)
        record: SwiftCode = await self._get_or_404(db, swift_code)

        if record.is_headquarter:
            branch_count: int = await swift_code_repository.count_by_prefix(
                db, branch_prefix(swift_code), exclude_code=swift_code
            )
            if branch_count > 0:
                logger.warning(
                    "Cannot delete HQ %s: %d branches exist.", swift_code, branch_count
                )
                raise BranchesExistError(swift_code, branch_count)

        deleted: int = await swift_code_repository.delete_by_code(db, swift_code)
        if deleted == 0:
            logger.error("Delete failed unexpectedly after check for SWIFT code: %s", swift_code)
            raise InternalError(f"Could not delete SWIFT code {swift_code}.")

        logger.info("Deleted SWIFT code: %s", swift_code)


# 싱글턴 인스턴스 — Singleton instance
swift_code_service: SwiftCodeService = SwiftCodeService()
