"""SWIFT 코드 라우터 — SWIFT 코드 조회/생성/삭제 엔드포인트.

SWIFT Code Router — Lookup, creation and deletion endpoints.
Path parameters are validated (11 alphanumerics / 2 letters, any case) and
uppercased before reaching the service. Mutating endpoints commit the session.

Status mapping:
    - 조회 성공 200, 생성 성공 201, 삭제 성공 200
    - 검증 실패 400, 없음 404, 충돌 409, 내부 오류 500
"""

from typing import Annotated, Union

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.swift_code import (
    COUNTRY_ISO2_PATTERN,
    SWIFT_CODE_PATTERN,
    BranchDetailResponse,
    CountrySwiftCodesResponse,
    HeadquarterDetailResponse,
    MessageResponse,
    SwiftCodeCreate,
)
from app.services.swift_code_service import swift_code_service

router: APIRouter = APIRouter()

SwiftCodeParam = Annotated[
    str,
    Path(
        min_length=11,
        max_length=11,
        pattern=SWIFT_CODE_PATTERN,
        description="The 11-character SWIFT code",
        examples=["DEUTDEFFXXX"],
    ),
]

CountryIso2Param = Annotated[
    str,
    Path(
        min_length=2,
        max_length=2,
        pattern=COUNTRY_ISO2_PATTERN,
        description="ISO 3166-1 alpha-2 country code",
        examples=["PL"],
    ),
]


# 국가 경로는 /{swift_code}보다 먼저 등록 (must be registered BEFORE /{swift_code})
@router.get("/country/{country_iso2}", response_model=CountrySwiftCodesResponse)
async def get_country_swift_codes(
    country_iso2: CountryIso2Param,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CountrySwiftCodesResponse:
    """국가의 모든 SWIFT 코드를 조회합니다. 결과가 없으면 빈 목록.

    Return all SWIFT codes of a country. An unknown country is not an error.
    """
    return await swift_code_service.get_country_swift_codes(db, country_iso2.upper())


@router.get(
    "/{swift_code}",
    response_model=Union[HeadquarterDetailResponse, BranchDetailResponse],
    responses={404: {"description": "SWIFT code not found."}},
)
async def get_swift_code(
    swift_code: SwiftCodeParam,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HeadquarterDetailResponse | BranchDetailResponse:
    """SWIFT 코드 상세를 조회합니다. 본점이면 지점 목록 포함.

    Retrieve one SWIFT code. Headquarters include their branches.
    """
    return await swift_code_service.get_swift_code(db, swift_code.upper())


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "SWIFT code already exists."}},
)
async def create_swift_code(
    data: SwiftCodeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """새 SWIFT 코드를 등록합니다.

    Add a new SWIFT code entry.
    """
    await swift_code_service.create_swift_code(db, data)
    await db.commit()
    return MessageResponse(message="SWIFT code added successfully.")


@router.delete(
    "/{swift_code}",
    response_model=MessageResponse,
    responses={
        404: {"description": "SWIFT code not found."},
        409: {"description": "Cannot delete headquarter with existing branches."},
    },
)
async def delete_swift_code(
    swift_code: SwiftCodeParam,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """SWIFT 코드를 삭제합니다. 지점이 남은 본점은 409.

    Delete a SWIFT code. Headquarters with branches are refused.
    """
    await swift_code_service.delete_swift_code(db, swift_code.upper())
    await db.commit()
    return MessageResponse(message="SWIFT code deleted successfully.")
