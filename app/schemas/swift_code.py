"""SWIFT 코드 관련 Pydantic 요청/응답 스키마 정의.

SWIFT code Pydantic request/response schema definitions.
Wire names are camelCase (``swiftCode``, ``countryISO2``...) and declared as
aliases; Python code uses snake_case attribute names.

Response variants:
    - SwiftCodeListItem: 목록용 요약 (summary without countryName)
    - BranchDetailResponse: 지점 상세 (branch detail, no branches key)
    - HeadquarterDetailResponse: 본점 상세 + 지점 목록 (HQ detail with branches)
"""

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.models.swift_code import is_headquarter_code

# 11자리 영숫자 — 11 alphanumeric characters
SWIFT_CODE_PATTERN: str = r"^[A-Za-z0-9]{11}$"
# 2자리 영문자 — 2 letters
COUNTRY_ISO2_PATTERN: str = r"^[A-Za-z]{2}$"


class _CamelModel(BaseModel):
    """camelCase 별칭을 사용하는 스키마 공통 설정 — Accept both alias and field name."""

    model_config = ConfigDict(populate_by_name=True)


# === 요청 (Request) 스키마 ===

class SwiftCodeCreate(_CamelModel):
    """SWIFT 코드 생성 요청 스키마.

    SWIFT code creation request schema.
    swiftCode, countryISO2 and countryName are trimmed and uppercased before
    validation so every later comparison sees the canonical form.

    Attributes:
        swift_code: 11자리 영숫자 코드 (11-character alphanumeric code)
        bank_name: 은행 이름 (Bank name, non-empty)
        address: 주소 (Street address, optional)
        town_name: 도시 이름 (Town name, optional)
        country_name: 국가 이름 (Country name, non-empty)
        country_iso2: 국가 ISO2 코드 (2-letter country code)
        is_headquarter: 본점 여부 (Must match the "XXX" suffix)
        time_zone: 시간대 (IANA time zone, optional)
        code_type: 코드 유형 (Code type, 1-5 chars)
    """

    swift_code: str = Field(..., alias="swiftCode", min_length=11, max_length=11, pattern=SWIFT_CODE_PATTERN)
    bank_name: str = Field(..., alias="bankName", min_length=1)
    address: str | None = None
    town_name: str | None = Field(None, alias="townName")
    country_name: str = Field(..., alias="countryName", min_length=1)
    country_iso2: str = Field(..., alias="countryISO2", min_length=2, max_length=2, pattern=COUNTRY_ISO2_PATTERN)
    is_headquarter: bool = Field(..., alias="isHeadquarter", strict=True)
    time_zone: str | None = Field(None, alias="timeZone")
    code_type: str = Field(..., alias="codeType", min_length=1, max_length=5)

    @field_validator("swift_code", "country_iso2", "country_name", mode="before")
    @classmethod
    def _canonicalize(cls, value: object) -> object:
        """앞뒤 공백 제거 후 대문자로 변환 — Trim and uppercase string input."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("bank_name", "code_type", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("is_headquarter")
    @classmethod
    def _check_headquarter_flag(cls, value: bool, info: ValidationInfo) -> bool:
        """isHeadquarter가 XXX 접미사와 일치하는지 검증합니다.

        Reject a headquarters flag that disagrees with the code suffix.
        Skipped when swiftCode itself failed validation.
        """
        swift_code: str | None = info.data.get("swift_code")
        if swift_code is None:
            return value
        if value != is_headquarter_code(swift_code):
            if value:
                raise ValueError("isHeadquarter is true, but SWIFT code must end with XXX")
            raise ValueError("isHeadquarter is false, but SWIFT code must not end with XXX")
        return value


# === 응답 (Response) 스키마 ===

class SwiftCodeListItem(_CamelModel):
    """SWIFT 코드 요약 응답 — 국가 목록 및 본점의 지점 목록에 사용.

    Summary view used in country listings and HQ branch lists.
    countryName is omitted because the enclosing object already implies it.
    """

    address: str  # 주소, 없으면 빈 문자열 (Address, empty string when missing)
    bank_name: str = Field(..., alias="bankName")
    country_iso2: str = Field(..., alias="countryISO2")
    is_headquarter: bool = Field(..., alias="isHeadquarter")
    swift_code: str = Field(..., alias="swiftCode")


class BranchDetailResponse(SwiftCodeListItem):
    """지점 상세 응답 스키마 — branches 필드 없음.

    Non-composite detail view returned for branch codes.
    Extra keys are forbidden so a headquarters payload never validates as a branch.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    country_name: str = Field(..., alias="countryName")


class HeadquarterDetailResponse(BranchDetailResponse):
    """본점 상세 응답 스키마 — 지점 요약 목록 포함.

    Composite detail view returned for headquarters codes.

    Attributes:
        branches: 같은 8자리 접두사를 가진 지점 목록 (Branches sharing the 8-char prefix)
    """

    branches: list[SwiftCodeListItem]


class CountrySwiftCodesResponse(_CamelModel):
    """국가별 SWIFT 코드 목록 응답 스키마.

    All codes of one country. countryName is "Unknown" when nothing matches.
    """

    country_iso2: str = Field(..., alias="countryISO2")
    country_name: str = Field(..., alias="countryName")
    swift_codes: list[SwiftCodeListItem] = Field(default_factory=list, alias="swiftCodes")


class MessageResponse(BaseModel):
    """단순 메시지 응답 — Plain message response for create/delete."""

    message: str


def is_valid_swift_code(value: str) -> bool:
    """11자리 영숫자 여부 — Whether the value is an 11-character alphanumeric code."""
    return re.fullmatch(SWIFT_CODE_PATTERN, value) is not None


def is_valid_country_iso2(value: str) -> bool:
    """2자리 영문자 여부 — Whether the value is a 2-letter country code."""
    return re.fullmatch(COUNTRY_ISO2_PATTERN, value) is not None
