"""SWIFT 코드 일괄 적재 서비스 — CSV/Excel 파일에서 테이블을 채웁니다.

SWIFT Code Import Service — Loads a CSV or Excel (.xlsx) export into the
swift_codes table.

Expected headers (trimmed, case-insensitive):
    COUNTRY ISO2 CODE, SWIFT CODE, CODE TYPE, NAME, ADDRESS, TOWN NAME,
    COUNTRY NAME, TIME ZONE

Invalid rows are skipped with a warning. When at least one row is valid the
table is cleared and refilled in batches within the caller's transaction.
"""

import csv
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.swift_code import is_headquarter_code
from app.repositories.swift_code_repository import swift_code_repository
from app.schemas.swift_code import is_valid_country_iso2, is_valid_swift_code

logger = logging.getLogger(__name__)

# 필수 컬럼 — Columns that must be present in the header row
REQUIRED_COLUMNS: list[str] = [
    "country iso2 code",
    "swift code",
    "code type",
    "name",
    "country name",
]


@dataclass
class ImportSummary:
    """적재 결과 통계 — Outcome of one import run."""

    rows_read: int = 0
    imported: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


def _clean(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _normalize_header(headers: Iterable[Any]) -> list[str]:
    """헤더 정규화 및 필수 컬럼 검증 — Lowercase/trim headers, ensure required columns."""
    normalized: list[str] = [_clean(h).lower() for h in headers]
    missing: list[str] = [c for c in REQUIRED_COLUMNS if c not in normalized]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")
    return normalized


def read_csv_rows(path: Path) -> Iterator[dict[str, str]]:
    """CSV 파일의 각 행을 {정규화된 헤더: 값} 딕셔너리로 반환합니다.

    Yield each CSV row as a dict keyed by normalized header. Blank lines are skipped.
    """
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        try:
            headers: list[str] = _normalize_header(next(reader))
        except StopIteration:
            raise ValueError(f"Empty file: {path}") from None
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            yield {h: _clean(v) for h, v in zip(headers, row)}


def read_xlsx_rows(path: Path) -> Iterator[dict[str, str]]:
    """Excel 첫 시트의 각 행을 {정규화된 헤더: 값} 딕셔너리로 반환합니다.

    Yield each row of the first worksheet as a dict keyed by normalized header.
    """
    wb = load_workbook(filename=path, read_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        try:
            headers: list[str] = _normalize_header(next(rows))
        except StopIteration:
            raise ValueError(f"Empty file: {path}") from None
        for row in rows:
            if not any(_clean(cell) for cell in row):
                continue
            yield {h: _clean(v) for h, v in zip(headers, row)}
    finally:
        wb.close()


def read_rows(path: Path) -> Iterator[dict[str, str]]:
    """확장자에 따라 CSV 또는 Excel 리더를 선택합니다 — Dispatch on file extension."""
    suffix: str = path.suffix.lower()
    if suffix == ".csv":
        return read_csv_rows(path)
    if suffix == ".xlsx":
        return read_xlsx_rows(path)
    raise ValueError(f"Unsupported file type: {path.suffix or '(none)'}; expected .csv or .xlsx")


def parse_row(row: dict[str, str]) -> dict[str, Any]:
    """원본 행 하나를 검증하고 swift_codes 컬럼 값으로 변환합니다.

    Validate one source row and convert it to swift_codes attribute values.

    Raises:
        ValueError: 행이 유효하지 않을 때, 사유 포함 (Row is invalid; message says why)
    """
    swift_code: str = row.get("swift code", "")
    country_iso2: str = row.get("country iso2 code", "")
    country_name: str = row.get("country name", "")
    bank_name: str = row.get("name", "")
    code_type: str = row.get("code type", "")

    if not is_valid_swift_code(swift_code):
        raise ValueError(f"invalid SWIFT code {swift_code!r}")
    if not is_valid_country_iso2(country_iso2):
        raise ValueError(f"invalid country ISO2 code {country_iso2!r}")
    if not country_name:
        raise ValueError("missing country name")
    if not bank_name:
        raise ValueError("missing bank name")
    if not code_type:
        raise ValueError(f"missing code type for SWIFT code {swift_code}")
    if len(code_type) > 5:
        raise ValueError(f"code type {code_type!r} longer than 5 characters")

    swift_code = swift_code.upper()
    return {
        "swift_code": swift_code,
        "bank_name": bank_name,
        "address": row.get("address") or None,
        "town_name": row.get("town name") or None,
        "country_name": country_name.upper(),
        "country_iso2": country_iso2.upper(),
        "is_headquarter": is_headquarter_code(swift_code),
        "code_type": code_type,
        "time_zone": row.get("time zone") or None,
    }


def prepare_records(rows: Iterable[dict[str, str]], summary: ImportSummary) -> list[dict[str, Any]]:
    """유효한 행만 모아 반환합니다. 파일 내 중복 코드는 첫 번째만 유지.

    Collect the valid rows; for duplicate codes within the file the first wins.
    Data rows are numbered from 2 (row 1 is the header).
    """
    records: dict[str, dict[str, Any]] = {}
    for row_num, row in enumerate(rows, start=2):
        summary.rows_read += 1
        try:
            record: dict[str, Any] = parse_row(row)
        except ValueError as e:
            summary.skipped += 1
            summary.errors.append(f"Row {row_num}: {e}")
            logger.warning("Skipping row %d: %s", row_num, e)
            continue
        if record["swift_code"] in records:
            summary.skipped += 1
            summary.errors.append(f"Row {row_num}: duplicate SWIFT code {record['swift_code']}")
            logger.warning("Skipping row %d: duplicate SWIFT code %s", row_num, record["swift_code"])
            continue
        records[record["swift_code"]] = record
    return list(records.values())


class SwiftCodeImportService:
    """SWIFT 코드 파일 적재를 처리하는 서비스.

    Service replacing the table contents with the rows of an export file.
    """

    async def import_file(
        self,
        db: AsyncSession,
        path: str | Path,
        batch_size: int | None = None,
    ) -> ImportSummary:
        """파일을 읽어 swift_codes 테이블을 교체합니다. 커밋은 호출자가 합니다.

        Read the file and replace the swift_codes table. The caller commits.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            path: CSV 또는 XLSX 파일 경로 (Path to a .csv or .xlsx file)
            batch_size: 배치당 행 수, 기본값은 설정값 (Rows per INSERT, defaults to settings)

        Returns:
            ImportSummary: 적재 결과 통계 (Import statistics)

        Raises:
            FileNotFoundError: 파일이 없을 때 (File does not exist)
            ValueError: 지원하지 않는 형식이거나 필수 컬럼이 없을 때
                        (Unsupported extension or missing required columns)
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Seed file not found: {file_path}")

        logger.info("Reading SWIFT codes from %s", file_path)
        summary = ImportSummary()
        records: list[dict[str, Any]] = prepare_records(read_rows(file_path), summary)

        if not records:
            logger.info("No valid data to insert; table left unchanged.")
            return summary

        summary.imported = await swift_code_repository.replace_all(
            db, records, batch_size=batch_size or settings.SEED_BATCH_SIZE
        )
        logger.info(
            "Imported %d SWIFT codes (%d rows read, %d skipped).",
            summary.imported, summary.rows_read, summary.skipped,
        )
        return summary


# 싱글턴 인스턴스 — Singleton instance
swift_code_import_service: SwiftCodeImportService = SwiftCodeImportService()
