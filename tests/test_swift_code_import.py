"""SWIFT 코드 일괄 적재 테스트.

SWIFT code bulk loader tests — CSV/XLSX parsing, row validation, replace
semantics and the seed command exit codes.
"""

from pathlib import Path

import pytest
from openpyxl import Workbook
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.swift_code_repository import swift_code_repository
from app.seed import main as seed_main
from app.services.swift_code_import_service import (
    ImportSummary,
    parse_row,
    prepare_records,
    read_rows,
    swift_code_import_service,
)

HEADER = ["COUNTRY ISO2 CODE", "SWIFT CODE", "CODE TYPE", "NAME", "ADDRESS", "TOWN NAME", "COUNTRY NAME", "TIME ZONE"]

ROWS = [
    ["al", "aaisaltrxxx", "BIC11", "UNITED BANK OF ALBANIA SH.A", "HYRJA 3 RR. DRITAN HOXHA", "TIRANA", "albania", "Europe/Tirane"],
    ["AL", "AAISALTR1AB", "BIC11", "UNITED BANK OF ALBANIA SH.A", "", "TIRANA", "ALBANIA", "Europe/Tirane"],
    ["BG", "ABIEBGS1XXX", "BIC11", "ABV INVESTMENTS LTD", "TSAR ASEN 20", "VARNA", "BULGARIA", "Europe/Sofia"],
    ["BG", "SHORT", "BIC11", "BROKEN BANK", "", "VARNA", "BULGARIA", "Europe/Sofia"],
    ["B1", "ABIEBGS1002", "BIC11", "BAD COUNTRY", "", "VARNA", "BULGARIA", "Europe/Sofia"],
    ["BG", "ABIEBGS1003", "", "NO CODE TYPE", "", "VARNA", "BULGARIA", "Europe/Sofia"],
    ["AL", "AAISALTRXXX", "BIC11", "DUPLICATE ROW", "", "TIRANA", "ALBANIA", "Europe/Tirane"],
]


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    lines = [",".join(f'"{c}"' for c in header)] + [",".join(f'"{c}"' for c in row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_xlsx(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    wb = Workbook()
    ws = wb.active
    ws.append(header)
    for row in rows:
        ws.append([c or None for c in row])
    wb.save(path)
    return path


class TestParseRow:
    """행 파싱 테스트."""

    def test_parse_valid_headquarter(self):
        row = dict(zip([h.lower() for h in HEADER], ROWS[0]))
        record = parse_row(row)
        assert record["swift_code"] == "AAISALTRXXX"
        assert record["country_iso2"] == "AL"
        assert record["country_name"] == "ALBANIA"
        assert record["is_headquarter"] is True
        assert record["town_name"] == "TIRANA"

    def test_empty_optional_becomes_none(self):
        row = dict(zip([h.lower() for h in HEADER], ROWS[1]))
        record = parse_row(row)
        assert record["address"] is None
        assert record["is_headquarter"] is False

    @pytest.mark.parametrize("index", [3, 4, 5])
    def test_invalid_rows_rejected(self, index):
        row = dict(zip([h.lower() for h in HEADER], ROWS[index]))
        with pytest.raises(ValueError):
            parse_row(row)

    def test_prepare_records_skips_invalid_and_duplicates(self):
        rows = [dict(zip([h.lower() for h in HEADER], r)) for r in ROWS]
        summary = ImportSummary()
        records = prepare_records(rows, summary)
        assert [r["swift_code"] for r in records] == ["AAISALTRXXX", "AAISALTR1AB", "ABIEBGS1XXX"]
        assert summary.rows_read == 7
        assert summary.skipped == 4
        assert records[0]["bank_name"] == "UNITED BANK OF ALBANIA SH.A"


class TestReadRows:
    """파일 읽기 테스트."""

    def test_headers_are_trimmed_and_case_insensitive(self, tmp_path: Path):
        path = write_csv(tmp_path / "codes.csv", [f" {h.title()} " for h in HEADER], ROWS[:1])
        rows = list(read_rows(path))
        assert rows[0]["swift code"] == "aaisaltrxxx"

    def test_missing_required_column(self, tmp_path: Path):
        path = write_csv(tmp_path / "codes.csv", HEADER[:3], [r[:3] for r in ROWS[:1]])
        with pytest.raises(ValueError, match="Missing required columns"):
            list(read_rows(path))

    def test_unsupported_extension(self, tmp_path: Path):
        path = tmp_path / "codes.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="Unsupported file type"):
            read_rows(path)

    def test_xlsx_rows(self, tmp_path: Path):
        path = write_xlsx(tmp_path / "codes.xlsx", HEADER, ROWS[:2])
        rows = list(read_rows(path))
        assert len(rows) == 2
        assert rows[1]["address"] == ""


class TestImportFile:
    """파일 적재 테스트."""

    async def test_import_csv_replaces_table(self, db: AsyncSession, deutsche_bank, tmp_path: Path):
        path = write_csv(tmp_path / "codes.csv", HEADER, ROWS)
        summary = await swift_code_import_service.import_file(db, path, batch_size=2)
        await db.commit()

        assert summary.imported == 3
        assert summary.skipped == 4
        assert await swift_code_repository.get_by_code(db, "DEUTDEFFXXX") is None
        albanian = await swift_code_repository.list_by_country(db, "AL")
        assert [r.swift_code for r in albanian] == ["AAISALTRXXX", "AAISALTR1AB"]
        assert albanian[0].country_name == "ALBANIA"

    async def test_import_xlsx(self, db: AsyncSession, tmp_path: Path):
        path = write_xlsx(tmp_path / "codes.xlsx", HEADER, ROWS[:3])
        summary = await swift_code_import_service.import_file(db, path)
        await db.commit()
        assert summary.imported == 3
        record = await swift_code_repository.get_by_code(db, "ABIEBGS1XXX")
        assert record is not None
        assert record.is_headquarter is True

    async def test_no_valid_rows_leaves_table_untouched(self, db: AsyncSession, deutsche_bank, tmp_path: Path):
        path = write_csv(tmp_path / "codes.csv", HEADER, ROWS[3:6])
        summary = await swift_code_import_service.import_file(db, path)
        assert summary.imported == 0
        assert summary.skipped == 3
        assert await swift_code_repository.get_by_code(db, "DEUTDEFFXXX") is not None

    async def test_missing_file(self, db: AsyncSession, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await swift_code_import_service.import_file(db, tmp_path / "missing.csv")


class TestSeedCommand:
    """시드 명령 종료 코드 테스트."""

    def test_missing_file_exit_code(self, tmp_path: Path, monkeypatch):
        async def _fail(path: str):
            raise FileNotFoundError(path)

        monkeypatch.setattr("app.seed.seed", _fail)
        assert seed_main([str(tmp_path / "missing.csv")]) == 1

    def test_success_exit_code(self, tmp_path: Path, monkeypatch):
        async def _ok(path: str) -> ImportSummary:
            return ImportSummary(rows_read=1, imported=1)

        monkeypatch.setattr("app.seed.seed", _ok)
        assert seed_main([str(tmp_path / "codes.csv")]) == 0
