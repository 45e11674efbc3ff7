"""SWIFT 코드 시드 스크립트 — CSV/Excel 파일에서 swift_codes 테이블 적재.

Seed script — Replaces the swift_codes table with the rows of a CSV or
Excel export. The whole load runs in one transaction.

Usage:
    python -m app.seed                      # uses settings.SEED_FILE_PATH
    python -m app.seed data/swift_codes.xlsx
"""

import asyncio
import logging
import sys

from app.config import settings
from app.database import engine, session_scope
from app.services.swift_code_import_service import ImportSummary, swift_code_import_service
from app.utils.logging_config import setup_logging

logger = logging.getLogger("app.seed")


async def seed(path: str) -> ImportSummary:
    """파일을 읽어 데이터베이스를 시드합니다.

    Seed the database from the given file and dispose of the engine afterwards.
    Tables are expected to exist already (run ``alembic upgrade head`` first).
    """
    try:
        async with session_scope() as db:
            summary: ImportSummary = await swift_code_import_service.import_file(db, path)
    finally:
        await engine.dispose()
    return summary


def main(argv: list[str] | None = None) -> int:
    """명령행 진입점 — Command-line entry point; returns the process exit code."""
    setup_logging()
    args: list[str] = sys.argv[1:] if argv is None else argv
    path: str = args[0] if args else settings.SEED_FILE_PATH

    try:
        summary: ImportSummary = asyncio.run(seed(path))
    except (FileNotFoundError, ValueError) as e:
        logger.error("Seed failed: %s", e)
        return 1

    if summary.imported == 0:
        logger.warning("No rows imported from %s", path)
    else:
        logger.info("Database seeded successfully: %d codes.", summary.imported)
    return 0


if __name__ == "__main__":
    sys.exit(main())
