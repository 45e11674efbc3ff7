"""로깅 설정 모듈.

Logging setup for the application and the seed script.
Module loggers (logging.getLogger(__name__)) propagate to the root handler
configured here; LOG_LEVEL comes from settings.
"""

import logging

from app.config import settings

_LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """루트 로거에 스트림 핸들러를 한 번만 등록합니다.

    Attach a single stream handler to the root logger. Calling it again only
    updates the level.
    """
    root: logging.Logger = logging.getLogger()
    if not any(getattr(h, "_swift_codes_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._swift_codes_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    level_name: str = (level or settings.LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
