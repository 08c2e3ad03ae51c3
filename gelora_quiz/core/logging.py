# -*- coding: utf-8 -*-
import logging
import sys
from pathlib import Path

from gelora_quiz.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# 요청마다 남는 레이트 리밋 DEBUG 로그는 LOG_LEVEL=DEBUG일 때만
RATE_LIMIT_LOGGER = "gelora_quiz.core.rate_limit"


def _resolve_level(level: str | None) -> int:
    name = level or settings.log_level
    if name is None:
        return logging.DEBUG if settings.environment == "development" else logging.INFO
    return logging.getLevelName(name.upper())


def setup_logging(level: str | None = None) -> int:
    """로깅 설정, 적용된 루트 레벨 반환

    level 인자 > LOG_LEVEL > 환경 기본값 (development는 DEBUG, 그 외 INFO) 순.
    """
    log_level = _resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if settings.environment == "production":
        log_dir = Path("/app/logs")
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "gelora_quiz.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        root_logger.addHandler(file_handler)

    explicit_debug = (level or settings.log_level or "").upper() == "DEBUG"
    rate_limit_level = log_level if explicit_debug else max(log_level, logging.INFO)
    logging.getLogger(RATE_LIMIT_LOGGER).setLevel(rate_limit_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return log_level
