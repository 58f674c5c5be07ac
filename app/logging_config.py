"""로깅 설정 모듈.

Logging configuration module.
Configures the root logger once with a console handler; modules obtain
their own logger with ``logging.getLogger(__name__)``.
"""

import logging
import sys

from app.config import settings

LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured: bool = False


def configure_logging(level_name: str | None = None) -> None:
    """루트 로거를 설정합니다. 여러 번 호출해도 한 번만 적용.

    Configure the root logger with a stdout handler at the configured level.
    Repeated calls are no-ops.

    Args:
        level_name: 로그 레벨 이름, 기본값은 settings.LOG_LEVEL
                    (Level name, defaults to settings.LOG_LEVEL)
    """
    global _configured
    if _configured:
        return

    level: int = getattr(logging, (level_name or settings.LOG_LEVEL).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    # SQL 로그는 DEBUG 설정 시에만 (SQL echo is controlled by settings.DEBUG)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
