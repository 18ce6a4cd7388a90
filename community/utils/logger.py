"""애플리케이션 공통 로거 모듈.

Shared application logger factory.
Every module gets a named logger with a single console handler.
"""

import logging

from community.config import settings

_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """이름이 지정된 로거를 반환합니다 (핸들러는 한 번만 등록).

    Return a named logger, attaching the console handler on first use.

    Args:
        name: 로거 이름 (Logger name, usually the module name)

    Returns:
        logging.Logger: 설정된 로거 (Configured logger)
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(settings.LOG_LEVEL.upper())
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
