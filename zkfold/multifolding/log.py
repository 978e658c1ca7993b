"""
로깅 초기화 도우미
===================

각 모듈은 logging.getLogger(__name__)으로 "zkfold" 계층 아래의 로거를
얻는다. 라이브러리로 쓰일 때는 아무 핸들러도 붙이지 않으며, 데모나
상위 드라이버가 init_logging을 한 번 호출해 출력을 켠다.
"""

import logging
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "zkfold"

_LOG_INITIALIZED = False


def to_logging_level(level):
    """문자열 로그 레벨을 logging 상수로 바꾼다. 모르는 값은 INFO."""
    level = (level or "INFO").upper()
    return {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }.get(level, logging.INFO)


def init_logging(config, max_bytes=10 * 1024 * 1024, backup_count=5):
    """zkfold 로거에 핸들러를 붙인다. 두 번째 호출부터는 아무것도 하지 않는다.

    Args:
        config: FoldingConfig (log_level, log_file, console 사용)
        max_bytes: 로그 파일 하나의 최대 크기
        backup_count: 보관할 이전 로그 파일 수

    Returns:
        logging.Logger: 설정된 "zkfold" 로거
    """
    global _LOG_INITIALIZED
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _LOG_INITIALIZED:
        return logger

    level = to_logging_level(config.log_level)
    logger.setLevel(level)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S"
    )

    if config.log_file:
        fh = RotatingFileHandler(
            config.log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    if config.console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    _LOG_INITIALIZED = True
    return logger


def reset_logging():
    """init_logging이 붙인 핸들러를 떼어낸다 (테스트용)."""
    global _LOG_INITIALIZED
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _LOG_INITIALIZED = False
