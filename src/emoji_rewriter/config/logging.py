"""Logging configuration using loguru.

Standard library loggers (the engine modules, hypercorn, uvicorn) are routed
into loguru so every record ends up in the same rotating file.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from emoji_rewriter.config.settings import get_settings


if TYPE_CHECKING:
    from loguru import Logger


log = logger.bind(name=__name__)


DEFAULT_LOG_DIR = Path(__file__).parent.parent.parent.parent / "logs"
DEFAULT_LOG_FILE = "emoji-rewriter.log"
TEST_LOG_FILE = "emoji-rewriter-test.log"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>|"
    "<level>{level:5}</level>|"
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>|"
    "<level>{message}</level>"
)

LOG_FORMAT_FILE = "{time:YYYY-MM-DD HH:mm:ss.SSS}|{level:5}|{extra[name]}|{message}"

# uvicorn.error carries normal server lifecycle messages
LOGGER_NAME_MAP: dict[str, str] = {
    "uvicorn.error": "uvicorn.server",
    "hypercorn.error": "hypercorn.server",
}

ACCESS_LOGGERS = frozenset({"uvicorn.access", "hypercorn.access"})

# uvicorn access record args: (client, method, path, http_version, status)
ACCESS_METHOD_INDEX = 1
ACCESS_PATH_INDEX = 2
ACCESS_STATUS_INDEX = 4

INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "hypercorn",
    "hypercorn.access",
    "hypercorn.error",
)

QUIET_LOGGERS = ("asyncio", "PIL")


@dataclass
class FileLogOptions:
    rotation: str = "10 MB"
    retention: str = "7 days"
    compression: str = "gz"
    json_logs: bool = False
    file_name: str | None = None


def _format_access_message(record: logging.LogRecord) -> str:
    """Shorten an access record to "<transport> METHOD PATH STATUS"."""
    args_raw = record.args or ()
    args: tuple[Any, ...] = args_raw if isinstance(args_raw, tuple) else ()
    if len(args) <= ACCESS_STATUS_INDEX:
        return record.getMessage()
    transport = "h2c" if get_settings().http.http2_enabled else "http1"
    return (
        f"{transport} {args[ACCESS_METHOD_INDEX]} "
        f"{args[ACCESS_PATH_INDEX]} {args[ACCESS_STATUS_INDEX]}"
    )


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        if record.name in ACCESS_LOGGERS:
            try:
                message = _format_access_message(record)
            except (IndexError, TypeError):
                message = record.getMessage()
        else:
            message = record.getMessage()

        target_name = LOGGER_NAME_MAP.get(record.name, record.name)
        logger.bind(name=target_name).opt(exception=record.exc_info).log(level, message)


def setup_logging(
    log_dir: Path | str | None = None,
    log_level: str | None = None,
    *,
    file_options: FileLogOptions | None = None,
) -> None:
    """Initialize loguru sinks and the stdlib intercept.

    Args:
        log_dir: Log directory (settings or DEFAULT_LOG_DIR when None)
        log_level: DEBUG, INFO, WARNING or ERROR
        file_options: rotation/retention/compression/JSON/file name overrides
    """
    settings = get_settings()
    options = file_options or FileLogOptions(
        rotation=settings.logging.rotation,
        retention=settings.logging.retention,
        compression=settings.logging.compression,
        json_logs=settings.logging.json_logs,
    )
    effective_level = (log_level or settings.logging.level).upper()

    configured_dir = log_dir or settings.logging.log_dir
    log_path = Path(configured_dir) if configured_dir else DEFAULT_LOG_DIR
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(extra={"name": "emoji-rewriter"})

    target_log_file = options.file_name or DEFAULT_LOG_FILE
    if os.getenv("PYTEST_CURRENT_TEST"):
        target_log_file = TEST_LOG_FILE

    if settings.logging.console_enabled:
        logger.add(
            sys.stderr,
            format=LOG_FORMAT,
            level=effective_level,
            colorize=True,
            enqueue=True,
        )

    logger.add(
        log_path / target_log_file,
        format=LOG_FORMAT_FILE,
        level=effective_level,
        rotation=options.rotation,
        retention=options.retention,
        compression=options.compression,
        enqueue=True,
        serialize=options.json_logs,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for lib_logger in QUIET_LOGGERS:
        logging.getLogger(lib_logger).setLevel(logging.WARNING)

    for lib_logger in INTERCEPTED_LOGGERS:
        lib_log = logging.getLogger(lib_logger)
        lib_log.handlers = [InterceptHandler()]
        lib_log.propagate = False

    log.info(
        "Logging initialized: dir={}, level={}, rotation={}, retention={}",
        log_path,
        effective_level,
        options.rotation,
        options.retention,
    )


def get_logger(name: str) -> "Logger":
    """Return a loguru logger bound to a module name.

    Args:
        name: Module name (usually __name__)
    """
    return logger.bind(name=name)
