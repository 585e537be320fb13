import logging
import logging.handlers
import re
from pathlib import Path
from typing import Optional

import orjson
import structlog
from structlog.types import FilteringBoundLogger

from msgdiag.common.utils import get_app_dir
from msgdiag.config.models import DiagnosticsConfig, LoggingConfig


def _parse_size(value: str) -> int:
    # "10MB" -> 10 * 1024 * 1024
    size_match = re.match(r'(\d+)\s*([KMGT]?B?)', value.upper())
    if not size_match:
        return 10 * 1024 * 1024
    size_num = int(size_match.group(1))
    size_unit = size_match.group(2) or 'MB'
    multipliers = {'B': 1, 'KB': 1024, 'MB': 1024**2, 'GB': 1024**3, 'TB': 1024**4, 'K': 1024, 'M': 1024**2, 'G': 1024**3, 'T': 1024**4}
    return size_num * multipliers.get(size_unit, multipliers['MB'])


def _create_log_handlers(log_config: LoggingConfig, log_dir: Optional[Path]) -> list:
    """Create logging handlers based on configuration."""
    handlers = []

    if log_config.console_enabled:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, structlog.processors.format_exc_info, structlog.dev.ConsoleRenderer()]
        )
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if log_config.file_enabled and log_dir is not None:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(serializer=lambda *x, **y: orjson.dumps(*x, **y).decode('utf-8')),
            ]
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'msgdiag.log', maxBytes=_parse_size(log_config.max_file_size), backupCount=log_config.backup_count
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def _resolve_log_dir(log_config: LoggingConfig) -> Optional[Path]:
    if not log_config.file_enabled:
        return None
    log_dir = Path(log_config.log_file_dir) if log_config.log_file_dir else get_app_dir() / 'logs'
    if log_dir.exists() and not log_dir.is_dir():
        raise ValueError(f'Log directory {log_dir} is not a directory')
    log_dir.mkdir(exist_ok=True, parents=True)
    return log_dir


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger.

    Conversion and reset failures are logged at DEBUG. Hosts call
    :func:`configure_structlog` once at startup, otherwise structlog's default
    logger prints every level to stdout.
    """
    return structlog.get_logger(name)


def configure_structlog(config: Optional[DiagnosticsConfig] = None) -> None:
    """Configure structlog with console and rotating file output through the standard library."""
    log_config = (config or DiagnosticsConfig()).logging
    level = getattr(logging, log_config.level.upper())

    logging.basicConfig(
        level=level,
        handlers=_create_log_handlers(log_config, _resolve_log_dir(log_config)),
        format='%(message)s',  # structlog will handle formatting
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt='ISO', utc=True),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
