"""
Structured logging configuration using structlog.

Provides JSON-formatted logs for batch simulation runs and
human-readable console output for development.
"""
import sys
import logging
import structlog
from pathlib import Path
from typing import Optional


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    json_output: bool = False
):
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        json_output: If True, output JSON logs; else human-readable console

    Example:
        >>> from noise_directivity.utils.logging_config import configure_logging, get_logger
        >>> configure_logging(log_level="INFO", json_output=False)
        >>> logger = get_logger(__name__)
        >>> logger.info("directivity_loaded", direction_id=1, records=2664)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(getattr(logging, log_level.upper()))

    processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, log_level.upper()))
        file_handler.setFormatter(logging.Formatter('%(message)s'))

        logging.getLogger().addHandler(file_handler)


def get_logger(name: str):
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger with bound context

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("degenerate_directivity_cell", theta=0.3, phi=1.2)
    """
    return structlog.get_logger(name)


def configure_logging_from_config(config) -> None:
    """
    Apply the logging section of a DirectivityConfig.

    Args:
        config: DirectivityConfig, usually from load_config()

    Example:
        >>> config = load_config(Path("config/directivity.yaml"))
        >>> configure_logging_from_config(config)
        >>> attributes = directivity_from_dataframe(1, df, [100.0, 200.0], config)
    """
    settings = config.logging
    configure_logging(
        log_level=settings.level,
        log_file=settings.log_file,
        json_output=settings.json_output,
    )
    get_logger(__name__).debug(
        "logging_configured",
        level=settings.level,
        json_output=settings.json_output,
        log_file=str(settings.log_file) if settings.log_file else None,
    )
