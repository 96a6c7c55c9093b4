import logging
import logging.handlers
import structlog
import sys
from pathlib import Path
from typing import Any, Dict, Optional
from datetime import datetime


def setup_logging(
    log_level: str = "INFO", log_to_file: bool = True, logs_dir: Optional[Path] = None
) -> None:
    """Set up logging configuration for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Whether to log to files in addition to console
        logs_dir: Directory for log files (defaults to ./logs)
    """
    level = getattr(logging, log_level.upper())

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            # JSON formatting for file logs
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_dir = logs_dir or Path("logs")
        logs_dir.mkdir(parents=True, exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "app.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(app_handler)

        # Reflection requests get their own file; they are the only network calls
        reflection_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "reflection.log",
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=5,
        )
        reflection_handler.setLevel(logging.DEBUG)
        reflection_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        reflection_logger = logging.getLogger("reflection")
        reflection_logger.addHandler(reflection_handler)
        reflection_logger.propagate = True

        error_handler = logging.handlers.RotatingFileHandler(
            logs_dir / "errors.log", maxBytes=5 * 1024 * 1024, backupCount=10  # 5MB
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(error_handler)


def get_reflection_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger for reflection requests.

    Args:
        name: Logger name (defaults to "reflection")
    """
    return structlog.get_logger(name or "reflection")


def log_reflection_request(
    details: Dict[str, Any], logger: structlog.BoundLogger = None
) -> None:
    """Log an outbound reflection request with its inputs."""
    if logger is None:
        logger = get_reflection_logger()

    logger.info(
        "Reflection requested",
        timestamp=datetime.now().isoformat(),
        **details,
    )


def log_reflection_failure(
    error: Exception, context: Dict[str, Any], logger: structlog.BoundLogger = None
) -> None:
    """Log a failed reflection request with context.

    Args:
        error: The exception that occurred
        context: Request inputs and model info
        logger: Logger to use (creates one if not provided)
    """
    if logger is None:
        logger = get_reflection_logger()

    logger.error(
        "Reflection request failed",
        error_type=type(error).__name__,
        error_message=str(error),
        timestamp=datetime.now().isoformat(),
        **context,
    )
