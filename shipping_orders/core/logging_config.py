"""
Logging setup for the order management layer.

Configures:
- Console handler with colored level names on a TTY
- Optional rotating file handlers (main log plus a separate error log)
- JSON structured output for production monitoring
- A filter that tags order mutations for easy grepping
"""

import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from shipping_orders.core.config import Settings, get_settings

CONSOLE_STREAM = "ext://sys.stdout"

_RESERVED_RECORD_FIELDS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name when writing to a terminal.

    `stream` is the stream of the handler using this formatter; colors are
    only added when that stream is a TTY.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, fmt=None, datefmt=None, stream=None, **kwargs):
        super().__init__(fmt, datefmt, **kwargs)
        self.stream = stream if stream is not None else sys.stdout

    def format(self, record):
        formatted = super().format(record)

        if hasattr(self.stream, "isatty") and self.stream.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}")

        return formatted


class StructuredFormatter(logging.Formatter):
    """
    Formatter that renders each record as a single JSON document.
    """

    def format(self, record):
        settings = get_settings()
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "app_name": settings.APP_NAME,
            "app_version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra_fields = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_RECORD_FIELDS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class OrderOperationFilter(logging.Filter):
    """
    Tags records emitted by the order services and repositories.
    """

    ORDER_MODULES = ("orders", "repositories")

    def filter(self, record):
        if any(module in record.name.lower() for module in self.ORDER_MODULES):
            record.operation_type = "order"
        return True


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure application logging.

    Args:
        settings: Settings to use; defaults to the cached application settings
    """
    settings = settings or get_settings()

    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration(settings))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL))

    order_filter = OrderOperationFilter()
    for handler in root_logger.handlers:
        handler.addFilter(order_filter)

    configure_specific_loggers(settings)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - level: {settings.LOG_LEVEL}")
    if settings.LOG_FILE_PATH:
        logger.info(f"Writing logs to: {settings.LOG_FILE_PATH}")


def get_logging_configuration(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Build the dictConfig payload for the given settings.

    Returns:
        Dict: Logging configuration
    """
    settings = settings or get_settings()

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": ("%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "colored": {
                "()": ColoredFormatter,
                "fmt": settings.LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "stream": CONSOLE_STREAM,
            },
            "json": {"()": StructuredFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.LOG_LEVEL,
                "formatter": "colored" if settings.DEBUG else "standard",
                "stream": CONSOLE_STREAM,
            }
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": ["console"]},
    }

    if settings.LOG_FILE_PATH:
        max_bytes = settings.LOG_MAX_SIZE_MB * 1024 * 1024
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH,
            "maxBytes": max_bytes,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH.replace(".log", "_errors.log"),
            "maxBytes": max_bytes,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        if settings.is_production:
            config["handlers"]["json_file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "INFO",
                "formatter": "json",
                "filename": settings.LOG_FILE_PATH.replace(".log", ".json"),
                "maxBytes": max_bytes,
                "backupCount": settings.LOG_BACKUP_COUNT,
                "encoding": "utf-8",
            }
            config["root"]["handlers"].append("json_file")

        config["root"]["handlers"].extend(["file", "error_file"])

    return config


def configure_specific_loggers(settings: Optional[Settings] = None) -> None:
    """
    Tune levels for our own subsystems and for noisy libraries.
    """
    settings = settings or get_settings()

    logging.getLogger("shipping_orders.services").setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    logging.getLogger("shipping_orders.db").setLevel(logging.DEBUG if settings.DEBUG else logging.WARNING)

    # SQL echo is controlled by DB_ECHO on the engine itself
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)


def log_order_operation(operation: str, success: bool, **kwargs) -> None:
    """
    Emit a structured record for an order mutation.

    Args:
        operation: add, update, delete, bulk_load...
        success: Whether the operation succeeded
        **kwargs: Extra fields (order_id, reason, ...)
    """
    logger = logging.getLogger("shipping_orders.services.orders.operation")

    extra_data = {
        "order_operation": operation,
        "success": success,
        "operation_timestamp": datetime.now(timezone.utc).isoformat(),
        **kwargs,
    }

    level = logging.INFO if success else logging.WARNING
    status = "ok" if success else "failed"
    logger.log(level, f"Order operation: {operation} {status}", extra=extra_data)


class LogContext:
    """
    Context manager that adds attributes to every record created inside it.

    Example:
        with LogContext(bulk_file="orders.txt"):
            manager.load_orders_from_file("orders.txt")
    """

    def __init__(self, **context):
        self.context = context
        self.old_factory = None

    def __enter__(self):
        self.old_factory = logging.getLogRecordFactory()

        def record_factory(*args, **kwargs):
            record = self.old_factory(*args, **kwargs)
            for key, value in self.context.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self.old_factory)
