"""
Structured JSON logging for the vehicle registry.

Every record is written as one JSON object carrying the id of the HTTP
request it belongs to. Request ids live in a ``ContextVar`` so concurrent
requests on the event loop never see each other's id.
"""

import logging
import logging.handlers
import json
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from src.vehicle_registry.presentation.api.config import Settings


SERVICE_NAME = "vehicle-registry"
NO_CORRELATION_ID = "-"

correlation_id_context: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# Attributes every LogRecord has; anything else came in through ``extra``
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {'message', 'asctime', 'correlation_id'}

_QUIET_LOGGERS = (
    'sqlalchemy.engine',
    'sqlalchemy.pool',
    'aiosqlite',
    'asyncpg',
    'uvicorn.access',
)


class CorrelationIDFilter(logging.Filter):
    """Stamp each record with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_context.get() or NO_CORRELATION_ID
        return True


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON documents."""

    def __init__(self, service_name: str = SERVICE_NAME):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "correlation_id": getattr(record, 'correlation_id', NO_CORRELATION_ID),
            "message": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        context = {
            key: value for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_FIELDS
        }
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        return json.dumps(entry, default=str, ensure_ascii=False)


class LoggingConfig:
    """Root logger setup: JSON to stdout plus optional rotating files."""

    def __init__(self,
                 log_level: str = "INFO",
                 service_name: str = SERVICE_NAME,
                 log_dir: Optional[str] = None,
                 max_file_size: int = 10 * 1024 * 1024,
                 backup_count: int = 5,
                 enable_file: bool = True):
        """
        Args:
            log_level: Name of the root level, e.g. ``"DEBUG"``
            service_name: Value of the ``service`` field and log file prefix
            log_dir: Directory for log files; ``logs/`` under the project root by default
            max_file_size: Size in bytes at which a log file is rotated
            backup_count: Rotated files kept per log
            enable_file: Write log files in addition to stdout
        """
        self.log_level = logging.getLevelName(log_level.upper())
        if not isinstance(self.log_level, int):
            raise ValueError(f"Unknown log level: {log_level}")

        self.service_name = service_name
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.enable_file = enable_file
        self.log_dir = Path(log_dir) if log_dir else Path(__file__).resolve().parents[3] / "logs"

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LoggingConfig":
        return cls(
            log_level=settings.log_level,
            log_dir=settings.log_dir,
            enable_file=settings.log_enable_file
        )

    def setup_logging(self) -> None:
        """Replace the root logger's handlers with the configured ones."""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        root_logger.setLevel(self.log_level)

        formatter = JSONFormatter(service_name=self.service_name)
        correlation_filter = CorrelationIDFilter()
        for handler in self._build_handlers():
            handler.addFilter(correlation_filter)
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    def _build_handlers(self) -> List[logging.Handler]:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(self.log_level)
        handlers: List[logging.Handler] = [console]

        if self.enable_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            everything = self._rotating_handler(self.log_dir / f"{self.service_name}.log")
            everything.setLevel(self.log_level)
            errors = self._rotating_handler(self.log_dir / f"{self.service_name}-errors.log")
            errors.setLevel(logging.ERROR)
            handlers.extend([everything, errors])

        return handlers

    def _rotating_handler(self, filename: Path) -> logging.Handler:
        return logging.handlers.RotatingFileHandler(
            filename=filename,
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


def get_correlation_id() -> Optional[str]:
    """Id of the request currently being served, if any."""
    return correlation_id_context.get()


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id for the duration of the block and restore the previous one."""
    correlation_id = correlation_id or generate_correlation_id()
    token = correlation_id_context.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_context.reset(token)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def mask_email(email: Optional[str]) -> str:
    """Keep the domain and first character of an email, e.g. ``a***@admin``."""
    if not email:
        return "<empty>"
    local, at, domain = email.partition("@")
    return f"{local[:1]}***{at}{domain}"


def log_with_extra(logger: logging.Logger, level: int, message: str, **extra) -> None:
    logger.log(level, message, extra=extra)


def log_database_operation(logger: logging.Logger, operation: str, table: str, **extra) -> None:
    """Debug line for a statement issued by a repository."""
    log_with_extra(
        logger,
        logging.DEBUG,
        f"Database {operation}: {table}",
        db_operation=operation,
        db_table=table,
        **extra
    )


def log_authentication_attempt(logger: logging.Logger, email: str, success: bool, **extra) -> None:
    """Login outcome; the email of failed attempts is masked."""
    shown = email if success else mask_email(email)
    if success:
        log_with_extra(logger, logging.INFO, f"Login succeeded for {shown}",
                       auth_email=shown, auth_success=True, **extra)
    else:
        log_with_extra(logger, logging.WARNING, f"Login failed for {shown}",
                       auth_email=shown, auth_success=False, **extra)


def log_token_rejected(logger: logging.Logger, reason: str, **extra) -> None:
    """Bearer token refused by the gate."""
    log_with_extra(logger, logging.INFO, f"Bearer token rejected: {reason}", token_rejection=reason, **extra)


def log_business_rule_violation(logger: logging.Logger, rule: str, details: str, **extra) -> None:
    log_with_extra(
        logger,
        logging.WARNING,
        f"Business rule violation: {rule} - {details}",
        business_rule=rule,
        violation_details=details,
        **extra
    )
