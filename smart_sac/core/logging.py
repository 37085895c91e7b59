"""
Logging Configuration and Utilities

Every application log event goes through structlog: request context and
redaction processors run first, then the event is handed to the stdlib
root handler, which renders it as JSON (python-json-logger) or text.
"""

import sys
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from contextvars import ContextVar

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from pythonjsonlogger import jsonlogger

from smart_sac.config.settings import settings

# Bound by RequestIDMiddleware for the duration of a request
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

CALLSITE_PARAMETERS = (
    CallsiteParameter.MODULE,
    CallsiteParameter.FUNC_NAME,
    CallsiteParameter.LINENO,
)


class RequestContextProcessor:
    """Add request context to log events"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = 'smart-sac'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


class SecurityLogProcessor:
    """Mask sensitive values before they reach a handler"""

    SENSITIVE_KEYS = (
        'password', 'token', 'secret', 'credentials',
        'authorization', 'cookie',
    )

    def __call__(self, logger, method_name, event_dict):
        self._sanitize_event_dict(event_dict)
        return event_dict

    def _sanitize_event_dict(self, event_dict: Dict[str, Any]):
        for key in list(event_dict.keys()):
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                event_dict[key] = '[REDACTED]'
            elif isinstance(event_dict[key], dict):
                self._sanitize_event_dict(event_dict[key])


def render_to_record(logger, method_name, event_dict):
    """
    Final processor for JSON output.

    The callsite keys collide with LogRecord attributes, so they travel
    under a single ``callsite`` extra and the formatter unpacks them.
    """
    callsite = {
        parameter.value: event_dict.pop(parameter.value)
        for parameter in CALLSITE_PARAMETERS
        if parameter.value in event_dict
    }
    kwargs = structlog.stdlib.render_to_log_kwargs(logger, method_name, event_dict)
    kwargs['extra']['callsite'] = callsite
    return kwargs


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter for structlog events and third-party records alike"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        callsite = log_record.pop('callsite', None) or {}
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = callsite.get('module', record.module)
        log_record['function'] = callsite.get('func_name', record.funcName)
        log_record['line'] = callsite.get('lineno', record.lineno)

        # uvicorn and SQLAlchemy records bypass the structlog processors
        req_id = request_id.get()
        if req_id and 'request_id' not in log_record:
            log_record['request_id'] = req_id

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        """Configure the structlog pipeline that feeds the stdlib handlers"""

        processors = [
            structlog.stdlib.filter_by_level,
            RequestContextProcessor(),
            SecurityLogProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            CallsiteParameterAdder(
                parameters=CALLSITE_PARAMETERS,
                additional_ignores=[__name__],
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if settings.LOG_FORMAT == "json":
            processors.append(render_to_record)
        else:
            processors.append(
                structlog.processors.KeyValueRenderer(key_order=['event'], drop_missing=True)
            )

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        """Configure the root handler"""

        level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if settings.LOG_FORMAT == "json":
            formatter = CustomJsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
        else:
            formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')

        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        LoggingConfig._configure_library_loggers()

    @staticmethod
    def _configure_library_loggers():
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        if settings.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("httpx").setLevel(logging.WARNING)


class LoggerAdapter:
    """
    Keeps the stdlib calling convention (``extra=``, ``exc_info=``) on top
    of a structlog bound logger. Keys in ``extra`` become event fields.
    """

    def __init__(self, logger):
        self.logger = logger

    def _log(self, level: int, message: str, *args, **kwargs):
        fields = dict(kwargs.pop('extra', None) or {})
        fields.update(kwargs)
        self.logger.log(level, message, *args, **fields)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: str) -> LoggerAdapter:
    return LoggerAdapter(structlog.stdlib.get_logger(name))


def setup_logging():
    """Initialize logging configuration"""
    LoggingConfig.configure_structured_logging()
    LoggingConfig.configure_standard_logging()

    get_logger(__name__).info("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
    })


__all__ = [
    'get_logger',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
]
