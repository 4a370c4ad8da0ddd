"""
Logging Configuration Module

Provides centralized logging configuration with file and console handlers.
"""

import logging
import os
import functools
import inspect
import json
from datetime import datetime, date
from decimal import Decimal
from logging.handlers import TimedRotatingFileHandler
from uuid import UUID

from app.config.settings import LogConfig

# Define log format strings
FILE_FORMATTER = '%(asctime)s.%(msecs)03d | %(levelname)-7s | [PID:%(process)d] | %(name)s.%(funcName)s:%(lineno)d | %(message)s'
CONSOLE_FORMATTER = '%(asctime)s.%(msecs)03d | \033[1m%(levelname)-7s\033[0m | %(name)s.%(funcName)s:%(lineno)d | \033[36m%(message)s\033[0m'

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "anthropic", "sqlalchemy.engine", "uvicorn.access")

MAX_LOG_VALUE_LENGTH = 500


class LoggingConfig:
    """Logging configuration management"""

    def __init__(self, log_file_name='app', log_level=logging.INFO, backup_count=30, log_dir=None, to_file=True):
        self.log_file_name = log_file_name
        self.log_level = logging.getLevelName(log_level) if isinstance(log_level, str) else log_level
        self.backup_count = backup_count
        self.log_dir = log_dir
        self.to_file = to_file
        self.logger = logging.getLogger()

    @classmethod
    def from_settings(cls, settings):
        """Level from Settings (LOG_LEVEL wins over YAML); file options from LogConfig"""
        return cls(
            log_file_name=LogConfig.FILE_NAME,
            log_level=settings.log_level.upper(),
            backup_count=LogConfig.BACKUP_COUNT,
            log_dir=LogConfig.DIR,
            to_file=LogConfig.TO_FILE,
        )

    def setup_logging(self):
        """Setup logging with file and console handlers"""
        # Clear existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.setLevel(self.log_level)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMATTER))
        self.logger.addHandler(console_handler)

        if self.to_file:
            self._add_file_handler()

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        self.logger.info("Logging initialized successfully")
        return self.logger

    def _add_file_handler(self):
        if not self.log_dir:
            root_dir = os.path.dirname(os.path.abspath(__file__))
            self.log_dir = os.path.join(root_dir, "../../logs")

        try:
            os.makedirs(self.log_dir, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create log directory {self.log_dir}: {e}")
            return

        # Daily rotation
        file_handler = TimedRotatingFileHandler(
            os.path.join(self.log_dir, f'{self.log_file_name}.log'),
            when='D',
            interval=1,
            backupCount=self.backup_count,
            encoding='utf-8',
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMATTER))
        self.logger.addHandler(file_handler)


def _truncate(text: str, max_length: int = MAX_LOG_VALUE_LENGTH) -> str:
    return text if len(text) <= max_length else text[:max_length] + "... (truncated)"


class _SafeEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, (Decimal, UUID)):
            return str(o)
        if hasattr(o, 'model_dump') and callable(o.model_dump):
            return o.model_dump(mode="json")
        if hasattr(o, 'to_dict') and callable(o.to_dict):
            return o.to_dict()
        return f"<{type(o).__name__}>"


def _safe_to_json(obj) -> str:
    """Safely render an object for a log line"""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return _truncate(str(obj))
    if isinstance(obj, bytes):
        return f"bytes(len={len(obj)})"
    try:
        return _truncate(json.dumps(obj, cls=_SafeEncoder, ensure_ascii=False))
    except (TypeError, ValueError):
        return _truncate(repr(obj))


def log_print(func):
    """Decorator for logging function calls and return values (supports sync/async)"""

    try:
        param_names = list(inspect.signature(func).parameters.keys())
    except (TypeError, ValueError):
        param_names = []

    logger = logging.getLogger(func.__module__)

    def _format_args(args, kwargs) -> str:
        # Skip self
        start_idx = 1 if param_names[:1] == ["self"] else 0
        params = []
        for i, arg in enumerate(args[start_idx:], start=start_idx):
            name = param_names[i] if i < len(param_names) else f"arg{i}"
            params.append(f"{name}={_truncate(repr(arg), 120)}")
        params.extend(f"{k}={_truncate(repr(v), 120)}" for k, v in kwargs.items())
        return ', '.join(params) if params else '(no args)'

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        logger.info(f"[Call] {func.__qualname__} <- Args: {_format_args(args, kwargs)}")
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.warning(f"[Exception] {func.__qualname__} ! {e.__class__.__name__}: {e}")
            raise
        logger.info(f"[Return] {func.__qualname__} -> Result: {_safe_to_json(result)}")
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        logger.info(f"[Call] {func.__qualname__} <- Args: {_format_args(args, kwargs)}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.warning(f"[Exception] {func.__qualname__} ! {e.__class__.__name__}: {e}")
            raise
        logger.info(f"[Return] {func.__qualname__} -> Result: {_safe_to_json(result)}")
        return result

    return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper
