# maker_indexer/core/logging.py
"""
Logging for the transformer.

Every logger lives under the ``maker_indexer`` root so one call to
``IndexerLogger.configure`` routes the whole package. Context passed as
keyword arguments (event name, header, block...) is attached to the record
and rendered by ``IndexerFormatter`` after the message.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from logging import DEBUG, INFO, WARNING, ERROR


ROOT_LOGGER_NAME = 'maker_indexer'


class IndexerFormatter(logging.Formatter):
    CONTEXT_ATTRS = ['event_name', 'block_number', 'header_id', 'contract_address',
                     'stage', 'log_count', 'header_count', 'error']

    def __init__(self, include_context: bool = False):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        line = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        if self.include_context:
            context = [f"{attr}={getattr(record, attr)}"
                       for attr in self.CONTEXT_ATTRS if hasattr(record, attr)]
            if context:
                line = f"{line} | {' '.join(context)}"

        return line


class IndexerLogger:
    """Configures the package root logger once per process (or per ``reset``)"""

    _configured = False

    @classmethod
    def configure(cls,
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_enabled: bool = True,
                  file_enabled: bool = True,
                  structured_format: bool = True) -> None:
        if cls._configured:
            return

        level = getattr(logging, log_level.upper())
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if console_enabled:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            if structured_format:
                console_handler.setFormatter(IndexerFormatter(include_context=True))
            else:
                console_handler.setFormatter(
                    logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
                )
            root_logger.addHandler(console_handler)

        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = IndexerFormatter(include_context=True)

            # Errors are also copied to their own file
            for filename, handler_level in (('indexer.log', level), ('indexer_errors.log', ERROR)):
                handler = logging.FileHandler(log_dir / filename)
                handler.setLevel(handler_level)
                handler.setFormatter(file_formatter)
                root_logger.addHandler(handler)

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._configured:
            cls.configure(file_enabled=False)

        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'

        return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    if logger.isEnabledFor(level):
        record = logger.makeRecord(logger.name, level, "", 0, message, (), None)
        for key, value in context.items():
            setattr(record, key, value)
        logger.handle(record)


class LoggingMixin:
    """Per-class logger named after the defining module and class"""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            module = self.__class__.__module__.removeprefix(f'{ROOT_LOGGER_NAME}.')
            self._logger = IndexerLogger.get_logger(f"{module}.{self.__class__.__name__}")
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, ERROR, message, **context)


__all__ = [
    'IndexerFormatter',
    'IndexerLogger',
    'LoggingMixin',
    'log_with_context',
    'DEBUG', 'INFO', 'WARNING', 'ERROR',
]
