import logging
from typing import Any

import structlog
from structlog.types import Processor


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the jproxy package"""

    # A handler carrying a structlog formatter means logging is already set up
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if (isinstance(handler, logging.StreamHandler) and
            isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)):
            root_logger.setLevel(log_level.upper())
            return

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Format the exception only for JSON logs, as we want to pretty-print them when
        # using the ConsoleRenderer
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # These run ONLY on `logging` entries that do NOT originate within
        # structlog.
        foreign_pre_chain=shared_processors,
        # These run on ALL entries after the pre_chain is done.
        processors=[
            # Remove _record & _from_structlog.
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class JProxyStructLogger:
    """
    Structured logger for the jproxy package.

    Values passed to `bind` are attached to this logger instance only, so
    every component can carry its own context (e.g. `component="resolver"`).
    """

    def __init__(self, log_name: str = "jproxy", **initial_values: Any):
        self.logger = structlog.stdlib.get_logger(log_name).bind(**initial_values)

    def bind(self, **new_values: Any) -> "JProxyStructLogger":
        """Return a child logger with the given key-value pairs bound."""
        child = JProxyStructLogger.__new__(JProxyStructLogger)
        child.logger = self.logger.bind(**new_values)
        return child

    def debug(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.debug(event, *args, **kw)

    def info(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.info(event, *args, **kw)

    def warning(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.warning(event, *args, **kw)

    warn = warning

    def error(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.error(event, *args, **kw)

    def critical(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.critical(event, *args, **kw)

    def exception(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.exception(event, *args, **kw)


def get_jproxy_logger(log_name: str = "jproxy") -> JProxyStructLogger:
    """Return a structured logger rooted at the jproxy namespace."""
    return JProxyStructLogger(log_name)


def init_logger(config):
    """
    Initialize the structured logger for the jproxy package.

    Args:
        config: A resolved proxy configuration exposing `debug_mode`

    Returns:
        JProxyStructLogger: Configured structured logger instance
    """
    log_level = "DEBUG" if config.debug_mode else "INFO"

    setup_logging(json_logs=False, log_level=log_level)

    return get_jproxy_logger()
