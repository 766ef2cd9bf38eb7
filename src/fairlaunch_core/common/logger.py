import logging
import sys
from typing import Optional

import structlog


def setup_logging(config: Optional[dict] = None) -> None:
    """
    Configures structlog on top of stdlib logging.

    :param config: the 'logging' section of the YAML config; keys 'level' and 'json_format'
    """
    config = config or {}
    log_level_str = str(config.get("level", "INFO")).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)
    json_format = config.get("json_format", False)

    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.get_logger(__name__).info("Logging configured", level=log_level_str, json_format=json_format)


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)
