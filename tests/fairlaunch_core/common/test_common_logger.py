import logging

import structlog

from fairlaunch_core.common.logger import get_logger, setup_logging


def test_setup_logging_sets_level():
    setup_logging({"level": "debug", "json_format": True})
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1


def test_unknown_level_falls_back_to_info():
    setup_logging({"level": "chatty"})
    assert logging.getLogger().level == logging.INFO


def test_get_logger_binds_context():
    setup_logging()
    logger = get_logger("fairlaunch_core.tests")
    bound = logger.bind(curve="abc")
    assert isinstance(bound, structlog.stdlib.BoundLogger)
