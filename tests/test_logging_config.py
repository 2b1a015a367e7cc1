import logging

from terramesh.logging_config import setup_logging
from terramesh.mesh.primitives import make_grid


def _reset(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "terramesh.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))

    assert logger is logging.getLogger("terramesh")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    make_grid(1)
    for handler in logger.handlers:
        handler.flush()
    assert "degenerate" in log_file.read_text(encoding="utf-8")

    _reset(logger)


def test_setup_logging_console_only():
    logger = setup_logging(level=logging.WARNING)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.handlers[0].level == logging.WARNING
    _reset(logger)
