"""Tests for the colored logging setup."""

import logging

import pytest
from colorama import Fore, Style

from rgbd_pyramid.config.settings import LoggingConfig, Settings
from rgbd_pyramid.utils.logger import ColoredFormatter, get_logger, setup_from_settings, setup_logger


@pytest.fixture
def fresh_logger_name(request):
    name = f"rgbd_pyramid.tests.{request.node.name}"
    yield name
    logging.getLogger(name).handlers.clear()


def _record(level, msg="depth decoded"):
    return logging.LogRecord("rgbd_pyramid", level, __file__, 1, msg, None, None)


def test_colored_formatter_colors_level_and_errors():
    formatter = ColoredFormatter("%(levelname)s %(message)s")
    out = formatter.format(_record(logging.ERROR))
    assert out.startswith(f"{Fore.RED}ERROR{Style.RESET_ALL}")
    assert f"{Fore.RED}depth decoded{Style.RESET_ALL}" in out


def test_colored_formatter_leaves_record_untouched():
    record = _record(logging.WARNING)
    ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert record.levelname == "WARNING"
    assert record.msg == "depth decoded"


def test_plain_formatter_without_colors():
    formatter = ColoredFormatter("%(levelname)s %(message)s", use_colors=False)
    assert formatter.format(_record(logging.INFO)) == "INFO depth decoded"


def test_setup_logger_adds_single_handler(fresh_logger_name):
    logger = setup_logger(fresh_logger_name, level="debug")
    setup_logger(fresh_logger_name, level="debug")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logger_plain_format(fresh_logger_name):
    logger = setup_logger(fresh_logger_name, fmt="%(message)s", use_colors=False)
    formatter = logger.handlers[0].formatter
    assert not isinstance(formatter, ColoredFormatter)


def test_setup_from_settings():
    logger = logging.getLogger("rgbd_pyramid")
    saved_handlers, saved_level = logger.handlers[:], logger.level
    logger.handlers.clear()
    try:
        settings = Settings(logging=LoggingConfig(level="warning", console_colors=False))
        configured = setup_from_settings(settings)
        assert configured is logger
        assert configured.level == logging.WARNING
    finally:
        logger.handlers[:] = saved_handlers
        logger.setLevel(saved_level)


def test_module_loggers_propagate_to_package_logger(caplog):
    package_logger = get_logger("rgbd_pyramid")
    with caplog.at_level(logging.DEBUG, logger="rgbd_pyramid"):
        get_logger("rgbd_pyramid.rgbd.pyramid").debug("level 1 built")
    assert package_logger.name == "rgbd_pyramid"
    assert "level 1 built" in caplog.text
