"""Tests for the logging setup and project-relative paths."""

import logging

import pytest

from waste_collection_api.app.core.config import PROJECT_ROOT, resolve_project_path
from waste_collection_api.app.core.logging_config import CONSOLE_HANDLER, FILE_HANDLER, setup_logging


@pytest.fixture
def root_logger():
    """Give the test the root logger and restore its handlers and level afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def own_handlers(root):
    return [h.get_name() for h in root.handlers if h.get_name() in (CONSOLE_HANDLER, FILE_HANDLER)]


def test_relative_paths_resolve_against_project_root(tmp_path):
    assert resolve_project_path("logs/api.log") == (PROJECT_ROOT / "logs" / "api.log").resolve()
    assert resolve_project_path(str(tmp_path / "api.log")) == tmp_path / "api.log"


def test_repeated_setup_does_not_stack_handlers(root_logger, tmp_path):
    logfile = tmp_path / "api.log"
    setup_logging("WARNING", str(logfile))
    setup_logging("WARNING", str(logfile))

    assert sorted(own_handlers(root_logger)) == sorted([CONSOLE_HANDLER, FILE_HANDLER])
    assert root_logger.level == logging.WARNING

    logging.getLogger("waste_collection_api.test").warning("vehicle over capacity")
    for handler in root_logger.handlers:
        handler.flush()
    assert logfile.read_text(encoding="utf-8").count("vehicle over capacity") == 1


def test_setup_leaves_foreign_handlers_alone(root_logger):
    foreign = logging.NullHandler()
    root_logger.addHandler(foreign)

    setup_logging("INFO")

    assert foreign in root_logger.handlers
    assert own_handlers(root_logger) == [CONSOLE_HANDLER]


def test_debug_mode_lowers_level_and_adds_location(root_logger, tmp_path):
    logfile = tmp_path / "nested" / "debug.log"
    setup_logging("ERROR", str(logfile), debug=True)

    assert root_logger.level == logging.DEBUG
    logging.getLogger("waste_collection_api.test").debug("checking plate")
    for handler in root_logger.handlers:
        handler.flush()
    line = logfile.read_text(encoding="utf-8").splitlines()[-1]
    assert "checking plate" in line
    assert "(test_logging_config:" in line


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("LOUD")
    assert root_logger.level == logging.INFO
