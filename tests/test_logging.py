"""Tests for logging utilities."""

import logging
from io import StringIO

from qstate import Simulation, gates
from qstate.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "qstate.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("qstate.backend.apply").name == "qstate.backend.apply"
    assert get_logger().name == "qstate"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_different_modules():
    """Test that different modules get different loggers."""
    assert get_logger("module1") is not get_logger("module2")


def test_logger_output():
    """Test that logger outputs messages correctly."""
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, stream=captured)
        get_logger("test_module").info("Test message")
        assert "[INFO] qstate.test_module: Test message" in captured.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_engine_logs_at_debug():
    """Gate applications and measurements are logged at DEBUG."""
    captured = StringIO()
    try:
        configure_logging(level="DEBUG", stream=captured)
        sim = Simulation(1).apply(gates.H(1))
        sim.measure(1)
        output = captured.getvalue()
        assert "apply H" in output
        assert "measure qubit=1" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level():
    """Test that set_log_level updates logger levels."""
    logger = get_logger("test_module")
    try:
        set_log_level(logging.INFO)
        assert logger.level == logging.INFO
    finally:
        set_log_level(logging.WARNING)
    assert logger.level == logging.WARNING


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
    finally:
        set_log_level("WARNING")


def test_custom_format():
    captured = StringIO()
    try:
        configure_logging(level=logging.INFO, format_string="%(message)s!", stream=captured)
        get_logger("fmt").info("hello")
        assert captured.getvalue() == "hello!\n"
    finally:
        configure_logging(level=logging.WARNING)
