"""
Tests for logging setup.
"""
import logging

from rich.logging import RichHandler

from invoicing_dao.utils.logging_config import setup_logging


class TestSetupLogging:
    """Test root logger configuration."""

    def setup_method(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level

    def teardown_method(self):
        self.root.handlers = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_level_is_applied(self):
        setup_logging("DEBUG")
        assert self.root.level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """Test calling setup twice leaves exactly one handler."""
        setup_logging("INFO")
        setup_logging("WARNING")

        assert len(self.root.handlers) == 1
        assert isinstance(self.root.handlers[0], RichHandler)
        assert self.root.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert self.root.level == logging.INFO
