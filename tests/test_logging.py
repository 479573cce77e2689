"""
Tests for utils/logging.py
"""

from unittest.mock import patch

import pytest

import utils.logging as app_logging


@pytest.fixture
def fresh_logging(monkeypatch):
    monkeypatch.setattr(app_logging, "_initialized", False)
    with patch.object(app_logging, "_base_logger") as base:
        yield base


class TestConfigureLogging:
    def test_installs_console_and_file_sinks(self, fresh_logging, temp_cache_dir):
        log_file = app_logging.configure_logging(log_dir=temp_cache_dir)

        assert log_file == temp_cache_dir / "season-streams.log"
        fresh_logging.remove.assert_called_once()
        levels = [c.kwargs["level"] for c in fresh_logging.add.call_args_list]
        assert levels == ["WARNING", "DEBUG"]
        assert fresh_logging.add.call_args_list[1].kwargs["rotation"] == "50 MB"

    def test_debug_lowers_console_level(self, fresh_logging, temp_cache_dir):
        app_logging.configure_logging(debug=True, log_dir=temp_cache_dir)
        assert fresh_logging.add.call_args_list[0].kwargs["level"] == "DEBUG"

    def test_configures_once(self, fresh_logging, temp_cache_dir):
        app_logging.configure_logging(log_dir=temp_cache_dir)
        app_logging.configure_logging(debug=True, log_dir=temp_cache_dir)
        assert fresh_logging.add.call_count == 2

    def test_creates_log_dir(self, fresh_logging, temp_cache_dir):
        target = temp_cache_dir / "nested" / "logs"
        app_logging.configure_logging(log_dir=target)
        assert target.is_dir()


class TestGetLogger:
    def test_binds_module_name(self):
        with patch.object(app_logging, "_base_logger") as base:
            app_logging.get_logger("services.jikan_client")
        base.bind.assert_called_once_with(name="services.jikan_client")
