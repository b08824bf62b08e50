"""Tests for the uvicorn logging configuration."""

from uvicorn.config import LOGGING_CONFIG

from venus.web.runner import build_log_config


class TestBuildLogConfig:
    def test_levels_follow_debug_flag(self, config):
        debug_config = config.model_copy(update={"debug": True})

        assert {logger["level"] for logger in build_log_config(debug_config)["loggers"].values()} == {"DEBUG"}
        assert {logger["level"] for logger in build_log_config(config)["loggers"].values()} == {"INFO"}

    def test_uvicorn_defaults_untouched(self, config):
        original_format = LOGGING_CONFIG["formatters"]["default"]["fmt"]

        log_config = build_log_config(config)

        assert log_config["formatters"]["default"]["fmt"] == "%(asctime)s - %(levelname)s - %(message)s"
        assert LOGGING_CONFIG["formatters"]["default"]["fmt"] == original_format
