"""
Configuration Tests
"""

import json
import logging

import pytest

from querysync import (
    ApplicationConfig, Context, Environment, configure_logging, get_config, set_config
)


class TestApplicationConfig:

    @pytest.mark.parametrize("environment, debug, level", [
        (Environment.DEVELOPMENT, True, "DEBUG"),
        (Environment.TESTING, False, "WARNING"),
        (Environment.PRODUCTION, False, "INFO"),
    ])
    def test_for_environment(self, environment, debug, level):
        config = ApplicationConfig.for_environment(environment)

        assert config.environment is environment
        assert config.debug is debug
        assert config.logging.level == level

    def test_from_dict(self):
        config = ApplicationConfig.from_dict({
            "environment": "production",
            "logging": {"level": "ERROR", "unknown": 1},
            "context": {"default_items_per_page": 25},
            "custom": {"feature": True},
        })

        assert config.environment is Environment.PRODUCTION
        assert config.logging.level == "ERROR"
        assert not hasattr(config.logging, "unknown")
        assert config.context.default_items_per_page == 25
        assert config.custom == {"feature": True}

    def test_to_dict_round_trips_through_from_dict(self):
        config = ApplicationConfig.for_environment(Environment.TESTING)
        config.context.default_page = 2

        assert ApplicationConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()

    def test_from_file(self, tmp_path):
        path = tmp_path / "querysync.json"
        path.write_text(json.dumps({"environment": "testing", "context": {"default_page": 3}}))

        config = ApplicationConfig.from_file(path)

        assert config.environment is Environment.TESTING
        assert config.context.default_page == 3

    def test_from_file_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ApplicationConfig.from_file(tmp_path / "missing.json")

        path = tmp_path / "querysync.yaml"
        path.write_text("environment: testing")
        with pytest.raises(ValueError):
            ApplicationConfig.from_file(path)

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("QUERYSYNC_ENV", "production")
        monkeypatch.setenv("QUERYSYNC_DEBUG", "true")
        monkeypatch.setenv("QUERYSYNC_LOG_LEVEL", "warning")
        monkeypatch.setenv("QUERYSYNC_ITEMS_PER_PAGE", "50")

        config = ApplicationConfig.from_environment()

        assert config.environment is Environment.PRODUCTION
        assert config.debug is True
        assert config.logging.level == "WARNING"
        assert config.context.default_items_per_page == 50


class TestGlobalConfig:

    def test_get_config_returns_the_configured_instance(self, testing_config):
        assert get_config() is testing_config

    def test_reset_falls_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("QUERYSYNC_ENV", "staging")
        set_config(None)

        assert get_config().environment is Environment.STAGING

    def test_contexts_use_configured_defaults(self, testing_config):
        testing_config.context.default_items_per_page = 25

        assert Context("defaults").pagination.items_per_page == 25
        assert Context("explicit", items_per_page=5).pagination.items_per_page == 5


class TestConfigureLogging:

    def test_applies_level_and_single_handler(self):
        config = ApplicationConfig.for_environment(Environment.PRODUCTION)

        configure_logging(config)
        logger = configure_logging(config)

        assert logger is logging.getLogger("querysync")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

        logger.handlers.clear()

    def test_file_handler(self, tmp_path):
        config = ApplicationConfig.for_environment(Environment.TESTING)
        config.logging.file_path = str(tmp_path / "querysync.log")

        logger = configure_logging(config)

        assert isinstance(logger.handlers[0], logging.FileHandler)

        logger.handlers[0].close()
        logger.handlers.clear()
