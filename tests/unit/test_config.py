"""
Tests for library configuration and logging setup.
"""

import io
import logging

import pytest

from spprc.config import SPPRCConfig, configure_logging
from spprc.core import ConfigurationError


class TestSPPRCConfig:
    """Tests for SPPRCConfig."""

    def test_defaults(self, monkeypatch):
        for name in ("SPPRC_LOG_LEVEL", "SPPRC_MAX_INSERTIONS", "SPPRC_MAX_STEPS"):
            monkeypatch.delenv(name, raising=False)
        cfg = SPPRCConfig()

        assert cfg.log_level == "WARNING"
        assert cfg.default_max_insertions == 0
        assert cfg.default_max_steps == 0
        assert cfg.get_tolerance("reduced_cost") == 1e-6

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SPPRC_LOG_LEVEL", "debug")
        monkeypatch.setenv("SPPRC_MAX_INSERTIONS", "500")
        monkeypatch.setenv("SPPRC_MAX_STEPS", "20")
        cfg = SPPRCConfig()

        assert cfg.log_level == "DEBUG"
        assert cfg.default_max_insertions == 500
        assert cfg.default_max_steps == 20

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("SPPRC_MAX_STEPS", "many")
        with pytest.raises(ConfigurationError):
            SPPRCConfig()

    def test_invalid_values(self):
        with pytest.raises(ConfigurationError):
            SPPRCConfig(log_level="LOUD")
        with pytest.raises(ConfigurationError):
            SPPRCConfig(default_max_steps=-1)
        with pytest.raises(ConfigurationError):
            SPPRCConfig().set_tolerance("reduced_cost", -1.0)

    def test_unknown_tolerance_falls_back(self):
        assert SPPRCConfig().get_tolerance("nonexistent") == 1e-6

    def test_save_and_load(self, tmp_path):
        cfg = SPPRCConfig(log_level="INFO", default_max_insertions=1000, default_max_steps=7)
        cfg.set_tolerance("reduced_cost", 1e-4)
        path = tmp_path / "spprc.toml"
        cfg.save(path)

        loaded = SPPRCConfig.load(path)
        assert loaded.to_dict() == cfg.to_dict()

    def test_load_missing_file(self, tmp_path):
        loaded = SPPRCConfig.load(tmp_path / "missing.toml")
        assert loaded.get_tolerance("reduced_cost") == 1e-6

    def test_from_dict_keeps_defaults(self):
        cfg = SPPRCConfig.from_dict({"default_max_steps": 3})
        assert cfg.default_max_steps == 3
        assert "reduced_cost" in cfg.tolerances


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_handler_installed_once(self):
        stream = io.StringIO()
        logger = configure_logging("INFO", stream=stream)
        configure_logging("INFO", stream=stream)

        try:
            marked = [h for h in logger.handlers if getattr(h, "_spprc_handler", False)]
            assert len(marked) == 1
            assert logger.level == logging.INFO

            logging.getLogger("spprc.pricing.labeling").info("hello")
            assert "hello" in stream.getvalue()
        finally:
            for handler in marked:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
