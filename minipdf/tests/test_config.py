"""Tests for configuration, logging helpers and the error hierarchy."""

import logging

import pytest

from minipdf import exceptions
from minipdf.config import Config
from minipdf.utils.logging import get_logger, setup_logging


class TestConfig:
    """Test Config loading."""

    def test_defaults(self):
        config = Config()
        assert config.pdf_version == "1.7"
        assert (config.page_width, config.page_height) == (612, 792)
        assert config.log_level_value == logging.WARNING

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MINIPDF_PDF_VERSION", "1.4")
        monkeypatch.setenv("MINIPDF_PAGE_WIDTH", "595.5")
        monkeypatch.setenv("MINIPDF_LOG_LEVEL", "debug")
        config = Config.from_env(env_file=str(tmp_path / "missing.env"))
        assert config.pdf_version == "1.4"
        assert config.page_width == 595.5
        assert config.page_height == 792
        assert config.log_level_value == logging.DEBUG

    def test_from_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("MINIPDF_PRODUCER", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("MINIPDF_PRODUCER=from-file\n")
        try:
            config = Config.from_env(env_file=str(env_file))
            assert config.producer == "from-file"
        finally:
            monkeypatch.delenv("MINIPDF_PRODUCER", raising=False)

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"producer": "x", "unknown": 1})
        assert config.producer == "x"
        assert not hasattr(config, "unknown")


class TestLogging:
    """Test logging helpers."""

    def test_get_logger(self):
        assert get_logger("minipdf.test").name == "minipdf.test"

    def test_setup_logging_accepts_names(self, tmp_path):
        log_file = tmp_path / "minipdf.log"
        setup_logging(level="debug", log_file=str(log_file))
        get_logger("minipdf.test").warning("hello")


class TestExceptions:
    """Test the error hierarchy."""

    @pytest.mark.parametrize("cls", [
        exceptions.UnsupportedTypeError,
        exceptions.UninitializedSinkError,
        exceptions.PdfIOError,
        exceptions.InvalidHandleError,
        exceptions.DocumentStateError,
    ])
    def test_base_class(self, cls):
        assert issubclass(cls, exceptions.PdfError)

    def test_aliases(self):
        assert exceptions.UnsupportedType is exceptions.UnsupportedTypeError
        assert exceptions.IOFailure is exceptions.PdfIOError

    def test_io_error_fields(self):
        cause = OSError("boom")
        error = exceptions.PdfIOError("failed", bytes_written=42, cause=cause)
        assert error.bytes_written == 42
        assert error.cause is cause
