"""Tests for logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from spiclient.config.settings import LoggingConfig
from spiclient.utils.logging import setup_logging


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_spiclient_handler", False)]


class TestSetupLogging:
    def test_defaults(self) -> None:
        logger = setup_logging()
        assert logger.name == "spiclient"
        assert logger.level == logging.INFO
        assert len(_own_handlers(logger)) == 1

    def test_repeated_calls_do_not_duplicate_handlers(self) -> None:
        setup_logging(LoggingConfig(level="DEBUG"))
        logger = setup_logging(LoggingConfig(level="WARNING"))
        assert logger.level == logging.WARNING
        assert len(_own_handlers(logger)) == 1

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "spiclient.log"
        logger = setup_logging(LoggingConfig(file=str(log_file)))
        logging.getLogger("spiclient.crypto.codec").info("Loaded public key from %s", "pub.pem")
        for handler in _own_handlers(logger):
            handler.flush()

        assert "Loaded public key from pub.pem" in log_file.read_text()
        assert len(_own_handlers(logger)) == 2

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert setup_logging(LoggingConfig(level="chatty")).level == logging.INFO
