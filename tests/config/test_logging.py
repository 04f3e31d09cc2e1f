from __future__ import annotations

import logging

from steamfriends.config import configure_logging


def test_configure_logging_silences_request_loggers() -> None:
    configure_logging(force=True)

    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
    assert not logging.getLogger("httpx").isEnabledFor(logging.INFO)


def test_configure_logging_respects_quieter_levels() -> None:
    configure_logging(level=logging.ERROR, force=True)

    assert logging.getLogger("httpcore").level == logging.ERROR
