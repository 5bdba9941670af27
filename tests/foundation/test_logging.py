from __future__ import annotations

import logging

from paretomerge.foundation.logging import configure_paretomerge_logging


def test_configure_logging_sets_package_level(monkeypatch) -> None:
    pkg_logger = logging.getLogger("paretomerge")
    monkeypatch.setattr(pkg_logger, "level", pkg_logger.level)
    configure_paretomerge_logging(level=logging.DEBUG)
    assert pkg_logger.level == logging.DEBUG


def test_configure_logging_attaches_handler_when_unconfigured(monkeypatch) -> None:
    root = logging.getLogger()
    pkg_logger = logging.getLogger("paretomerge")
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(pkg_logger, "handlers", [])
    monkeypatch.setattr(pkg_logger, "propagate", True)
    monkeypatch.setattr(pkg_logger, "level", pkg_logger.level)

    configure_paretomerge_logging(level=logging.WARNING)

    assert len(pkg_logger.handlers) == 1
    assert pkg_logger.level == logging.WARNING
    assert pkg_logger.propagate is False
