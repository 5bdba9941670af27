from __future__ import annotations

import logging


def configure_paretomerge_logging(*, level: int = logging.INFO) -> None:
    """
    Configure a minimal console logger for paretomerge.

    Notes:
        - This is opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "paretomerge" logger has handlers.
    """
    root = logging.getLogger()
    pkg_logger = logging.getLogger("paretomerge")

    if root.handlers or pkg_logger.handlers:
        pkg_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False


__all__ = ["configure_paretomerge_logging"]
