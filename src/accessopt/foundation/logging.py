from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(name)s: %(message)s"


def configure_accessopt_logging(*, level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Handler | None:
    """
    Attach a console handler to the "accessopt" logger.

    Opt-in only: library modules never call this or logging.basicConfig().
    Returns the new handler, or None when the application already configured
    logging (the root or "accessopt" logger has handlers) and nothing was done.
    """
    root = logging.getLogger()
    pkg_logger = logging.getLogger("accessopt")
    if root.handlers or pkg_logger.handlers:
        return None

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False
    return handler


__all__ = ["DEFAULT_FORMAT", "configure_accessopt_logging"]
