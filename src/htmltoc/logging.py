"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any, Iterator

from rich.logging import RichHandler


_target_var: contextvars.ContextVar[str] = contextvars.ContextVar("htmltoc_target", default="-")


class _ContextFilter(logging.Filter):
    """Inject the current toc target into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.target = _target_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def toc_context(*, target: str) -> Iterator[None]:
    """Temporarily bind the element a table of contents is being built into.

    Args:
        target: Short description of the target element, e.g. ``ul#toc``.
    """

    token = _target_var.set(target)
    try:
        yield
    finally:
        _target_var.reset(token)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s target=%(target)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers if configure_logging is called multiple times
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                if not any(isinstance(f, _ContextFilter) for f in h.filters):
                    h.addFilter(_ContextFilter())
                h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
