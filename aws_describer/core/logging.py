"""
Logging Configuration Module
============================

Logging setup for AWS Describer.

Library modules only ever call ``logging.getLogger(__name__)``; the CLI
installs handlers once through :func:`setup_logging`. Region workers run
inside :func:`region_scope`, which stamps every record they log with the
region and resource type being described, so output from regions
described in parallel stays attributable.

Example
-------
>>> from aws_describer.core.logging import region_scope, setup_logging
>>>
>>> setup_logging(level="DEBUG", log_file="describer.log")
>>> with region_scope("eu-west-1", "AWS::SQS::Queue"):
...     logging.getLogger(__name__).info("listing queues")

See Also
--------
rich.logging : Rich library's logging handler.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Union

from rich.console import Console
from rich.logging import RichHandler

CONSOLE_FORMAT = "%(scope_prefix)s%(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(scope)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_SCOPE = "-"

# Third-party loggers that are noisy at DEBUG
QUIET_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")

_scope = threading.local()


def current_scope() -> str:
    """``region/resource_type`` being described on this thread, or ``"-"``."""
    return getattr(_scope, "label", NO_SCOPE)


@contextmanager
def region_scope(region: str, resource_type: str) -> Iterator[str]:
    """
    Attribute log records on the current thread to one region's describe.

    Scopes nest; the previous label is restored on exit. Global resources
    pass ``region=""`` and are labelled ``global``.
    """
    previous = getattr(_scope, "label", None)
    _scope.label = f"{region or 'global'}/{resource_type}"
    try:
        yield _scope.label
    finally:
        if previous is None:
            del _scope.label
        else:
            _scope.label = previous


class ScopeFilter(logging.Filter):
    """Adds ``scope`` and ``scope_prefix`` to every record a handler sees."""

    def filter(self, record: logging.LogRecord) -> bool:
        scope = current_scope()
        record.scope = scope
        record.scope_prefix = "" if scope == NO_SCOPE else f"[{scope}] "
        return True


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[str] = None,
    rich_tracebacks: bool = True,
    console: Optional[Console] = None,
    quiet_loggers: Sequence[str] = QUIET_LOGGERS,
) -> None:
    """
    Configure application-wide logging.

    Parameters
    ----------
    level : str or int, default="INFO"
        Logging level name or number. Unknown names fall back to INFO.
    log_file : str, optional
        Also append plain-text records, with timestamps and scope, here.
    rich_tracebacks : bool, default=True
        Whether to use Rich for exception tracebacks.
    console : Console, optional
        Defaults to a stderr console, keeping stdout free for streamed
        JSON lines.
    quiet_loggers : sequence of str
        Loggers held at WARNING regardless of ``level``.

    Notes
    -----
    Existing root handlers are replaced, so repeated calls do not stack.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    scope_filter = ScopeFilter()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=rich_tracebacks,
        tracebacks_show_locals=False,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.addFilter(scope_filter)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(scope_filter)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
        )
        root_logger.addHandler(file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"file={log_file or 'None'}"
    )
