"""
Pagination Engine
=================

A generic cursor-following loop for list APIs of any shape.

The caller supplies a *step* function. Each step performs exactly one
upstream list call with the previous cursor, processes that page, and
returns the next cursor. Traversal stops when the cursor is absent
(``None`` or ``""``). Exceptions raised by a step abort traversal and
propagate unchanged.

Example
-------
>>> def step(token):
...     kwargs = {"NextToken": token} if token else {}
...     page = events.list_rules(**kwargs)
...     for rule in page.get("Rules", []):
...         emit(rule)
...     return page.get("NextToken")
...
>>> pages = paginate_retrieve_all(step)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from aws_describer.core.context import DescribeContext
from aws_describer.core.exceptions import PaginationLimitError

logger = logging.getLogger(__name__)

Cursor = Optional[Any]
StepFunction = Callable[[Cursor], Cursor]


def paginate_retrieve_all(
    step: StepFunction,
    context: Optional[DescribeContext] = None,
    max_pages: Optional[int] = None,
    resource_type: Optional[str] = None,
) -> int:
    """
    Drive ``step`` until it returns an absent cursor.

    Parameters
    ----------
    step : callable
        ``step(previous_cursor) -> next_cursor``. Called first with ``None``.
    context : DescribeContext, optional
        Checked for cancellation before every page.
    max_pages : int, optional
        Page ceiling. ``None`` means unbounded: termination then relies
        on the upstream API eventually returning an absent cursor.
    resource_type : str, optional
        Used for log messages and error context only.

    Returns
    -------
    int
        Number of pages fetched.

    Raises
    ------
    PaginationLimitError
        If another page is needed after ``max_pages`` pages.
    Exception
        Anything raised by ``step``.
    """
    cursor: Cursor = None
    pages = 0

    while True:
        if context is not None:
            context.check(resource_type)
        if max_pages is not None and pages >= max_pages:
            raise PaginationLimitError(
                f"Pagination exceeded {max_pages} pages",
                resource_type=resource_type,
                region=context.region if context else None,
                details={"max_pages": max_pages},
            )

        cursor = step(cursor)
        pages += 1

        if not cursor:
            break
        logger.debug(f"Fetched page {pages} of {resource_type or 'listing'}, continuing")

    return pages
