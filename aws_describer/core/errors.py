"""
Error Classification Module
===========================

Decides whether a provider error means "nothing here" or "something broke".

Every upstream call site names its own set of *absence codes*. A
``ClientError`` whose code is in that set is an absence signal:

- at the primary list call, the whole resource type contributes zero items;
- at a secondary enrichment call, that sub-field becomes empty and the
  item is still emitted.

Any other error propagates.

Example
-------
>>> from aws_describer.core.errors import DEFAULT_ABSENCE_CODES, is_absence
>>>
>>> try:
...     events.list_tags_for_resource(ResourceARN=arn)
... except ClientError as e:
...     if not is_absence(e, DEFAULT_ABSENCE_CODES):
...         raise
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from botocore.exceptions import ClientError

AbsenceCodes = FrozenSet[str]

NO_ABSENCE_CODES: AbsenceCodes = frozenset()

DEFAULT_ABSENCE_CODES: AbsenceCodes = frozenset(
    {"InvalidParameter", "ResourceNotFoundException", "ValidationException"}
)

NOT_FOUND_CODES: AbsenceCodes = frozenset(
    {"ResourceNotFoundException", "ValidationException"}
)


def absence_codes(*codes: str, base: Iterable[str] = ()) -> AbsenceCodes:
    """
    Build an absence-code set.

    Example
    -------
    >>> sorted(absence_codes("RepositoryNotFoundException", base=NOT_FOUND_CODES))
    ['RepositoryNotFoundException', 'ResourceNotFoundException', 'ValidationException']
    """
    return frozenset(base) | frozenset(codes)


def error_code(error: BaseException) -> Optional[str]:
    """Return the provider error code of ``error``, or ``None``."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def is_error(error: BaseException, code: str) -> bool:
    """Check whether ``error`` carries exactly the provider code ``code``."""
    return error_code(error) == code


def is_absence(error: BaseException, codes: AbsenceCodes) -> bool:
    """Check whether ``error`` is an absence signal for this call site."""
    code = error_code(error)
    return code is not None and code in codes
