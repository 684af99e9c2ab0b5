"""
Describe Context Module
=======================

Request-scoped metadata for one describe call: the logical region label
stamped onto every emitted resource, the account, and the cancellation
signal every upstream call and sink delivery observes.

Example
-------
>>> ctx = DescribeContext(region="eu-west-1", account_id="123456789012",
...                       timeout=300)
>>> resources = eventbridge_bus(ctx, client)
>>>
>>> # From another thread:
>>> ctx.cancel()
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from aws_describer.core.exceptions import (
    DescribeCancelledError,
    DescribeTimeoutError,
)


@dataclass(frozen=True)
class DescribeContext:
    """
    Immutable, request-scoped describe metadata.

    Parameters
    ----------
    region : str
        Logical region label attached to each emitted resource.
    account_id : str, optional
        Account being described.
    workspace_id : str, optional
        Caller-side user or workspace identifier.
    timeout : float, optional
        Seconds from construction until the call is considered expired.
    cancel_event : threading.Event, optional
        Shared cancellation flag. Contexts derived with :meth:`for_region`
        share it, so one ``cancel()`` stops a whole fan-out.
    """

    region: str
    account_id: str = ""
    workspace_id: Optional[str] = None
    timeout: Optional[float] = None
    cancel_event: threading.Event = field(
        default_factory=threading.Event, repr=False, compare=False
    )
    deadline: Optional[float] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.deadline is None and self.timeout is not None:
            object.__setattr__(self, "deadline", time.monotonic() + self.timeout)

    def cancel(self) -> None:
        """Request cancellation of every call using this context."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self, resource_type: Optional[str] = None) -> None:
        """
        Raise if the call was cancelled or its deadline passed.

        Raises
        ------
        DescribeTimeoutError
            If the deadline elapsed.
        DescribeCancelledError
            If :meth:`cancel` was called.
        """
        if self.cancelled:
            raise DescribeCancelledError(
                "Describe call cancelled",
                resource_type=resource_type,
                region=self.region,
            )
        if self.expired:
            raise DescribeTimeoutError(
                "Describe deadline exceeded",
                resource_type=resource_type,
                region=self.region,
                details={"timeout_seconds": self.timeout},
            )

    def for_region(self, region: str) -> DescribeContext:
        """Derive a context for another region sharing cancel and deadline."""
        return DescribeContext(
            region=region,
            account_id=self.account_id,
            workspace_id=self.workspace_id,
            timeout=self.timeout,
            cancel_event=self.cancel_event,
            deadline=self.deadline,
        )
