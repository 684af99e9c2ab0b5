"""
Resource Emitter Module
=======================

One delivery path for both streaming and batch callers.

A *sink* is any callable that accepts one :class:`Resource` and may
raise. Streaming callers pass their own sink; batch callers pass none and
the emitter falls back to a :class:`BufferSink` that appends and never
fails. The describer engine only ever calls :meth:`ResourceEmitter.emit`.

Delivery guarantees
-------------------
- Resources reach the sink synchronously, in discovery order.
- With a caller sink, :attr:`ResourceEmitter.results` stays empty.
- A failing caller sink aborts the describe call with :class:`SinkError`.
- If the describe call raises, a streaming caller has received at least
  the delivered prefix, which is not guaranteed complete.

Example
-------
>>> written = []
>>> eventbridge_bus(ctx, client, stream=written.append)
[]
>>> len(written)
3
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from aws_describer.core.context import DescribeContext
from aws_describer.core.exceptions import DescribeError, SinkError
from aws_describer.core.models import Resource

logger = logging.getLogger(__name__)

Sink = Callable[[Resource], None]


class BufferSink:
    """Sink that appends every resource to an in-memory list."""

    def __init__(self) -> None:
        self.resources: List[Resource] = []

    def __call__(self, resource: Resource) -> None:
        self.resources.append(resource)

    def __len__(self) -> int:
        return len(self.resources)


class ResourceEmitter:
    """
    Deliver resources to a caller sink or accumulate them.

    Parameters
    ----------
    sink : callable, optional
        Streaming sink. When omitted, resources are buffered.
    context : DescribeContext, optional
        Checked for cancellation before every delivery.
    resource_type : str, optional
        Used for error context.
    """

    def __init__(
        self,
        sink: Optional[Sink] = None,
        context: Optional[DescribeContext] = None,
        resource_type: Optional[str] = None,
    ) -> None:
        self.streaming = sink is not None
        self._buffer = BufferSink()
        self._sink: Sink = sink if sink is not None else self._buffer
        self.context = context
        self.resource_type = resource_type
        self.emitted = 0

    def emit(self, resource: Resource) -> None:
        """
        Deliver one resource.

        Raises
        ------
        SinkError
            If the caller sink raised.
        DescribeCancelledError
            If the context was cancelled before delivery.
        """
        if self.context is not None:
            self.context.check(self.resource_type)

        try:
            self._sink(resource)
        except DescribeError:
            raise
        except Exception as e:
            logger.error(f"Sink rejected {resource.arn}: {e}")
            raise SinkError(
                f"Sink failed to accept resource: {e}",
                resource_type=self.resource_type,
                region=resource.region,
                details={"arn": resource.arn},
            ) from e
        self.emitted += 1

    @property
    def results(self) -> List[Resource]:
        """Buffered resources (always empty in streaming mode)."""
        return list(self._buffer.resources)
