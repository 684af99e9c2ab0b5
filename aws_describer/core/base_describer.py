"""
Base Describer Module
=====================

The one generic "paginate, enrich, classify errors, emit" engine.

Each resource type is a row in a declarative table: a
:class:`ResourceDescriber` naming the list operation, how its cursor is
carried, which enrichments run per item, which error codes mean "this
resource type does not exist here", and how to build the final record.
:func:`describe` runs any row with the same control flow.

Example
-------
>>> from aws_describer.core.base_describer import ResourceDescriber
>>>
>>> event_bus = ResourceDescriber(
...     resource_type="AWS::Events::EventBus",
...     service="events",
...     list_operation="list_event_buses",
...     items_key="EventBuses",
...     list_kwargs={"Limit": 100},
...     enrichments=(Enrichment("tags", bus_tags, default=[]),),
...     build=build_bus,
... )
>>> ctx = DescribeContext(region="us-east-1", account_id="123456789012")
>>> resources = event_bus(ctx, AWSClient(region="us-east-1"))

Notes
-----
Enrichment is sequential per item, so emission order is discovery order.

See Also
--------
aws_describer.describers : The concrete table rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from aws_describer.core.context import DescribeContext
from aws_describer.core.emitter import ResourceEmitter, Sink
from aws_describer.core.enrichment import Enrichment, enrich_item
from aws_describer.core.errors import (
    DEFAULT_ABSENCE_CODES,
    AbsenceCodes,
    error_code,
    is_absence,
)
from aws_describer.core.exceptions import ResourceFetchError
from aws_describer.core.models import Resource
from aws_describer.core.pagination import paginate_retrieve_all

logger = logging.getLogger(__name__)

BuildFunction = Callable[
    [Any, Dict[str, Any], DescribeContext], Optional[Tuple[str, str, Any]]
]


@dataclass(frozen=True)
class ResourceDescriber:
    """
    Declarative description of how to enumerate one resource type.

    Parameters
    ----------
    resource_type : str
        External resource type identifier (``AWS::Events::EventBus``).
    service : str
        boto3 service name.
    list_operation : str
        boto3 method name of the primary list call.
    items_key : str
        Response key holding the page's items.
    build : callable
        ``build(item, enriched, ctx) -> (arn, name, description)``, or
        ``None`` when the item disappeared between listing and enrichment.
    input_token : str, optional
        Request parameter carrying the cursor.
    output_token : str, optional
        Response key holding the next cursor.
    list_kwargs : mapping
        Fixed parameters of the list call.
    absence_codes : frozenset of str
        Primary-tier absence codes: the first list call failing with one
        of these yields zero items and no error.
    enrichments : tuple of Enrichment
        Per-item secondary calls.
    global_resource : bool
        When true, emitted resources carry an empty region.
    truncation_key : str, optional
        Response flag that must be true for the cursor to be followed
        (IAM-style ``IsTruncated``).
    """

    resource_type: str
    service: str
    list_operation: str
    items_key: str
    build: BuildFunction
    input_token: str = "NextToken"
    output_token: str = "NextToken"
    list_kwargs: Mapping[str, Any] = field(default_factory=dict)
    absence_codes: AbsenceCodes = DEFAULT_ABSENCE_CODES
    enrichments: Tuple[Enrichment, ...] = ()
    global_resource: bool = False
    truncation_key: Optional[str] = None

    def next_cursor(self, page: Dict[str, Any]) -> Any:
        """Extract the continuation cursor from a response page."""
        if self.truncation_key is not None and not page.get(self.truncation_key):
            return None
        return page.get(self.output_token)

    def __call__(
        self,
        ctx: DescribeContext,
        aws_client: Any,
        stream: Optional[Sink] = None,
        max_pages: Optional[int] = None,
    ) -> List[Resource]:
        return describe(ctx, aws_client, self, stream=stream, max_pages=max_pages)


def describe(
    ctx: DescribeContext,
    aws_client: Any,
    describer: ResourceDescriber,
    stream: Optional[Sink] = None,
    max_pages: Optional[int] = None,
) -> List[Resource]:
    """
    Enumerate every resource of one type in one account/region scope.

    Parameters
    ----------
    ctx : DescribeContext
        Region label, account and cancellation signal.
    aws_client : AWSClient
        Resolved client wrapper (anything with ``get_client(service)``).
    describer : ResourceDescriber
        The resource type's table row.
    stream : callable, optional
        Sink receiving each resource as soon as it is produced. When
        given, the returned list is empty.
    max_pages : int, optional
        Page ceiling; unbounded by default.

    Returns
    -------
    list of Resource
        All resources in discovery order (batch mode) or ``[]``
        (streaming mode, or the type does not exist in this scope).

    Raises
    ------
    ResourceFetchError
        If a list or enrichment call fails with a non-absence error.
    SinkError
        If the sink raised.
    DescribeCancelledError
        If the context was cancelled or its deadline passed.
    PaginationLimitError
        If ``max_pages`` was exceeded.
    """
    resource_type = describer.resource_type
    region = "" if describer.global_resource else ctx.region

    ctx.check(resource_type)
    client = aws_client.get_client(describer.service)
    list_call = getattr(client, describer.list_operation)
    emitter = ResourceEmitter(stream, ctx, resource_type)
    seen: Set[str] = set()

    def step(cursor: Any) -> Any:
        kwargs = dict(describer.list_kwargs)
        if cursor:
            kwargs[describer.input_token] = cursor

        try:
            page = list_call(**kwargs)
        except ClientError as e:
            if cursor is None and is_absence(e, describer.absence_codes):
                logger.info(
                    f"{resource_type} not available in {ctx.region or 'global'} "
                    f"({error_code(e)}), treating as empty"
                )
                return None
            raise ResourceFetchError(
                f"{describer.list_operation} failed: {e}",
                error_code=error_code(e),
                operation=describer.list_operation,
                resource_type=resource_type,
                region=ctx.region,
            ) from e
        except BotoCoreError as e:
            raise ResourceFetchError(
                f"{describer.list_operation} failed: {e}",
                operation=describer.list_operation,
                resource_type=resource_type,
                region=ctx.region,
            ) from e

        for item in page.get(describer.items_key) or []:
            enriched = enrich_item(
                client, item, describer.enrichments, ctx, resource_type
            )
            built = describer.build(item, enriched, ctx)
            if built is None:
                logger.debug(f"{resource_type} item vanished before enrichment, skipping")
                continue
            arn, name, description = built
            if not arn:
                raise ResourceFetchError(
                    f"{resource_type} item has no ARN",
                    operation=describer.list_operation,
                    resource_type=resource_type,
                    region=ctx.region,
                    details={"name": name},
                )
            if arn in seen:
                logger.warning(f"Skipping duplicate {resource_type} {arn}")
                continue
            seen.add(arn)

            emitter.emit(
                Resource(
                    region=region,
                    arn=arn,
                    name=name or "",
                    description=description,
                )
            )

        return describer.next_cursor(page)

    logger.debug(f"Describing {resource_type} in {ctx.region or 'global'}")
    pages = paginate_retrieve_all(step, ctx, max_pages, resource_type)
    logger.info(
        f"Described {emitter.emitted} {resource_type} resources "
        f"in {ctx.region or 'global'} ({pages} pages)"
    )

    return emitter.results
