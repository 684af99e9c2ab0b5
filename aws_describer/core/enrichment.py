"""
Enrichment Composer
===================

Turns one listing item into a fully-described item by running secondary
calls (detail describe, tags, related sub-objects) and merging their
results.

Each :class:`Enrichment` is one call site with its own absence codes:

- success: the result is stored under ``field``;
- absence error: a fresh copy of ``default`` is stored instead and the
  item carries on;
- any other error: :class:`ResourceFetchError`, aborting the item and the
  whole describe call.

Enrichments run sequentially in declared order and each one sees the
fields produced before it, so a detail call can feed a sub-object call
that needs a detail-only field (for example, a table ARN).

Example
-------
>>> def rule_tags(client, item, enriched):
...     arn = enriched["rule"]["Arn"]
...     return client.list_tags_for_resource(ResourceARN=arn).get("Tags", [])
...
>>> enrichments = (
...     Enrichment("rule", describe_rule, absence_codes=NO_ABSENCE_CODES),
...     Enrichment("tags", rule_tags, NOT_FOUND_CODES, default=[]),
... )
>>> enrich_item(client, {"Name": "nightly"}, enrichments)
{'rule': {...}, 'tags': []}
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from aws_describer.core.context import DescribeContext
from aws_describer.core.errors import (
    DEFAULT_ABSENCE_CODES,
    AbsenceCodes,
    error_code,
    is_absence,
)
from aws_describer.core.exceptions import ResourceFetchError

logger = logging.getLogger(__name__)

EnrichmentCall = Callable[[Any, Any, Dict[str, Any]], Any]


@dataclass(frozen=True)
class Enrichment:
    """
    One secondary call site.

    Parameters
    ----------
    field : str
        Key the result is stored under.
    call : callable
        ``call(client, item, enriched) -> value``.
    absence_codes : frozenset of str
        Error codes that degrade to ``default``. Empty means the call is
        mandatory.
    default : Any
        Value substituted on absence (deep-copied per item).
    """

    field: str
    call: EnrichmentCall
    absence_codes: AbsenceCodes = DEFAULT_ABSENCE_CODES
    default: Any = None

    @property
    def operation(self) -> str:
        return getattr(self.call, "__name__", self.field)


def enrich_item(
    client: Any,
    item: Any,
    enrichments: Sequence[Enrichment],
    context: Optional[DescribeContext] = None,
    resource_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run ``enrichments`` for one item and return the merged fields.

    Parameters
    ----------
    client : botocore.client.BaseClient
        Service client the calls use.
    item : Any
        Listing record (a dict, or a bare name or URL for some APIs).
    enrichments : sequence of Enrichment
        Call sites, run in order.
    context : DescribeContext, optional
        Checked for cancellation before every call.
    resource_type : str, optional
        Used for error context.

    Returns
    -------
    dict
        ``{enrichment.field: value}`` for every enrichment.

    Raises
    ------
    ResourceFetchError
        If a call fails with a code outside its absence set.
    """
    enriched: Dict[str, Any] = {}
    region = context.region if context else None

    for enrichment in enrichments:
        if context is not None:
            context.check(resource_type)
        try:
            enriched[enrichment.field] = enrichment.call(client, item, enriched)
        except ClientError as e:
            if is_absence(e, enrichment.absence_codes):
                logger.debug(
                    f"{enrichment.operation} returned {error_code(e)}, "
                    f"using empty {enrichment.field}"
                )
                enriched[enrichment.field] = copy.deepcopy(enrichment.default)
                continue
            raise ResourceFetchError(
                f"{enrichment.operation} failed: {e}",
                error_code=error_code(e),
                operation=enrichment.operation,
                resource_type=resource_type,
                region=region,
            ) from e
        except BotoCoreError as e:
            raise ResourceFetchError(
                f"{enrichment.operation} failed: {e}",
                operation=enrichment.operation,
                resource_type=resource_type,
                region=region,
            ) from e

    return enriched
