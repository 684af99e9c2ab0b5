"""
Region Manager Module
=====================

Fans one describer out over the regions of one account.

This module handles:

- discovery of the account's enabled regions;
- parallel describe calls, one thread per region, all sharing the
  account's resolved credentials;
- serialised delivery to a caller sink, which is never invoked
  concurrently;
- aggregation of per-region resources and errors.

Credential and role failures are fatal for the account and raised before
any region is described. Any other failure is recorded against its
region and the remaining regions carry on.

Example
-------
>>> from aws_describer.core.region_manager import RegionManager
>>> from aws_describer.describers import SQS_QUEUE
>>>
>>> manager = RegionManager(account_config, max_workers=8)
>>> result = manager.describe_regions(SQS_QUEUE)
>>> print(f"{result.total_resources} queues across {len(result.regions_described)} regions")

See Also
--------
AWSClient : Client shared (read-only) by every region.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from aws_describer.core.aws_client import DEFAULT_REGION, AWSClient
from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.config import AccountConfig
from aws_describer.core.context import DescribeContext
from aws_describer.core.emitter import Sink
from aws_describer.core.exceptions import (
    AWSClientError,
    ConfigurationError,
    DescribeError,
    RegionError,
)
from aws_describer.core.logging import region_scope
from aws_describer.core.models import Resource

logger = logging.getLogger(__name__)

GLOBAL_REGION = "global"


@dataclass
class MultiRegionDescribeResult:
    """
    Aggregated results of one describer across several regions.

    Parameters
    ----------
    resource_type : str
        Resource type that was described.
    regions_described : list of str
        Regions attempted (``["global"]`` for global resource types).
    resources_by_region : dict
        Region -> resources. Empty lists in streaming mode.
    resource_counts : dict
        Region -> number of resources produced (batch or streamed).
    describe_time : datetime, optional
        When the describe started.
    errors : dict, optional
        Region -> error messages.
    """

    resource_type: str
    regions_described: List[str]
    resources_by_region: Dict[str, List[Resource]]
    resource_counts: Dict[str, int]
    describe_time: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def successful_regions(self) -> List[str]:
        return [r for r in self.regions_described if r not in self.errors]

    @property
    def failed_regions(self) -> List[str]:
        return list(self.errors.keys())

    @property
    def total_resources(self) -> int:
        return sum(self.resource_counts.values())

    def get_all_resources(self) -> List[Resource]:
        """All batch-mode resources, ordered by region then discovery."""
        return [
            resource
            for region in self.regions_described
            for resource in self.resources_by_region.get(region, [])
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "resource_type": self.resource_type,
            "regions_described": self.regions_described,
            "total_resources": self.total_resources,
            "resource_counts": self.resource_counts,
            "resources": [r.to_dict() for r in self.get_all_resources()],
            "describe_time": self.describe_time.isoformat(),
            "errors": self.errors,
        }

    def __repr__(self) -> str:
        return (
            f"MultiRegionDescribeResult("
            f"resource_type='{self.resource_type}', "
            f"regions={len(self.regions_described)}, "
            f"total={self.total_resources})"
        )


def serialize_sink(sink: Sink) -> Sink:
    """Wrap ``sink`` so concurrent producers deliver one at a time."""
    lock = threading.Lock()

    def deliver(resource: Resource) -> None:
        with lock:
            sink(resource)

    return deliver


class RegionManager:
    """
    Describes resources across the regions of one account.

    Parameters
    ----------
    account_config : AccountConfig, optional
        Account to describe. Its ``regions`` are the default targets.
    aws_client : AWSClient, optional
        Pre-built client; takes precedence over ``account_config``
        credentials.
    max_workers : int, default=10
        Maximum parallel region describes.
    max_retries : int, default=3
        Maximum attempts per API call.
    timeout : int, default=30
        Per-request timeout in seconds.
    max_pages : int, optional
        Page ceiling passed to every describe call.
    """

    def __init__(
        self,
        account_config: Optional[AccountConfig] = None,
        aws_client: Optional[AWSClient] = None,
        max_workers: int = 10,
        max_retries: int = 3,
        timeout: int = 30,
        max_pages: Optional[int] = None,
    ) -> None:
        if account_config is None and aws_client is None:
            raise ConfigurationError(
                "RegionManager needs an account config or an AWS client"
            )
        self.account_config = account_config
        self.max_workers = max_workers
        self.max_retries = max_retries
        self.timeout = timeout
        self.max_pages = max_pages

        if aws_client is None:
            aws_client = AWSClient.from_account_config(
                account_config,
                region=DEFAULT_REGION,
                max_retries=max_retries,
                timeout=timeout,
            )
        self._base_client = aws_client

        logger.debug(f"Initialized RegionManager with max_workers={max_workers}")

    @property
    def account_id(self) -> str:
        if self.account_config is not None:
            return self.account_config.account_id
        return ""

    def get_all_regions(self) -> List[str]:
        """
        Fetch the regions enabled for the account.

        Raises
        ------
        RegionError
            If the region list cannot be fetched.
        """
        try:
            ec2 = self._base_client.get_client("ec2")
            response = ec2.describe_regions(AllRegions=False)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to fetch AWS regions: {e}")
            raise RegionError(f"Failed to fetch AWS regions: {e}") from e

        regions = sorted(r["RegionName"] for r in response["Regions"])
        logger.info(f"Discovered {len(regions)} enabled AWS regions")
        return regions

    def target_regions(self) -> List[str]:
        """Configured regions, or every enabled region when none are configured."""
        if self.account_config is not None and self.account_config.regions:
            return list(self.account_config.regions)
        return self.get_all_regions()

    def get_client_for_region(self, region: str) -> AWSClient:
        return self._base_client.with_region(region)

    def _describe_region(
        self,
        region: str,
        describer: ResourceDescriber,
        context: DescribeContext,
        stream: Optional[Sink],
        progress_callback: Optional[Callable[[str, str], None]],
    ) -> Tuple[str, List[Resource], int, Optional[str]]:
        produced = 0

        def counting_sink(resource: Resource) -> None:
            nonlocal produced
            stream(resource)
            produced += 1

        scoped_region = "" if region == GLOBAL_REGION else region

        with region_scope(scoped_region, describer.resource_type):
            try:
                if progress_callback:
                    progress_callback(region, "describing")

                client = self.get_client_for_region(scoped_region or DEFAULT_REGION)
                resources = describer(
                    context.for_region(scoped_region),
                    client,
                    counting_sink if stream is not None else None,
                    self.max_pages,
                )

                if progress_callback:
                    progress_callback(region, "complete")

                logger.debug(f"Completed {describer.resource_type} in {region}")
                return (region, resources, produced or len(resources), None)

            except (DescribeError, AWSClientError, BotoCoreError) as e:
                logger.error(
                    f"Error describing {describer.resource_type} in {region}: {e}"
                )
                if progress_callback:
                    progress_callback(region, "error")
                return (region, [], produced, str(e))

    def describe_regions(
        self,
        describer: ResourceDescriber,
        regions: Optional[List[str]] = None,
        stream: Optional[Sink] = None,
        context: Optional[DescribeContext] = None,
        progress_callback: Optional[Callable[[str, str], None]] = None,
    ) -> MultiRegionDescribeResult:
        """
        Describe one resource type in several regions in parallel.

        Parameters
        ----------
        describer : ResourceDescriber
            Resource type to describe.
        regions : list of str, optional
            Target regions; defaults to :meth:`target_regions`. Ignored for
            global resource types, which are described once.
        stream : callable, optional
            Sink for every resource; serialised across regions.
        context : DescribeContext, optional
            Cancellation and deadline shared by all regions.
        progress_callback : callable, optional
            Called with ``(region, status)``; status is ``describing``,
            ``complete`` or ``error``.

        Raises
        ------
        CredentialsError, RoleAssumptionError
            If the account's credentials cannot be resolved.
        """
        # Resolve credentials once, up front; failures are fatal for the account
        _ = self._base_client.session

        if describer.global_resource:
            regions = [GLOBAL_REGION]
        elif regions is None:
            regions = self.target_regions()

        context = context or DescribeContext(region="", account_id=self.account_id)
        sink = serialize_sink(stream) if stream is not None else None

        logger.info(
            f"Describing {describer.resource_type} across {len(regions)} regions"
        )

        resources_by_region: Dict[str, List[Resource]] = {}
        resource_counts: Dict[str, int] = {}
        errors: Dict[str, List[str]] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(
                    self._describe_region,
                    region,
                    describer,
                    context,
                    sink,
                    progress_callback,
                ): region
                for region in regions
            }

            for future in as_completed(futures):
                region, resources, count, error = future.result()
                resources_by_region[region] = resources
                resource_counts[region] = count
                if error:
                    errors[region] = [error]
                    logger.warning(f"Region {region} failed: {error}")

        result = MultiRegionDescribeResult(
            resource_type=describer.resource_type,
            regions_described=list(regions),
            resources_by_region=resources_by_region,
            resource_counts=resource_counts,
            errors=errors,
        )
        logger.info(
            f"Described {result.total_resources} {describer.resource_type} "
            f"resources across {len(result.successful_regions)} regions"
        )
        return result

    def describe_single_region(
        self,
        describer: ResourceDescriber,
        region: str,
        stream: Optional[Sink] = None,
        context: Optional[DescribeContext] = None,
    ) -> List[Resource]:
        """Describe one region directly; errors propagate."""
        client = self.get_client_for_region(region)
        ctx = (
            context.for_region(region)
            if context is not None
            else DescribeContext(region=region, account_id=self.account_id)
        )
        with region_scope(region, describer.resource_type):
            return describer(ctx, client, stream, self.max_pages)

    def __repr__(self) -> str:
        return (
            f"RegionManager(account_id={self.account_id!r}, "
            f"max_workers={self.max_workers})"
        )
