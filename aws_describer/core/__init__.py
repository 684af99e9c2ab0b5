"""
Core Components
===============

The enumeration pipeline shared by every describer:

- :class:`AWSClient` - credential and role resolution, boto3 clients
- :class:`AccountConfig` - validated account configuration
- :func:`paginate_retrieve_all` - cursor-following pagination loop
- :mod:`~aws_describer.core.errors` - absence-code classification
- :func:`enrich_item` - per-item secondary calls
- :class:`ResourceEmitter` - streaming/batch delivery
- :class:`ResourceDescriber` / :func:`describe` - the generic engine
- :class:`RegionManager` - parallel fan-out over an account's regions

Example
-------
>>> from aws_describer.core import AccountConfig, AWSClient, DescribeContext
>>> from aws_describer.describers import EVENTBRIDGE_RULE
>>>
>>> config = AccountConfig.from_mapping({"accountId": "123456789012"})
>>> client = AWSClient.from_account_config(config, region="us-east-1")
>>> ctx = DescribeContext(region="us-east-1", account_id=config.account_id)
>>> rules = EVENTBRIDGE_RULE(ctx, client)
"""

from aws_describer.core.aws_client import (
    DEFAULT_REGION,
    AWSClient,
    build_assume_role_request,
)
from aws_describer.core.base_describer import ResourceDescriber, describe
from aws_describer.core.config import (
    AccountConfig,
    policy_arn_from_name,
    role_arn_from_name,
)
from aws_describer.core.context import DescribeContext
from aws_describer.core.emitter import BufferSink, ResourceEmitter, Sink
from aws_describer.core.enrichment import Enrichment, enrich_item
from aws_describer.core.errors import (
    DEFAULT_ABSENCE_CODES,
    NO_ABSENCE_CODES,
    NOT_FOUND_CODES,
    absence_codes,
    error_code,
    is_absence,
    is_error,
)
from aws_describer.core.exceptions import (
    AWSClientError,
    ConfigurationError,
    CredentialsError,
    DescribeCancelledError,
    DescribeError,
    DescriberError,
    DescribeTimeoutError,
    PaginationLimitError,
    RegionError,
    ResourceFetchError,
    RoleAssumptionError,
    ServiceError,
    SinkError,
)
from aws_describer.core.models import Resource
from aws_describer.core.pagination import paginate_retrieve_all
from aws_describer.core.region_manager import MultiRegionDescribeResult, RegionManager

__all__ = [
    # Credentials and configuration
    "AWSClient",
    "AccountConfig",
    "DEFAULT_REGION",
    "build_assume_role_request",
    "policy_arn_from_name",
    "role_arn_from_name",
    # Pipeline
    "DescribeContext",
    "Resource",
    "ResourceDescriber",
    "describe",
    "paginate_retrieve_all",
    "Enrichment",
    "enrich_item",
    "BufferSink",
    "ResourceEmitter",
    "Sink",
    # Classification
    "DEFAULT_ABSENCE_CODES",
    "NO_ABSENCE_CODES",
    "NOT_FOUND_CODES",
    "absence_codes",
    "error_code",
    "is_absence",
    "is_error",
    # Region management
    "RegionManager",
    "MultiRegionDescribeResult",
    # Exceptions
    "DescriberError",
    "ConfigurationError",
    "AWSClientError",
    "CredentialsError",
    "RoleAssumptionError",
    "RegionError",
    "ServiceError",
    "DescribeError",
    "ResourceFetchError",
    "SinkError",
    "PaginationLimitError",
    "DescribeCancelledError",
    "DescribeTimeoutError",
]
