"""
AWS Describer: Uniform AWS Resource Enumeration
===============================================

Enumerates AWS resources per account and region and normalises each one
into a :class:`Resource` record (region, ARN, name, description payload)
for a tabular query engine.

Modules
-------
core
    Credential resolution, pagination, error classification, enrichment,
    emission and the generic describer engine.
describers
    Declarative per-resource-type describers.
registry
    Resource type <-> table name lookups and tag/name extraction.
reporters
    Output sinks (JSON lines, terminal table).

Example
-------
>>> from aws_describer import AWSClient, DescribeContext
>>> from aws_describer.describers import EVENTBRIDGE_BUS
>>>
>>> client = AWSClient(region="us-east-1")
>>> ctx = DescribeContext(region="us-east-1")
>>> for bus in EVENTBRIDGE_BUS(ctx, client):
...     print(bus.arn)

Notes
-----
Credentials come from an explicit key triple or boto3's default chain
(environment, ``~/.aws/credentials``, instance or container identity),
optionally followed by a role assumption.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from aws_describer.core.aws_client import AWSClient
from aws_describer.core.config import AccountConfig
from aws_describer.core.context import DescribeContext
from aws_describer.core.exceptions import DescriberError
from aws_describer.core.models import Resource
from aws_describer.core.region_manager import MultiRegionDescribeResult, RegionManager

__all__ = [
    "__version__",
    "__license__",
    "AWSClient",
    "AccountConfig",
    "DescribeContext",
    "DescriberError",
    "Resource",
    "RegionManager",
    "MultiRegionDescribeResult",
]
