"""
Resource Models
===============

The uniform :class:`Resource` envelope and the per-kind description
payloads it carries.

The envelope fields (``region``, ``arn``, ``name``) are all the engine
looks at. ``description`` is opaque to the engine and only consumed
downstream by whatever maps records to columns.

Example
-------
>>> resource = Resource(
...     region="us-east-1",
...     arn="arn:aws:events:us-east-1:123456789012:event-bus/default",
...     name="default",
...     description=EventBridgeBusDescription(bus={"Name": "default"}, tags=[]),
... )
>>> resource.to_dict()["name"]
'default'
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional


def to_jsonable(value: Any) -> Any:
    """Recursively convert boto3 response values into JSON-friendly types."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


@dataclass
class Resource:
    """
    One discovered cloud entity in uniform form.

    Parameters
    ----------
    region : str
        Region the entity was discovered in; ``""`` for global resources.
    arn : str
        Globally-unique identifier and natural key. Never empty.
    name : str
        Human-readable identifier.
    description : Any
        Kind-specific payload (one of the ``*Description`` dataclasses).
    """

    region: str
    arn: str
    name: str
    description: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "region": self.region,
            "arn": self.arn,
            "name": self.name,
            "description": to_jsonable(self.description),
        }


# =============================================================================
# Description Payloads
# =============================================================================


@dataclass
class EventBridgeBusDescription:
    bus: Dict[str, Any]
    tags: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class EventBridgeRuleDescription:
    rule: Dict[str, Any]
    tags: List[Dict[str, str]] = field(default_factory=list)
    targets: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ECRRepositoryDescription:
    repository: Dict[str, Any]
    policy: Optional[str] = None
    lifecycle_policy: Optional[str] = None
    tags: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class SQSQueueDescription:
    queue_url: str
    attributes: Dict[str, str] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class SNSTopicDescription:
    attributes: Dict[str, str] = field(default_factory=dict)
    tags: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class DynamoDBTableDescription:
    table: Dict[str, Any]
    continuous_backups: Dict[str, Any] = field(default_factory=dict)
    tags: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class LambdaFunctionDescription:
    function: Dict[str, Any]
    policy: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class IAMRoleDescription:
    role: Dict[str, Any]
    attached_policies: List[Dict[str, str]] = field(default_factory=list)
    tags: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class EC2SecurityGroupDescription:
    security_group: Dict[str, Any]
