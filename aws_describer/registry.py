"""
Resource Type Registry
======================

Static lookups used by the presentation layer:

- resource type identifier <-> table name (case-insensitive);
- resource type -> describer;
- tag map and display name extraction from a described resource.

Example
-------
>>> extract_table_name("aws::events::eventbus")
'aws_eventbridge_bus'
>>> extract_resource_type("aws_eventbridge_bus")
'aws::events::eventbus'
>>> describer = get_describer("AWS::Events::EventBus")
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Tuple

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.exceptions import ConfigurationError
from aws_describer.core.models import Resource
from aws_describer.describers import (
    DYNAMODB_TABLE,
    EC2_SECURITY_GROUP,
    ECR_REPOSITORY,
    EVENTBRIDGE_BUS,
    EVENTBRIDGE_RULE,
    IAM_ROLE,
    LAMBDA_FUNCTION,
    SNS_TOPIC,
    SQS_QUEUE,
)

RESOURCE_TYPES: Dict[str, ResourceDescriber] = {
    d.resource_type: d
    for d in (
        EVENTBRIDGE_BUS,
        EVENTBRIDGE_RULE,
        ECR_REPOSITORY,
        SQS_QUEUE,
        SNS_TOPIC,
        DYNAMODB_TABLE,
        LAMBDA_FUNCTION,
        IAM_ROLE,
        EC2_SECURITY_GROUP,
    )
}

TABLE_NAMES: Dict[str, str] = {
    "AWS::Events::EventBus": "aws_eventbridge_bus",
    "AWS::Events::Rule": "aws_eventbridge_rule",
    "AWS::ECR::Repository": "aws_ecr_repository",
    "AWS::SQS::Queue": "aws_sqs_queue",
    "AWS::SNS::Topic": "aws_sns_topic",
    "AWS::DynamoDb::Table": "aws_dynamodb_table",
    "AWS::Lambda::Function": "aws_lambda_function",
    "AWS::IAM::Role": "aws_iam_role",
    "AWS::EC2::SecurityGroup": "aws_vpc_security_group",
}

REVERSE_TABLE_NAMES: Dict[str, str] = {v: k for k, v in TABLE_NAMES.items()}

# Where each description keeps its raw tags
TAG_ACCESSORS: Dict[str, Callable[[Any], Any]] = {
    "AWS::Events::EventBus": lambda d: d.tags,
    "AWS::Events::Rule": lambda d: d.tags,
    "AWS::ECR::Repository": lambda d: d.tags,
    "AWS::SQS::Queue": lambda d: d.tags,
    "AWS::SNS::Topic": lambda d: d.tags,
    "AWS::DynamoDb::Table": lambda d: d.tags,
    "AWS::Lambda::Function": lambda d: d.tags,
    "AWS::IAM::Role": lambda d: d.tags,
    "AWS::EC2::SecurityGroup": lambda d: d.security_group.get("Tags", []),
}


def list_resource_types() -> List[str]:
    """Return all supported resource types, sorted."""
    return sorted(RESOURCE_TYPES)


def extract_table_name(resource_type: str) -> str:
    """Map a resource type to its table name, or ``""`` when unknown."""
    resource_type = resource_type.lower()
    for key, table in TABLE_NAMES.items():
        if key.lower() == resource_type:
            return table
    return ""


def extract_resource_type(table_name: str) -> str:
    """Map a table name back to its (lower-cased) resource type."""
    return REVERSE_TABLE_NAMES.get(table_name.lower(), "").lower()


def _canonical_type(resource_type: str) -> str:
    lowered = resource_type.lower()
    for key in RESOURCE_TYPES:
        if key.lower() == lowered:
            return key
    if lowered in REVERSE_TABLE_NAMES:
        return REVERSE_TABLE_NAMES[lowered]
    raise ConfigurationError(
        f"Unknown resource type: {resource_type}",
        details={"supported": list_resource_types()},
    )


def get_describer(resource_type: str) -> ResourceDescriber:
    """
    Look up the describer for a resource type or table name (case-insensitive).

    Raises
    ------
    ConfigurationError
        If the resource type is not supported.
    """
    return RESOURCE_TYPES[_canonical_type(resource_type)]


def normalize_tags(raw: Any) -> Dict[str, str]:
    """
    Flatten the provider's tag shapes into a plain ``{key: value}`` map.

    Accepts ``[{"Key": k, "Value": v}]``, ``[{"key": k, "value": v}]``
    or a mapping.
    """
    if not raw:
        return {}
    if isinstance(raw, Mapping):
        return {str(k): "" if v is None else str(v) for k, v in raw.items()}

    tags: Dict[str, str] = {}
    for tag in raw:
        key = tag.get("Key", tag.get("key"))
        if key is None:
            continue
        value = tag.get("Value", tag.get("value"))
        tags[str(key)] = "" if value is None else str(value)
    return tags


def extract_tags_and_name(
    resource_type: str, resource: Resource
) -> Tuple[Dict[str, str], str]:
    """
    Return the tag map and display name of a described resource.

    The display name is the resource's own name, falling back to its
    ``Name`` tag.

    Raises
    ------
    ConfigurationError
        If the resource type is not supported.
    """
    canonical = _canonical_type(resource_type)
    tags = normalize_tags(TAG_ACCESSORS[canonical](resource.description))
    name = resource.name or tags.get("Name", "")
    return tags, name
