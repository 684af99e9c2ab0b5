"""
Compute Describers
==================

Lambda functions and EC2 security groups.

Lambda paginates with ``Marker``/``NextMarker``. ``describe_security_groups``
returns tags inline and needs no enrichment; older API responses lack
``SecurityGroupArn``, in which case the ARN is built from the region and
owner account.
"""

from __future__ import annotations

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.enrichment import Enrichment
from aws_describer.core.errors import NOT_FOUND_CODES
from aws_describer.core.models import (
    EC2SecurityGroupDescription,
    LambdaFunctionDescription,
)

# =============================================================================
# Lambda Functions
# =============================================================================


def get_function_policy(client, function, enriched):
    return client.get_policy(FunctionName=function["FunctionName"]).get("Policy")


def list_function_tags(client, function, enriched):
    return client.list_tags(Resource=function["FunctionArn"]).get("Tags", {})


def build_function(function, enriched, ctx):
    description = LambdaFunctionDescription(
        function=function,
        policy=enriched["policy"],
        tags=enriched["tags"],
    )
    return function["FunctionArn"], function["FunctionName"], description


LAMBDA_FUNCTION = ResourceDescriber(
    resource_type="AWS::Lambda::Function",
    service="lambda",
    list_operation="list_functions",
    items_key="Functions",
    input_token="Marker",
    output_token="NextMarker",
    enrichments=(
        Enrichment("policy", get_function_policy, NOT_FOUND_CODES),
        Enrichment("tags", list_function_tags, NOT_FOUND_CODES, default={}),
    ),
    build=build_function,
)


# =============================================================================
# EC2 Security Groups
# =============================================================================


def build_security_group(group, enriched, ctx):
    arn = group.get("SecurityGroupArn") or (
        f"arn:aws:ec2:{ctx.region}:{group.get('OwnerId', ctx.account_id)}"
        f":security-group/{group['GroupId']}"
    )
    description = EC2SecurityGroupDescription(security_group=group)
    return arn, group.get("GroupName", group["GroupId"]), description


EC2_SECURITY_GROUP = ResourceDescriber(
    resource_type="AWS::EC2::SecurityGroup",
    service="ec2",
    list_operation="describe_security_groups",
    items_key="SecurityGroups",
    build=build_security_group,
)
