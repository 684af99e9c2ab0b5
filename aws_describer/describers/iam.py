"""
IAM Describers
==============

Roles are global: emitted resources carry an empty region, and the
registry describes them once per account rather than once per region.
"""

from __future__ import annotations

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.enrichment import Enrichment
from aws_describer.core.errors import NOT_FOUND_CODES, absence_codes
from aws_describer.core.models import IAMRoleDescription

IAM_ABSENCE_CODES = absence_codes("NoSuchEntity", base=NOT_FOUND_CODES)


def list_attached_role_policies(client, role, enriched):
    response = client.list_attached_role_policies(RoleName=role["RoleName"])
    return response.get("AttachedPolicies", [])


def list_role_tags(client, role, enriched):
    return client.list_role_tags(RoleName=role["RoleName"]).get("Tags", [])


def build_role(role, enriched, ctx):
    description = IAMRoleDescription(
        role=role,
        attached_policies=enriched["attached_policies"],
        tags=enriched["tags"],
    )
    return role["Arn"], role["RoleName"], description


IAM_ROLE = ResourceDescriber(
    resource_type="AWS::IAM::Role",
    service="iam",
    list_operation="list_roles",
    items_key="Roles",
    input_token="Marker",
    output_token="Marker",
    truncation_key="IsTruncated",
    global_resource=True,
    enrichments=(
        Enrichment(
            "attached_policies",
            list_attached_role_policies,
            IAM_ABSENCE_CODES,
            default=[],
        ),
        Enrichment("tags", list_role_tags, IAM_ABSENCE_CODES, default=[]),
    ),
    build=build_role,
)
