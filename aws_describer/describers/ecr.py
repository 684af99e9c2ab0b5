"""
ECR Describers
==============

Private repositories with their repository policy, lifecycle policy and
tags. Repositories without a policy are the common case, so ECR's
policy-specific "not found" codes count as absence.
"""

from __future__ import annotations

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.enrichment import Enrichment
from aws_describer.core.errors import NOT_FOUND_CODES, absence_codes
from aws_describer.core.models import ECRRepositoryDescription

ECR_ABSENCE_CODES = absence_codes(
    "RepositoryNotFoundException",
    "RepositoryPolicyNotFoundException",
    "LifecyclePolicyNotFoundException",
    base=NOT_FOUND_CODES,
)


def get_repository_policy(client, repository, enriched):
    response = client.get_repository_policy(
        repositoryName=repository["repositoryName"]
    )
    return response.get("policyText")


def get_lifecycle_policy(client, repository, enriched):
    response = client.get_lifecycle_policy(
        repositoryName=repository["repositoryName"]
    )
    return response.get("lifecyclePolicyText")


def list_repository_tags(client, repository, enriched):
    response = client.list_tags_for_resource(resourceArn=repository["repositoryArn"])
    return response.get("tags", [])


def build_repository(repository, enriched, ctx):
    description = ECRRepositoryDescription(
        repository=repository,
        policy=enriched["policy"],
        lifecycle_policy=enriched["lifecycle_policy"],
        tags=enriched["tags"],
    )
    return repository["repositoryArn"], repository["repositoryName"], description


ECR_REPOSITORY = ResourceDescriber(
    resource_type="AWS::ECR::Repository",
    service="ecr",
    list_operation="describe_repositories",
    items_key="repositories",
    input_token="nextToken",
    output_token="nextToken",
    list_kwargs={"maxResults": 1000},
    absence_codes=ECR_ABSENCE_CODES,
    enrichments=(
        Enrichment("policy", get_repository_policy, ECR_ABSENCE_CODES),
        Enrichment("lifecycle_policy", get_lifecycle_policy, ECR_ABSENCE_CODES),
        Enrichment("tags", list_repository_tags, ECR_ABSENCE_CODES, default=[]),
    ),
    build=build_repository,
)
