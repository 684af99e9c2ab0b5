"""
SQS and SNS Describers
======================

Queues are listed as bare URLs, topics as bare ARNs; everything else
comes from per-item attribute and tag calls.
"""

from __future__ import annotations

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.enrichment import Enrichment
from aws_describer.core.errors import NOT_FOUND_CODES, absence_codes
from aws_describer.core.models import SNSTopicDescription, SQSQueueDescription

SQS_ABSENCE_CODES = absence_codes(
    "AWS.SimpleQueueService.NonExistentQueue",
    "QueueDoesNotExist",
    base=NOT_FOUND_CODES,
)

SNS_ABSENCE_CODES = absence_codes("NotFound", base=NOT_FOUND_CODES)


# =============================================================================
# SQS Queues
# =============================================================================


def get_queue_attributes(client, queue_url, enriched):
    response = client.get_queue_attributes(QueueUrl=queue_url, AttributeNames=["All"])
    return response.get("Attributes", {})


def list_queue_tags(client, queue_url, enriched):
    return client.list_queue_tags(QueueUrl=queue_url).get("Tags", {})


def build_queue(queue_url, enriched, ctx):
    attributes = enriched["attributes"]
    arn = attributes.get("QueueArn")
    if not arn:
        # Deleted between list_queues and get_queue_attributes
        return None
    description = SQSQueueDescription(
        queue_url=queue_url,
        attributes=attributes,
        tags=enriched["tags"],
    )
    return arn, queue_url.rstrip("/").rsplit("/", 1)[-1], description


SQS_QUEUE = ResourceDescriber(
    resource_type="AWS::SQS::Queue",
    service="sqs",
    list_operation="list_queues",
    items_key="QueueUrls",
    list_kwargs={"MaxResults": 1000},
    absence_codes=SQS_ABSENCE_CODES,
    enrichments=(
        Enrichment("attributes", get_queue_attributes, SQS_ABSENCE_CODES, default={}),
        Enrichment("tags", list_queue_tags, SQS_ABSENCE_CODES, default={}),
    ),
    build=build_queue,
)


# =============================================================================
# SNS Topics
# =============================================================================


def get_topic_attributes(client, topic, enriched):
    response = client.get_topic_attributes(TopicArn=topic["TopicArn"])
    return response.get("Attributes", {})


def list_topic_tags(client, topic, enriched):
    return client.list_tags_for_resource(ResourceArn=topic["TopicArn"]).get("Tags", [])


def build_topic(topic, enriched, ctx):
    arn = topic["TopicArn"]
    description = SNSTopicDescription(
        attributes=enriched["attributes"],
        tags=enriched["tags"],
    )
    return arn, arn.rsplit(":", 1)[-1], description


SNS_TOPIC = ResourceDescriber(
    resource_type="AWS::SNS::Topic",
    service="sns",
    list_operation="list_topics",
    items_key="Topics",
    absence_codes=SNS_ABSENCE_CODES,
    enrichments=(
        Enrichment("attributes", get_topic_attributes, SNS_ABSENCE_CODES, default={}),
        Enrichment("tags", list_topic_tags, SNS_ABSENCE_CODES, default=[]),
    ),
    build=build_topic,
)
