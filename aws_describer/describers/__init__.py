"""
Resource Describers
===================

One declarative :class:`~aws_describer.core.base_describer.ResourceDescriber`
per resource type. Every describer is callable with the same signature::

    describer(ctx, aws_client, stream=None) -> List[Resource]

Available Describers
--------------------
EVENTBRIDGE_BUS, EVENTBRIDGE_RULE
    EventBridge event buses and rules.
ECR_REPOSITORY
    ECR private repositories.
SQS_QUEUE, SNS_TOPIC
    SQS queues and SNS topics.
DYNAMODB_TABLE
    DynamoDB tables.
LAMBDA_FUNCTION, EC2_SECURITY_GROUP
    Lambda functions and EC2 security groups.
IAM_ROLE
    IAM roles (global).

Adding New Describers
---------------------
1. Write the per-item enrichment calls and a ``build`` function.
2. Declare a ``ResourceDescriber`` row.
3. Export it here and register it in :mod:`aws_describer.registry`.
"""

from aws_describer.describers.compute import EC2_SECURITY_GROUP, LAMBDA_FUNCTION
from aws_describer.describers.dynamodb import DYNAMODB_TABLE
from aws_describer.describers.ecr import ECR_REPOSITORY
from aws_describer.describers.eventbridge import EVENTBRIDGE_BUS, EVENTBRIDGE_RULE
from aws_describer.describers.iam import IAM_ROLE
from aws_describer.describers.messaging import SNS_TOPIC, SQS_QUEUE

__all__ = [
    "DYNAMODB_TABLE",
    "EC2_SECURITY_GROUP",
    "ECR_REPOSITORY",
    "EVENTBRIDGE_BUS",
    "EVENTBRIDGE_RULE",
    "IAM_ROLE",
    "LAMBDA_FUNCTION",
    "SNS_TOPIC",
    "SQS_QUEUE",
]
