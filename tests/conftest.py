"""
Pytest configuration and shared fixtures for testing.
"""

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from aws_describer.core.aws_client import AWSClient
from aws_describer.core.context import DescribeContext


def make_client_error(code, operation="Operation", message="error"):
    """Build a botocore ClientError carrying ``code``."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeServiceClient:
    """
    Scripted stand-in for a boto3 service client.

    Each operation replays its queued responses in order (the last one
    repeats). A queued exception is raised; a queued callable is called
    with the request kwargs.
    """

    def __init__(self, **scripts):
        self.scripts = {name: list(responses) for name, responses in scripts.items()}
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("_") or name not in self.scripts:
            raise AttributeError(name)

        def call(**kwargs):
            self.calls.append((name, kwargs))
            queue = self.scripts[name]
            response = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(response, Exception):
                raise response
            if callable(response):
                return response(**kwargs)
            return response

        return call

    def calls_to(self, name):
        return [kwargs for op, kwargs in self.calls if op == name]


class FakeAWSClient:
    """AWSClient stand-in handing out one scripted service client."""

    def __init__(self, service_client, region="us-east-1"):
        self.service_client = service_client
        self.region = region
        self.requested = []

    def get_client(self, service_name):
        self.requested.append(service_name)
        return self.service_client


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    import os

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mock_aws_environment(aws_credentials):
    """Create a mocked AWS environment."""
    with mock_aws():
        yield


@pytest.fixture
def aws_client(mock_aws_environment):
    """Create an AWSClient instance for testing."""
    return AWSClient(region="us-east-1")


@pytest.fixture
def ctx():
    """Describe context for us-east-1."""
    return DescribeContext(region="us-east-1", account_id="123456789012")


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors."""
    return make_client_error


@pytest.fixture
def fake_aws():
    """Factory returning ``(aws_client, service_client)`` from scripts."""

    def factory(**scripts):
        service = FakeServiceClient(**scripts)
        return FakeAWSClient(service), service

    return factory


@pytest.fixture
def events_client(mock_aws_environment):
    """Create a boto3 EventBridge client for setting up test resources."""
    return boto3.client("events", region_name="us-east-1")


@pytest.fixture
def sqs_client(mock_aws_environment):
    """Create a boto3 SQS client for setting up test resources."""
    return boto3.client("sqs", region_name="us-east-1")


@pytest.fixture
def sns_client(mock_aws_environment):
    """Create a boto3 SNS client for setting up test resources."""
    return boto3.client("sns", region_name="us-east-1")


@pytest.fixture
def dynamodb_client(mock_aws_environment):
    """Create a boto3 DynamoDB client for setting up test resources."""
    return boto3.client("dynamodb", region_name="us-east-1")


@pytest.fixture
def ecr_client(mock_aws_environment):
    """Create a boto3 ECR client for setting up test resources."""
    return boto3.client("ecr", region_name="us-east-1")


@pytest.fixture
def iam_client(mock_aws_environment):
    """Create a boto3 IAM client for setting up test resources."""
    return boto3.client("iam", region_name="us-east-1")


@pytest.fixture
def ec2_client(mock_aws_environment):
    """Create a boto3 EC2 client for setting up test resources."""
    return boto3.client("ec2", region_name="us-east-1")


@pytest.fixture
def vpc(ec2_client):
    """Create a VPC for testing."""
    response = ec2_client.create_vpc(CidrBlock="10.0.0.0/16")
    return response["Vpc"]["VpcId"]


@pytest.fixture
def security_group(ec2_client, vpc):
    """Create a tagged security group for testing."""
    response = ec2_client.create_security_group(
        GroupName="test-sg",
        Description="Test security group",
        VpcId=vpc,
        TagSpecifications=[
            {
                "ResourceType": "security-group",
                "Tags": [{"Key": "Team", "Value": "platform"}],
            }
        ],
    )
    return response["GroupId"]
