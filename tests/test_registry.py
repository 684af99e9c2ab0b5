"""
Tests for the resource type registry.
"""

import pytest

from aws_describer.core.exceptions import ConfigurationError
from aws_describer.core.models import (
    EC2SecurityGroupDescription,
    EventBridgeBusDescription,
    SQSQueueDescription,
    Resource,
)
from aws_describer.describers import EVENTBRIDGE_RULE, IAM_ROLE, SQS_QUEUE
from aws_describer.registry import (
    RESOURCE_TYPES,
    TABLE_NAMES,
    extract_resource_type,
    extract_table_name,
    extract_tags_and_name,
    get_describer,
    list_resource_types,
    normalize_tags,
)


class TestLookups:
    """Tests for type and table lookups."""

    def test_every_type_has_a_table(self):
        assert set(RESOURCE_TYPES) == set(TABLE_NAMES)

    def test_list_resource_types_sorted(self):
        types = list_resource_types()
        assert types == sorted(types)
        assert "AWS::Events::EventBus" in types

    def test_extract_table_name(self):
        assert extract_table_name("AWS::Events::EventBus") == "aws_eventbridge_bus"

    def test_extract_table_name_is_case_insensitive(self):
        assert extract_table_name("aws::events::rule") == "aws_eventbridge_rule"

    def test_unknown_type_has_no_table(self):
        assert extract_table_name("AWS::Nope::Thing") == ""

    def test_extract_resource_type(self):
        assert extract_resource_type("aws_eventbridge_rule") == "aws::events::rule"
        assert extract_resource_type("AWS_SQS_QUEUE") == "aws::sqs::queue"
        assert extract_resource_type("aws_unknown") == ""

    def test_get_describer(self):
        assert get_describer("aws::events::rule") is EVENTBRIDGE_RULE
        assert get_describer("AWS::IAM::Role") is IAM_ROLE

    def test_get_describer_by_table_name(self):
        assert get_describer("aws_sqs_queue") is SQS_QUEUE
        assert get_describer("AWS_EVENTBRIDGE_RULE") is EVENTBRIDGE_RULE

    def test_get_describer_unknown(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_describer("AWS::Nope::Thing")
        assert "AWS::Events::Rule" in exc_info.value.details["supported"]


class TestTags:
    """Tests for tag and name extraction."""

    @pytest.mark.parametrize(
        "raw",
        [
            [{"Key": "env", "Value": "prod"}],
            [{"key": "env", "value": "prod"}],
            {"env": "prod"},
        ],
    )
    def test_normalize_tags(self, raw):
        assert normalize_tags(raw) == {"env": "prod"}

    def test_normalize_empty(self):
        assert normalize_tags(None) == {}
        assert normalize_tags([]) == {}

    def test_tags_and_name(self):
        resource = Resource(
            region="us-east-1",
            arn="arn:aws:events:us-east-1:123456789012:event-bus/orders",
            name="orders",
            description=EventBridgeBusDescription(
                bus={"Name": "orders"}, tags=[{"Key": "team", "Value": "checkout"}]
            ),
        )

        tags, name = extract_tags_and_name("AWS::Events::EventBus", resource)

        assert tags == {"team": "checkout"}
        assert name == "orders"

    def test_name_falls_back_to_name_tag(self):
        resource = Resource(
            region="us-east-1",
            arn="arn:aws:ec2:us-east-1:123456789012:security-group/sg-1",
            name="",
            description=EC2SecurityGroupDescription(
                security_group={
                    "GroupId": "sg-1",
                    "Tags": [{"Key": "Name", "Value": "web-tier"}],
                }
            ),
        )

        tags, name = extract_tags_and_name("aws::ec2::securitygroup", resource)

        assert name == "web-tier"
        assert tags == {"Name": "web-tier"}

    def test_map_tags(self):
        resource = Resource(
            region="us-east-1",
            arn="arn:aws:sqs:us-east-1:123456789012:jobs",
            name="jobs",
            description=SQSQueueDescription(queue_url="u", tags={"env": "prod"}),
        )
        assert extract_tags_and_name("AWS::SQS::Queue", resource) == (
            {"env": "prod"},
            "jobs",
        )
