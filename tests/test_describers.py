"""
Tests for the concrete resource describers.
"""

import json

import pytest

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
from aws_describer.core.exceptions import ResourceFetchError
from aws_describer.core.models import (
    DynamoDBTableDescription,
    EventBridgeBusDescription,
    EventBridgeRuleDescription,
    LambdaFunctionDescription,
    SQSQueueDescription,
)


class TestEventBridge:
    """Tests for the EventBridge describers."""

    def test_event_buses(self, aws_client, ctx, events_client):
        events_client.create_event_bus(
            Name="orders", Tags=[{"Key": "team", "Value": "checkout"}]
        )

        resources = EVENTBRIDGE_BUS(ctx, aws_client)
        by_name = {r.name: r for r in resources}

        assert {"default", "orders"} <= set(by_name)
        orders = by_name["orders"]
        assert orders.region == "us-east-1"
        assert orders.arn.endswith(":event-bus/orders")
        assert isinstance(orders.description, EventBridgeBusDescription)
        assert {"Key": "team", "Value": "checkout"} in orders.description.tags

    def test_rules_with_targets(self, aws_client, ctx, events_client):
        events_client.put_rule(
            Name="nightly",
            ScheduleExpression="rate(1 day)",
            Tags=[{"Key": "owner", "Value": "ops"}],
        )
        events_client.put_targets(
            Rule="nightly",
            Targets=[{"Id": "t1", "Arn": "arn:aws:sqs:us-east-1:123456789012:jobs"}],
        )

        resources = EVENTBRIDGE_RULE(ctx, aws_client)

        assert len(resources) == 1
        rule = resources[0]
        assert rule.name == "nightly"
        assert rule.arn.endswith(":rule/nightly")
        assert isinstance(rule.description, EventBridgeRuleDescription)
        assert rule.description.rule["ScheduleExpression"] == "rate(1 day)"
        assert "ResponseMetadata" not in rule.description.rule
        assert [t["Id"] for t in rule.description.targets] == ["t1"]
        assert {"Key": "owner", "Value": "ops"} in rule.description.tags

    def test_rule_tags_keyed_by_detail_arn(self, ctx, fake_aws, client_error):
        detail = {"Name": "r1", "Arn": "arn:aws:events:us-east-1:1:rule/r1"}
        client, service = fake_aws(
            list_rules=[{"Rules": [{"Name": "r1"}]}],
            describe_rule=[dict(detail, ResponseMetadata={"RequestId": "x"})],
            list_tags_for_resource=[client_error("ResourceNotFoundException")],
            list_targets_by_rule=[{"Targets": []}],
        )

        resources = EVENTBRIDGE_RULE(ctx, client)

        assert resources[0].arn == detail["Arn"]
        assert resources[0].description.tags == []
        assert service.calls_to("list_tags_for_resource") == [{"ResourceARN": detail["Arn"]}]

    def test_rule_detail_is_mandatory(self, ctx, fake_aws, client_error):
        client, _ = fake_aws(
            list_rules=[{"Rules": [{"Name": "r1"}]}],
            describe_rule=[client_error("ResourceNotFoundException")],
        )

        with pytest.raises(ResourceFetchError):
            EVENTBRIDGE_RULE(ctx, client)

    def test_rule_listing_has_no_absence(self, ctx, fake_aws, client_error):
        client, _ = fake_aws(list_rules=[client_error("ResourceNotFoundException")])

        with pytest.raises(ResourceFetchError):
            EVENTBRIDGE_RULE(ctx, client)

    def test_bus_listing_sends_limit(self, ctx, fake_aws):
        client, service = fake_aws(list_event_buses=[{"EventBuses": []}])
        EVENTBRIDGE_BUS(ctx, client)
        assert service.calls_to("list_event_buses") == [{"Limit": 100}]


class TestECR:
    """Tests for the ECR describer."""

    def test_repository_without_policies(self, aws_client, ctx, ecr_client):
        ecr_client.create_repository(
            repositoryName="api", tags=[{"Key": "team", "Value": "core"}]
        )

        resources = ECR_REPOSITORY(ctx, aws_client)

        assert len(resources) == 1
        repo = resources[0]
        assert repo.name == "api"
        assert repo.arn.endswith(":repository/api")
        assert repo.description.policy is None
        assert repo.description.lifecycle_policy is None
        assert {"Key": "team", "Value": "core"} in repo.description.tags

    def test_repository_with_lifecycle_policy(self, aws_client, ctx, ecr_client):
        ecr_client.create_repository(repositoryName="worker")
        policy = json.dumps(
            {
                "rules": [
                    {
                        "rulePriority": 1,
                        "selection": {
                            "tagStatus": "untagged",
                            "countType": "imageCountMoreThan",
                            "countNumber": 5,
                        },
                        "action": {"type": "expire"},
                    }
                ]
            }
        )
        ecr_client.put_lifecycle_policy(
            repositoryName="worker", lifecyclePolicyText=policy
        )

        resources = ECR_REPOSITORY(ctx, aws_client)

        assert json.loads(resources[0].description.lifecycle_policy) == json.loads(policy)


class TestMessaging:
    """Tests for the SQS and SNS describers."""

    def test_queues(self, aws_client, ctx, sqs_client):
        sqs_client.create_queue(QueueName="jobs", tags={"env": "prod"})
        sqs_client.create_queue(QueueName="dead-letters")

        resources = SQS_QUEUE(ctx, aws_client)
        by_name = {r.name: r for r in resources}

        assert set(by_name) == {"jobs", "dead-letters"}
        jobs = by_name["jobs"]
        assert jobs.arn == "arn:aws:sqs:us-east-1:123456789012:jobs"
        assert isinstance(jobs.description, SQSQueueDescription)
        assert jobs.description.queue_url.endswith("/jobs")
        assert jobs.description.tags == {"env": "prod"}

    def test_no_queues(self, aws_client, ctx, sqs_client):
        assert SQS_QUEUE(ctx, aws_client) == []

    def test_queue_deleted_mid_describe(self, ctx, fake_aws, client_error):
        url = "https://sqs.us-east-1.amazonaws.com/123456789012/gone"
        client, _ = fake_aws(
            list_queues=[{"QueueUrls": [url]}],
            get_queue_attributes=[client_error("AWS.SimpleQueueService.NonExistentQueue")],
            list_queue_tags=[client_error("AWS.SimpleQueueService.NonExistentQueue")],
        )

        assert SQS_QUEUE(ctx, client) == []

    def test_topics(self, aws_client, ctx, sns_client):
        arn = sns_client.create_topic(
            Name="alerts", Tags=[{"Key": "severity", "Value": "high"}]
        )["TopicArn"]

        resources = SNS_TOPIC(ctx, aws_client)

        assert [r.arn for r in resources] == [arn]
        assert resources[0].name == "alerts"
        assert resources[0].description.attributes["TopicArn"] == arn
        assert {"Key": "severity", "Value": "high"} in resources[0].description.tags


class TestDynamoDB:
    """Tests for the DynamoDB describer."""

    def create_table(self, dynamodb_client, name):
        return dynamodb_client.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
            Tags=[{"Key": "service", "Value": name}],
        )["TableDescription"]

    def test_tables(self, aws_client, ctx, dynamodb_client):
        orders = self.create_table(dynamodb_client, "orders")
        self.create_table(dynamodb_client, "users")

        resources = DYNAMODB_TABLE(ctx, aws_client)
        by_name = {r.name: r for r in resources}

        assert set(by_name) == {"orders", "users"}
        table = by_name["orders"]
        assert table.arn == orders["TableArn"]
        assert isinstance(table.description, DynamoDBTableDescription)
        assert table.description.table["TableName"] == "orders"
        assert "ContinuousBackupsStatus" in table.description.continuous_backups
        assert {"Key": "service", "Value": "orders"} in table.description.tags

    def test_paginates_by_table_name(self, ctx, fake_aws):
        def describe_table(TableName):
            return {"Table": {"TableName": TableName, "TableArn": f"arn:ddb:{TableName}"}}

        client, service = fake_aws(
            list_tables=[
                {"TableNames": ["a"], "LastEvaluatedTableName": "a"},
                {"TableNames": ["b"]},
            ],
            describe_table=[describe_table],
            describe_continuous_backups=[{"ContinuousBackupsDescription": {}}],
            list_tags_of_resource=[{"Tags": []}],
        )

        resources = DYNAMODB_TABLE(ctx, client)

        assert [r.arn for r in resources] == ["arn:ddb:a", "arn:ddb:b"]
        assert service.calls_to("list_tables") == [{}, {"ExclusiveStartTableName": "a"}]

    def test_table_deleted_mid_describe(self, ctx, fake_aws, client_error):
        client, service = fake_aws(
            list_tables=[{"TableNames": ["gone"]}],
            describe_table=[client_error("ResourceNotFoundException")],
            describe_continuous_backups=[client_error("TableNotFoundException")],
        )

        assert DYNAMODB_TABLE(ctx, client) == []
        assert "list_tags_of_resource" not in [op for op, _ in service.calls]


class TestCompute:
    """Tests for the Lambda and EC2 describers."""

    def test_lambda_functions(self, ctx, fake_aws, client_error):
        function = {
            "FunctionName": "resize",
            "FunctionArn": "arn:aws:lambda:us-east-1:123456789012:function:resize",
        }
        client, service = fake_aws(
            list_functions=[
                {"Functions": [function], "NextMarker": "m1"},
                {"Functions": []},
            ],
            get_policy=[client_error("ResourceNotFoundException")],
            list_tags=[{"Tags": {"team": "media"}}],
        )

        resources = LAMBDA_FUNCTION(ctx, client)

        assert [r.name for r in resources] == ["resize"]
        assert isinstance(resources[0].description, LambdaFunctionDescription)
        assert resources[0].description.policy is None
        assert resources[0].description.tags == {"team": "media"}
        assert service.calls_to("list_functions") == [{}, {"Marker": "m1"}]

    def test_security_groups(self, aws_client, ctx, security_group):
        resources = EC2_SECURITY_GROUP(ctx, aws_client)
        by_id = {r.description.security_group["GroupId"]: r for r in resources}

        assert security_group in by_id
        group = by_id[security_group]
        assert group.name == "test-sg"
        assert group.arn.endswith(f"security-group/{security_group}")
        assert group.arn.startswith("arn:aws:ec2:us-east-1:")

    def test_security_group_arn_is_built(self, ctx, fake_aws):
        client, _ = fake_aws(
            describe_security_groups=[
                {
                    "SecurityGroups": [
                        {"GroupId": "sg-1", "GroupName": "web", "OwnerId": "111122223333"}
                    ]
                }
            ]
        )

        resources = EC2_SECURITY_GROUP(ctx, client)

        assert resources[0].arn == "arn:aws:ec2:us-east-1:111122223333:security-group/sg-1"


class TestIAM:
    """Tests for the IAM role describer."""

    TRUST = json.dumps(
        {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"Service": "lambda.amazonaws.com"},
                    "Action": "sts:AssumeRole",
                }
            ],
        }
    )

    def test_roles(self, aws_client, ctx, iam_client):
        iam_client.create_role(
            RoleName="deployer",
            AssumeRolePolicyDocument=self.TRUST,
            Tags=[{"Key": "team", "Value": "platform"}],
        )
        policy_arn = iam_client.create_policy(
            PolicyName="ReadOnlyAccess",
            PolicyDocument=json.dumps(
                {
                    "Version": "2012-10-17",
                    "Statement": [
                        {"Effect": "Allow", "Action": "s3:Get*", "Resource": "*"}
                    ],
                }
            ),
        )["Policy"]["Arn"]
        iam_client.attach_role_policy(RoleName="deployer", PolicyArn=policy_arn)

        resources = IAM_ROLE(ctx, aws_client)
        by_name = {r.name: r for r in resources}

        role = by_name["deployer"]
        assert role.region == ""
        assert role.arn == "arn:aws:iam::123456789012:role/deployer"
        assert [p["PolicyName"] for p in role.description.attached_policies] == [
            "ReadOnlyAccess"
        ]
        assert {"Key": "team", "Value": "platform"} in role.description.tags

    def test_roles_paginate(self, aws_client, ctx, iam_client):
        for n in range(3):
            iam_client.create_role(
                RoleName=f"role-{n}", AssumeRolePolicyDocument=self.TRUST
            )

        resources = IAM_ROLE(ctx, aws_client)

        assert {"role-0", "role-1", "role-2"} <= {r.name for r in resources}
