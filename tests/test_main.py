"""
Tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from aws_describer.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    """Tests for the click commands."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_list_types(self, runner):
        result = runner.invoke(cli, ["list-types"])
        assert result.exit_code == 0
        assert "aws_eventbridge_rule" in result.output

    def test_unknown_resource_type(self, runner, mock_aws_environment):
        result = runner.invoke(cli, ["describe", "AWS::Nope::Thing", "--region", "us-east-1"])
        assert result.exit_code == 1

    def test_describe_jsonl(self, runner, sqs_client):
        sqs_client.create_queue(QueueName="jobs")

        result = runner.invoke(
            cli,
            ["describe", "aws_sqs_queue", "--region", "us-east-1", "--format", "jsonl"],
        )

        assert result.exit_code == 0
        records = [
            json.loads(line)
            for line in result.stdout.splitlines()
            if line.startswith("{")
        ]
        assert [r["name"] for r in records] == ["jobs"]
        assert records[0]["resource_type"] == "AWS::SQS::Queue"

    def test_describe_json_file(self, runner, events_client, tmp_path):
        output = tmp_path / "buses.json"

        result = runner.invoke(
            cli,
            [
                "describe",
                "AWS::Events::EventBus",
                "--regions",
                "us-east-1,us-west-2",
                "--format",
                "json",
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["metadata"]["regions_described"] == ["us-east-1", "us-west-2"]
        assert data["summary_by_region"] == {"us-east-1": 1, "us-west-2": 1}

    def test_describe_with_account_config(self, runner, sqs_client, tmp_path):
        sqs_client.create_queue(QueueName="jobs")
        config = tmp_path / "account.json"
        config.write_text(json.dumps({"accountId": "123456789012", "regions": ["us-east-1"]}))

        result = runner.invoke(
            cli, ["describe", "AWS::SQS::Queue", "--account-config", str(config)]
        )

        assert result.exit_code == 0
        assert "jobs" in result.output

    def test_invalid_account_config(self, runner, mock_aws_environment, tmp_path):
        config = tmp_path / "account.json"
        config.write_text(json.dumps({"accountId": 42}))

        result = runner.invoke(
            cli, ["describe", "AWS::SQS::Queue", "--account-config", str(config)]
        )

        assert result.exit_code == 1

    def test_invalid_regions_option(self, runner):
        result = runner.invoke(cli, ["describe", "AWS::SQS::Queue", "--regions", " , "])
        assert result.exit_code == 2
        assert "No valid regions" in result.output

    def test_validate(self, runner, mock_aws_environment):
        result = runner.invoke(cli, ["validate", "--region", "us-east-1"])
        assert result.exit_code == 0
        assert "123456789012" in result.output
