"""
DynamoDB Describers
===================

``list_tables`` yields bare table names and paginates by table name
rather than by token. The table ARN needed for the tag call only exists
in the ``describe_table`` output, so the detail call runs first.
"""

from __future__ import annotations

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.enrichment import Enrichment
from aws_describer.core.errors import NOT_FOUND_CODES, absence_codes
from aws_describer.core.models import DynamoDBTableDescription

DYNAMODB_ABSENCE_CODES = absence_codes("TableNotFoundException", base=NOT_FOUND_CODES)


def describe_table(client, table_name, enriched):
    return client.describe_table(TableName=table_name).get("Table", {})


def describe_continuous_backups(client, table_name, enriched):
    response = client.describe_continuous_backups(TableName=table_name)
    return response.get("ContinuousBackupsDescription", {})


def list_table_tags(client, table_name, enriched):
    arn = enriched["table"].get("TableArn")
    if not arn:
        return []
    return client.list_tags_of_resource(ResourceArn=arn).get("Tags", [])


def build_table(table_name, enriched, ctx):
    table = enriched["table"]
    if not table:
        return None
    description = DynamoDBTableDescription(
        table=table,
        continuous_backups=enriched["continuous_backups"],
        tags=enriched["tags"],
    )
    return table["TableArn"], table_name, description


DYNAMODB_TABLE = ResourceDescriber(
    resource_type="AWS::DynamoDb::Table",
    service="dynamodb",
    list_operation="list_tables",
    items_key="TableNames",
    input_token="ExclusiveStartTableName",
    output_token="LastEvaluatedTableName",
    absence_codes=DYNAMODB_ABSENCE_CODES,
    enrichments=(
        Enrichment("table", describe_table, DYNAMODB_ABSENCE_CODES, default={}),
        Enrichment(
            "continuous_backups",
            describe_continuous_backups,
            DYNAMODB_ABSENCE_CODES,
            default={},
        ),
        Enrichment("tags", list_table_tags, DYNAMODB_ABSENCE_CODES, default=[]),
    ),
    build=build_table,
)
