"""
EventBridge Describers
======================

Event buses and rules.

Rules follow the detail-first pattern: ``describe_rule`` is mandatory and
its ARN keys the tag lookup, while tags and targets degrade to empty on
"not found" errors.
"""

from __future__ import annotations

from typing import Any, Dict, List

from aws_describer.core.base_describer import ResourceDescriber
from aws_describer.core.enrichment import Enrichment
from aws_describer.core.errors import NO_ABSENCE_CODES, NOT_FOUND_CODES
from aws_describer.core.models import (
    EventBridgeBusDescription,
    EventBridgeRuleDescription,
)


def _strip_metadata(response: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in response.items() if k != "ResponseMetadata"}


# =============================================================================
# Event Buses
# =============================================================================


def list_bus_tags(client, bus, enriched) -> List[Dict[str, str]]:
    return client.list_tags_for_resource(ResourceARN=bus["Arn"]).get("Tags", [])


def build_bus(bus, enriched, ctx):
    description = EventBridgeBusDescription(bus=bus, tags=enriched["tags"])
    return bus["Arn"], bus["Name"], description


EVENTBRIDGE_BUS = ResourceDescriber(
    resource_type="AWS::Events::EventBus",
    service="events",
    list_operation="list_event_buses",
    items_key="EventBuses",
    list_kwargs={"Limit": 100},
    enrichments=(Enrichment("tags", list_bus_tags, default=[]),),
    build=build_bus,
)


# =============================================================================
# Rules
# =============================================================================


def describe_rule(client, rule, enriched) -> Dict[str, Any]:
    return _strip_metadata(client.describe_rule(Name=rule["Name"]))


def list_rule_tags(client, rule, enriched) -> List[Dict[str, str]]:
    arn = enriched["rule"]["Arn"]
    return client.list_tags_for_resource(ResourceARN=arn).get("Tags", [])


def list_rule_targets(client, rule, enriched) -> List[Dict[str, Any]]:
    return client.list_targets_by_rule(Rule=rule["Name"]).get("Targets", [])


def build_rule(rule, enriched, ctx):
    detail = enriched["rule"]
    description = EventBridgeRuleDescription(
        rule=detail,
        tags=enriched["tags"],
        targets=enriched["targets"],
    )
    return detail["Arn"], detail["Name"], description


EVENTBRIDGE_RULE = ResourceDescriber(
    resource_type="AWS::Events::Rule",
    service="events",
    list_operation="list_rules",
    items_key="Rules",
    absence_codes=NO_ABSENCE_CODES,
    enrichments=(
        Enrichment("rule", describe_rule, absence_codes=NO_ABSENCE_CODES),
        Enrichment("tags", list_rule_tags, NOT_FOUND_CODES, default=[]),
        Enrichment("targets", list_rule_targets, NOT_FOUND_CODES, default=[]),
    ),
    build=build_rule,
)
