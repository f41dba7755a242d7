"""Rules, rulesets, notification rules and time periods."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ActionParameters, GetManyParameters, deleted, get_many, registry


class RuleIdParameters(ActionParameters):
    rule_id: str = Field(..., min_length=1)


class RuleListParameters(GetManyParameters):
    ruleset_name: Optional[str] = Field(None, description="Only rules of this ruleset")


@registry.register("rule", "get", RuleIdParameters)
def get_rule(client, params: RuleIdParameters) -> Dict[str, Any]:
    return client.request('GET', f"/objects/rule/{params.rule_id}")


@registry.register("rule", "getMany", RuleListParameters)
def list_rules(client, params: RuleListParameters) -> List[Any]:
    query = {"ruleset_name": params.ruleset_name} if params.ruleset_name else None
    return get_many(client, "/domain-types/rule/collections/all", params, query=query)


registry.register_collection("ruleset", "/domain-types/ruleset/collections/all")
registry.register_collection("notificationRule", "/domain-types/notification_rule/collections/all")


# Time periods

TIME_PERIODS_PATH = "/domain-types/time_period/collections/all"


class TimePeriodNameParameters(ActionParameters):
    name: str = Field(..., min_length=1)


class TimePeriodParameters(TimePeriodNameParameters):
    alias: Optional[str] = None
    additional_fields: Dict[str, Any] = Field(default_factory=dict)


@registry.register("timePeriod", "create", TimePeriodParameters)
def create_time_period(client, params: TimePeriodParameters) -> Dict[str, Any]:
    body = {"name": params.name, "alias": params.alias or params.name}
    body.update(params.additional_fields)
    return client.request('POST', TIME_PERIODS_PATH, body=body)


@registry.register("timePeriod", "get", TimePeriodNameParameters)
def get_time_period(client, params: TimePeriodNameParameters) -> Dict[str, Any]:
    return client.request('GET', f"/objects/time_period/{params.name}")


@registry.register("timePeriod", "getMany", GetManyParameters)
def list_time_periods(client, params: GetManyParameters) -> List[Any]:
    return get_many(client, TIME_PERIODS_PATH, params)


@registry.register("timePeriod", "update", TimePeriodParameters)
def update_time_period(client, params: TimePeriodParameters) -> Dict[str, Any]:
    return client.mutate('PUT', f"/objects/time_period/{params.name}", body=params.additional_fields)


@registry.register("timePeriod", "delete", TimePeriodNameParameters)
def delete_time_period(client, params: TimePeriodNameParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/time_period/{params.name}")
    return deleted("name", params.name)
