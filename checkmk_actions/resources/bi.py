"""Business intelligence and SLA actions."""

from typing import Any, Dict, Optional

from pydantic import Field

from .base import ActionParameters, registry


class AggregationStateParameters(ActionParameters):
    filter_names: Optional[str] = Field(None, description="Comma separated aggregation names")
    filter_groups: Optional[str] = Field(None, description="Comma separated aggregation groups")


@registry.register("biAggregation", "getState", AggregationStateParameters)
def get_aggregation_state(client, params: AggregationStateParameters) -> Dict[str, Any]:
    """Get the state of BI aggregations."""
    query = {}
    if params.filter_names:
        query["filter_names"] = params.filter_names
    if params.filter_groups:
        query["filter_groups"] = params.filter_groups

    return client.request(
        'GET',
        "/domain-types/bi_aggregation/actions/aggregation_state/invoke",
        query=query or None,
    )


registry.register_collection("biPack", "/domain-types/bi_pack/collections/all")
registry.register_collection("biRule", "/domain-types/bi_rule/collections/all")


class SlaParameters(ActionParameters):
    sla_configuration: str = Field(..., min_length=1)
    time_range: str = Field(..., min_length=1)


@registry.register("sla", "compute", SlaParameters)
def compute_sla(client, params: SlaParameters) -> Dict[str, Any]:
    """Compute an SLA for a time range."""
    return client.request(
        'POST',
        "/domain-types/sla/actions/compute/invoke",
        body={"sla_configuration": params.sla_configuration, "time_range": params.time_range},
    )
