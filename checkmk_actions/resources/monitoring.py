"""Monitoring actions: services, problems, downtimes, comments, metrics, events."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from .base import ActionParameters, GetManyParameters, deleted, get_many, lift_additional_field, registry

SERVICES_PATH = "/domain-types/service/collections/all"
PROBLEM_STATES = "warn,crit,unknown"
DEFAULT_DOWNTIME = timedelta(hours=1)


class ServiceParameters(ActionParameters):
    host_name: str = Field(..., min_length=1)
    service_description: str = Field(..., min_length=1)


class ServiceListParameters(GetManyParameters):
    host_name: Optional[str] = Field(None, description="Only services of this host")


class AcknowledgeServiceParameters(ServiceParameters):
    comment: str = Field("Acknowledged via workflow", min_length=1)
    sticky: bool = True
    notify: bool = False
    persistent: bool = False
    additional_fields: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def comment_from_additional_fields(cls, data: Any) -> Any:
        return lift_additional_field(data, "comment")


@registry.register("service", "get", ServiceParameters)
def get_service(client, params: ServiceParameters) -> Dict[str, Any]:
    """Show one service of a host."""
    return client.request(
        'GET',
        f"/objects/host/{params.host_name}/actions/show_service/invoke",
        query={"service_description": params.service_description},
    )


@registry.register("service", "getMany", ServiceListParameters)
def list_services(client, params: ServiceListParameters) -> List[Any]:
    query = {"host_name": params.host_name} if params.host_name else None
    return get_many(client, SERVICES_PATH, params, query=query)


@registry.register("service", "acknowledge", AcknowledgeServiceParameters)
def acknowledge_service(client, params: AcknowledgeServiceParameters) -> Dict[str, Any]:
    """Acknowledge a service problem."""
    body = {
        "acknowledge_type": "service",
        "host_name": params.host_name,
        "service_description": params.service_description,
        "comment": params.comment,
        "sticky": params.sticky,
        "notify": params.notify,
        "persistent": params.persistent,
    }
    return client.request('POST', "/domain-types/acknowledge/collections/service", body=body)


class ServiceStatusParameters(GetManyParameters):
    additional_fields: Dict[str, Any] = Field(default_factory=dict)


@registry.register("serviceStatus", "getMany", ServiceStatusParameters)
def list_service_status(client, params: ServiceStatusParameters) -> List[Any]:
    host_name = params.additional_fields.get("hostName")
    query = {"host_name": host_name} if host_name else None
    return get_many(client, SERVICES_PATH, params, query=query)


@registry.register("problem", "getMany", GetManyParameters)
def list_problems(client, params: GetManyParameters) -> List[Any]:
    """List services in WARN, CRIT or UNKNOWN state."""
    return get_many(client, SERVICES_PATH, params, query={"state": PROBLEM_STATES})


# Downtimes

class DowntimeParameters(ActionParameters):
    downtime_type: str = Field(..., pattern=r'^(host|service|hostgroup|servicegroup)$')
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    comment: str = Field("Scheduled downtime via workflow", min_length=1)
    host_name: Optional[str] = None
    additional_fields: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('start_time', 'end_time', 'host_name', mode='before')
    @classmethod
    def empty_as_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DowntimeIdParameters(ActionParameters):
    downtime_id: str = Field(..., min_length=1)


def _iso_utc(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


@registry.register("downtime", "create", DowntimeParameters)
def create_downtime(client, params: DowntimeParameters) -> Dict[str, Any]:
    """Schedule a downtime, by default starting now and lasting one hour."""
    now = datetime.now(timezone.utc)
    start = params.start_time or now
    end = params.end_time or (now + DEFAULT_DOWNTIME)

    body: Dict[str, Any] = {
        "downtime_type": params.downtime_type,
        "start_time": _iso_utc(start),
        "end_time": _iso_utc(end),
        "comment": params.comment,
    }
    if params.host_name:
        body["host_name"] = params.host_name
    if params.additional_fields.get("serviceDescription"):
        body["service_description"] = params.additional_fields["serviceDescription"]

    return client.request('POST', "/domain-types/downtime/collections/all", body=body)


@registry.register("downtime", "get", DowntimeIdParameters)
def get_downtime(client, params: DowntimeIdParameters) -> Dict[str, Any]:
    return client.request('GET', f"/objects/downtime/{params.downtime_id}")


registry.register_collection("downtime", "/domain-types/downtime/collections/all")


@registry.register("downtime", "delete", DowntimeIdParameters)
def delete_downtime(client, params: DowntimeIdParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/downtime/{params.downtime_id}")
    return deleted("downtimeId", params.downtime_id)


# Comments

class CommentParameters(ActionParameters):
    host_name: str = Field(..., min_length=1)
    comment_text: str = Field(..., min_length=1)
    persistent: bool = False


class CommentIdParameters(ActionParameters):
    comment_id: str = Field(..., min_length=1)


@registry.register("comment", "create", CommentParameters)
def create_comment(client, params: CommentParameters) -> Dict[str, Any]:
    return client.request(
        'POST',
        f"/objects/host/{params.host_name}/actions/add_comment/invoke",
        body={"comment": params.comment_text, "persistent": params.persistent},
    )


registry.register_collection("comment", "/domain-types/comment/collections/all")


@registry.register("comment", "delete", CommentIdParameters)
def delete_comment(client, params: CommentIdParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/comment/{params.comment_id}")
    return deleted("commentId", params.comment_id)


registry.register_collection("metric", "/domain-types/metric/collections/all")
registry.register_collection("eventConsole", "/domain-types/event_console/collections/all")
