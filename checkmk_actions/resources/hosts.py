"""Host configuration, host status, discovery and host tag actions."""

import json
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from ..utils import HOSTNAME_PATTERN, drop_none, sanitize_folder_path
from .base import ActionParameters, GetManyParameters, deleted, get_many, lift_additional_field, registry

HOSTS_PATH = "/domain-types/host_config/collections/all"


def host_path(host_name: str) -> str:
    return f"/objects/host_config/{host_name}"


class HostNameParameters(ActionParameters):
    host_name: str = Field(..., min_length=1, description="The host name")


class CreateHostParameters(ActionParameters):
    """Parameters for creating a host."""

    host_name: str = Field(..., description="The hostname or IP address of the host", pattern=HOSTNAME_PATTERN)
    folder: str = Field("/", description="The path name of the folder where the host will be created")
    attributes: Dict[str, Any] = Field(default_factory=dict, alias="additionalFields",
                                       description="Attributes to set on the newly created host")
    bake_agent: bool = Field(False, description="Automatically bake agent for Enterprise editions")


class GetHostParameters(HostNameParameters):
    effective_attributes: bool = Field(False, description="Include inherited folder attributes")


class UpdateHostParameters(HostNameParameters):
    attributes: Dict[str, Any] = Field(default_factory=dict, alias="additionalFields")


class MoveHostParameters(HostNameParameters):
    folder: str = Field(..., min_length=1, description="Target folder")


class RenameHostParameters(HostNameParameters):
    new_name: str = Field(..., description="New host name", pattern=HOSTNAME_PATTERN)
    additional_fields: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode='before')
    @classmethod
    def new_name_from_additional_fields(cls, data: Any) -> Any:
        return lift_additional_field(data, "new_name")


@registry.register("host", "create", CreateHostParameters)
def create_host(client, params: CreateHostParameters) -> Dict[str, Any]:
    """Create a new host."""
    body = {
        "host_name": params.host_name,
        "folder": sanitize_folder_path(params.folder),
        "attributes": params.attributes,
    }
    query = {"bake_agent": "true"} if params.bake_agent else None
    return client.request('POST', HOSTS_PATH, body=body, query=query)


@registry.register("host", "get", GetHostParameters)
def get_host(client, params: GetHostParameters) -> Dict[str, Any]:
    """Get configuration details for a specific host."""
    query = {"effective_attributes": "true"} if params.effective_attributes else None
    return client.request('GET', host_path(params.host_name), query=query)


@registry.register("host", "getMany", GetManyParameters)
def list_hosts(client, params: GetManyParameters) -> List[Any]:
    """List host configurations."""
    return get_many(client, HOSTS_PATH, params)


@registry.register("host", "update", UpdateHostParameters)
def update_host(client, params: UpdateHostParameters) -> Dict[str, Any]:
    """Replace the explicit attributes of a host."""
    return client.mutate('PUT', host_path(params.host_name), body={"attributes": params.attributes})


@registry.register("host", "delete", HostNameParameters)
def delete_host(client, params: HostNameParameters) -> Dict[str, Any]:
    """Delete a host."""
    client.mutate('DELETE', host_path(params.host_name))
    return deleted("hostName", params.host_name)


@registry.register("host", "move", MoveHostParameters)
def move_host(client, params: MoveHostParameters) -> Dict[str, Any]:
    """Move a host to another folder."""
    return client.mutate(
        'POST',
        f"{host_path(params.host_name)}/actions/move/invoke",
        body={"target_folder": sanitize_folder_path(params.folder)},
    )


@registry.register("host", "rename", RenameHostParameters)
def rename_host(client, params: RenameHostParameters) -> Dict[str, Any]:
    """Rename a host."""
    return client.mutate(
        'PUT',
        f"{host_path(params.host_name)}/actions/rename/invoke",
        body={"new_name": params.new_name},
    )


# Host status (livestatus backed)

class HostStatusParameters(GetManyParameters):
    hostname: Optional[str] = Field(None, description="Exact host name")
    state: Optional[str] = Field(None, description="Host state (0 up, 1 down, 2 unreachable)")


def host_status_query(hostname: Optional[str], state: Optional[str]) -> Dict[str, Any]:
    """Build a livestatus query expression for host status filters."""
    conditions = []
    if hostname:
        conditions.append({"op": "=", "left": "name", "right": hostname})
    if state not in (None, ""):
        conditions.append({"op": "=", "left": "state", "right": state})

    if not conditions:
        return {}
    if len(conditions) == 1:
        return conditions[0]
    return {"op": "and", "expr": conditions}


@registry.register("hostStatus", "getMany", HostStatusParameters)
def list_host_status(client, params: HostStatusParameters) -> List[Any]:
    """List monitored host states."""
    query: Dict[str, Any] = {"columns": ["name", "state"]}
    expression = host_status_query(params.hostname, params.state)
    if expression:
        query["query"] = json.dumps(expression)
    return get_many(client, "/domain-types/host/collections/all", params, query=query)


# Service discovery and parent scan

class DiscoveryParameters(HostNameParameters):
    mode: str = Field("new", pattern=r'^(new|remove|fix_all|refresh|only_host_labels|only_service_labels|tabula_rasa)$')


@registry.register("discovery", "run", DiscoveryParameters)
def run_discovery(client, params: DiscoveryParameters) -> Dict[str, Any]:
    """Start a service discovery on a host."""
    return client.request(
        'POST',
        f"/objects/host/{params.host_name}/actions/discover_services/invoke",
        body={"host_name": params.host_name, "mode": params.mode},
    )


@registry.register("discovery", "getStatus", HostNameParameters)
def get_discovery_status(client, params: HostNameParameters) -> Dict[str, Any]:
    """Show the discovered services of a host."""
    return client.request('GET', f"/objects/host/{params.host_name}/collections/services")


class ParentScanParameters(ActionParameters):
    scan_host_name: str = Field(..., min_length=1)


@registry.register("parentScan", "run", ParentScanParameters)
def run_parent_scan(client, params: ParentScanParameters) -> Dict[str, Any]:
    """Start a parent scan for a host."""
    return client.request(
        'POST',
        "/domain-types/parent_scan/actions/run/invoke",
        body={"host_name": params.scan_host_name},
    )


# Auxiliary tags and host tag groups

class AuxTagParameters(ActionParameters):
    tag_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    topic: Optional[str] = None
    help: Optional[str] = None


class AuxTagIdParameters(ActionParameters):
    tag_id: str = Field(..., min_length=1)


@registry.register("auxTag", "create", AuxTagParameters)
def create_aux_tag(client, params: AuxTagParameters) -> Dict[str, Any]:
    """Create an auxiliary tag."""
    body = drop_none({"tag_id": params.tag_id, "title": params.title, "topic": params.topic, "help": params.help})
    return client.request('POST', "/domain-types/aux_tag/collections/all", body=body)


registry.register_collection("auxTag", "/domain-types/aux_tag/collections/all")


@registry.register("auxTag", "update", AuxTagParameters)
def update_aux_tag(client, params: AuxTagParameters) -> Dict[str, Any]:
    """Update an auxiliary tag."""
    body = drop_none({"title": params.title, "topic": params.topic, "help": params.help})
    return client.mutate('PUT', f"/objects/aux_tag/{params.tag_id}", body=body)


@registry.register("auxTag", "delete", AuxTagIdParameters)
def delete_aux_tag(client, params: AuxTagIdParameters) -> Dict[str, Any]:
    """Delete an auxiliary tag."""
    client.mutate('DELETE', f"/objects/aux_tag/{params.tag_id}")
    return deleted("tagId", params.tag_id)


class HostTagGroupParameters(ActionParameters):
    tag_group_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    topic: Optional[str] = None
    help: Optional[str] = None


class HostTagGroupIdParameters(ActionParameters):
    tag_group_id: str = Field(..., min_length=1)


@registry.register("hostTagGroup", "create", HostTagGroupParameters)
def create_host_tag_group(client, params: HostTagGroupParameters) -> Dict[str, Any]:
    """Create a host tag group."""
    body = drop_none({
        "tag_group_id": params.tag_group_id,
        "title": params.title,
        "topic": params.topic,
        "help": params.help,
    })
    return client.request('POST', "/domain-types/host_tag_group/collections/all", body=body)


registry.register_collection("hostTagGroup", "/domain-types/host_tag_group/collections/all")


@registry.register("hostTagGroup", "update", HostTagGroupParameters)
def update_host_tag_group(client, params: HostTagGroupParameters) -> Dict[str, Any]:
    """Update a host tag group."""
    body = drop_none({"title": params.title, "topic": params.topic, "help": params.help})
    return client.mutate('PUT', f"/objects/host_tag_group/{params.tag_group_id}", body=body)


@registry.register("hostTagGroup", "delete", HostTagGroupIdParameters)
def delete_host_tag_group(client, params: HostTagGroupIdParameters) -> Dict[str, Any]:
    """Delete a host tag group."""
    client.mutate('DELETE', f"/objects/host_tag_group/{params.tag_group_id}")
    return deleted("tagGroupId", params.tag_group_id)
