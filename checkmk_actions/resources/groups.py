"""Host, service and contact group actions.

The three group types share one endpoint layout and one body shape, so the
actions are generated per group type.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import ActionParameters, GetManyParameters, deleted, get_many, registry


class GroupNameParameters(ActionParameters):
    name: str = Field(..., min_length=1, description="Group name")


class GroupParameters(GroupNameParameters):
    alias: Optional[str] = Field(None, description="Display name, defaults to the name")


GROUP_DOMAIN_TYPES = {
    "hostGroup": "host_group_config",
    "serviceGroup": "service_group_config",
    "contactGroup": "contact_group_config",
}


def _register_group_actions(resource: str, domain_type: str) -> None:
    collection = f"/domain-types/{domain_type}/collections/all"

    def object_path(name: str) -> str:
        return f"/objects/{domain_type}/{name}"

    @registry.register(resource, "create", GroupParameters, f"Create a {resource}")
    def create_group(client, params: GroupParameters) -> Dict[str, Any]:
        body = {"name": params.name, "alias": params.alias or params.name}
        return client.request('POST', collection, body=body)

    @registry.register(resource, "get", GroupNameParameters, f"Get a {resource}")
    def get_group(client, params: GroupNameParameters) -> Dict[str, Any]:
        return client.request('GET', object_path(params.name))

    @registry.register(resource, "getMany", GetManyParameters, f"List {resource}s")
    def list_groups(client, params: GetManyParameters) -> List[Any]:
        return get_many(client, collection, params)

    @registry.register(resource, "update", GroupParameters, f"Update the alias of a {resource}")
    def update_group(client, params: GroupParameters) -> Dict[str, Any]:
        return client.mutate('PUT', object_path(params.name), body={"alias": params.alias or params.name})

    @registry.register(resource, "delete", GroupNameParameters, f"Delete a {resource}")
    def delete_group(client, params: GroupNameParameters) -> Dict[str, Any]:
        client.mutate('DELETE', object_path(params.name))
        return deleted("name", params.name)


for _resource, _domain_type in GROUP_DOMAIN_TYPES.items():
    _register_group_actions(_resource, _domain_type)
