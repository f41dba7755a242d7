"""Change activation, sites, audit log and other setup level actions."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..utils import split_csv
from .base import ActionParameters, GetManyParameters, NoParameters, deleted, get_many, registry

PENDING_CHANGES_PATH = "/domain-types/activation_run/collections/pending_changes"
ACTIVATE_PATH = "/domain-types/activation_run/actions/activate-changes/invoke"


class ActivateChangesParameters(ActionParameters):
    activate_on_sites: Optional[str] = Field(None, description="Comma separated site names, empty for all")
    force_foreign_changes: bool = False


@registry.register("activateChanges", "activate", ActivateChangesParameters)
def activate_changes(client, params: ActivateChangesParameters) -> Dict[str, Any]:
    """
    Activate pending configuration changes.

    The activation is guarded by the ETag of the pending changes list, so a
    change made by someone else in between is never activated unseen.
    """
    body = {
        "sites": split_csv(params.activate_on_sites),
        "force_foreign_changes": params.force_foreign_changes,
    }
    return client.mutate('POST', ACTIVATE_PATH, body=body, tag_path=PENDING_CHANGES_PATH)


@registry.register("activateChanges", "getPending", NoParameters)
def get_pending_changes(client, params: NoParameters) -> Dict[str, Any]:
    return client.request('GET', PENDING_CHANGES_PATH)


@registry.register("activateChanges", "getStatus", NoParameters)
def get_activation_status(client, params: NoParameters) -> Dict[str, Any]:
    return client.request('GET', "/domain-types/activation_run/collections/running")


# Sites

class SiteParameters(ActionParameters):
    site_name: str = Field(..., min_length=1)


@registry.register("site", "get", SiteParameters)
def get_site(client, params: SiteParameters) -> Dict[str, Any]:
    return client.request('GET', f"/objects/site/{params.site_name}")


registry.register_collection("site", "/domain-types/site/collections/all")


@registry.register("site", "login", SiteParameters)
def login_site(client, params: SiteParameters) -> Dict[str, Any]:
    return client.request('POST', f"/objects/site/{params.site_name}/actions/login/invoke", body={})


@registry.register("site", "logout", SiteParameters)
def logout_site(client, params: SiteParameters) -> Dict[str, Any]:
    return client.request('POST', f"/objects/site/{params.site_name}/actions/logout/invoke", body={})


# Audit log

class AuditLogParameters(GetManyParameters):
    additional_fields: Dict[str, Any] = Field(default_factory=dict)


@registry.register("auditLog", "getMany", AuditLogParameters)
def list_audit_log(client, params: AuditLogParameters) -> List[Any]:
    query = {}
    if params.additional_fields.get("userId"):
        query["user_id"] = params.additional_fields["userId"]
    if params.additional_fields.get("objectType"):
        query["object_type"] = params.additional_fields["objectType"]
    return get_many(client, "/domain-types/audit_log/collections/all", params, query=query or None)


@registry.register("licenseUsage", "get", NoParameters)
def get_license_usage(client, params: NoParameters) -> Dict[str, Any]:
    return client.request('GET', "/domain-types/license_usage/actions/usage/invoke")


# OpenTelemetry collectors

OTEL_PATH = "/domain-types/open_telemetry_collector/collections/all"


class CollectorIdParameters(ActionParameters):
    collector_id: str = Field(..., min_length=1)


class CollectorParameters(CollectorIdParameters):
    collector_name: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)


@registry.register("openTelemetry", "create", CollectorParameters)
def create_collector(client, params: CollectorParameters) -> Dict[str, Any]:
    body = {"collector_id": params.collector_id, "name": params.collector_name, "port": params.port}
    return client.request('POST', OTEL_PATH, body=body)


registry.register_collection("openTelemetry", OTEL_PATH)


@registry.register("openTelemetry", "update", CollectorParameters)
def update_collector(client, params: CollectorParameters) -> Dict[str, Any]:
    return client.mutate(
        'PUT',
        f"/objects/open_telemetry_collector/{params.collector_id}",
        body={"name": params.collector_name, "port": params.port},
    )


@registry.register("openTelemetry", "delete", CollectorIdParameters)
def delete_collector(client, params: CollectorIdParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/open_telemetry_collector/{params.collector_id}")
    return deleted("collectorId", params.collector_id)


# Read-only collections

for _resource, _path in {
    "agent": "/domain-types/agent/collections/all",
    "backgroundJob": "/domain-types/background_job/collections/all",
    "brokerConnection": "/domain-types/broker_connection/collections/all",
    "certificate": "/domain-types/certificate/collections/all",
    "configurationEntity": "/domain-types/configuration_entity/collections/all",
    "dcd": "/domain-types/dcd/collections/all",
    "quickSetup": "/domain-types/quick_setup/collections/all",
}.items():
    registry.register_collection(_resource, _path)
