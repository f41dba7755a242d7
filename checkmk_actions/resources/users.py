"""Users, roles, user connectors and stored passwords."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ..utils import split_csv
from .base import ActionParameters, GetManyParameters, deleted, get_many, registry

USERS_PATH = "/domain-types/user_config/collections/all"


class UserNameParameters(ActionParameters):
    name: str = Field(..., min_length=1, description="User ID")


class UserParameters(UserNameParameters):
    additional_fields: Dict[str, Any] = Field(default_factory=dict)


@registry.register("user", "create", UserParameters)
def create_user(client, params: UserParameters) -> Dict[str, Any]:
    body = {"username": params.name}
    body.update(params.additional_fields)
    return client.request('POST', USERS_PATH, body=body)


@registry.register("user", "get", UserNameParameters)
def get_user(client, params: UserNameParameters) -> Dict[str, Any]:
    return client.request('GET', f"/objects/user_config/{params.name}")


@registry.register("user", "getMany", GetManyParameters)
def list_users(client, params: GetManyParameters) -> List[Any]:
    return get_many(client, USERS_PATH, params)


@registry.register("user", "update", UserParameters)
def update_user(client, params: UserParameters) -> Dict[str, Any]:
    return client.mutate('PUT', f"/objects/user_config/{params.name}", body=params.additional_fields)


@registry.register("user", "delete", UserNameParameters)
def delete_user(client, params: UserNameParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/user_config/{params.name}")
    return deleted("name", params.name)


# User roles

class UserRoleIdParameters(ActionParameters):
    role_id: str = Field(..., min_length=1)


class UserRoleParameters(UserRoleIdParameters):
    role_alias: str = Field(..., min_length=1)
    permissions: Optional[str] = Field(None, description="Comma separated permission names")


@registry.register("userRole", "create", UserRoleParameters)
def create_user_role(client, params: UserRoleParameters) -> Dict[str, Any]:
    body = {
        "role_id": params.role_id,
        "alias": params.role_alias,
        "permissions": split_csv(params.permissions),
    }
    return client.request('POST', "/domain-types/user_role/collections/all", body=body)


registry.register_collection("userRole", "/domain-types/user_role/collections/all")


@registry.register("userRole", "update", UserRoleParameters)
def update_user_role(client, params: UserRoleParameters) -> Dict[str, Any]:
    body = {"alias": params.role_alias, "permissions": split_csv(params.permissions)}
    return client.mutate('PUT', f"/objects/user_role/{params.role_id}", body=body)


@registry.register("userRole", "delete", UserRoleIdParameters)
def delete_user_role(client, params: UserRoleIdParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/user_role/{params.role_id}")
    return deleted("roleId", params.role_id)


# LDAP connections

class LdapConnectionIdParameters(ActionParameters):
    connection_id: str = Field(..., min_length=1)


class LdapConnectionParameters(LdapConnectionIdParameters):
    server_url: str = Field(..., min_length=1)
    bind_dn: str = Field(..., min_length=1)
    bind_password: str = Field(..., min_length=1, repr=False)


@registry.register("ldapConnection", "create", LdapConnectionParameters)
def create_ldap_connection(client, params: LdapConnectionParameters) -> Dict[str, Any]:
    body = {
        "connection_id": params.connection_id,
        "server_url": params.server_url,
        "bind_dn": params.bind_dn,
        "bind_password": params.bind_password,
    }
    return client.request('POST', "/domain-types/ldap_connection/collections/all", body=body)


registry.register_collection("ldapConnection", "/domain-types/ldap_connection/collections/all")


@registry.register("ldapConnection", "update", LdapConnectionParameters)
def update_ldap_connection(client, params: LdapConnectionParameters) -> Dict[str, Any]:
    body = {
        "server_url": params.server_url,
        "bind_dn": params.bind_dn,
        "bind_password": params.bind_password,
    }
    return client.mutate('PUT', f"/objects/ldap_connection/{params.connection_id}", body=body)


@registry.register("ldapConnection", "delete", LdapConnectionIdParameters)
def delete_ldap_connection(client, params: LdapConnectionIdParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/ldap_connection/{params.connection_id}")
    return deleted("connectionId", params.connection_id)


# SAML connections

class SamlConnectionIdParameters(ActionParameters):
    saml_connection_id: str = Field(..., min_length=1)


class SamlConnectionParameters(SamlConnectionIdParameters):
    identity_provider_metadata: str = Field(..., min_length=1)


@registry.register("samlConnection", "create", SamlConnectionParameters)
def create_saml_connection(client, params: SamlConnectionParameters) -> Dict[str, Any]:
    body = {
        "connection_id": params.saml_connection_id,
        "identity_provider_metadata": params.identity_provider_metadata,
    }
    return client.request('POST', "/domain-types/saml_connection/collections/all", body=body)


registry.register_collection("samlConnection", "/domain-types/saml_connection/collections/all")


@registry.register("samlConnection", "update", SamlConnectionParameters)
def update_saml_connection(client, params: SamlConnectionParameters) -> Dict[str, Any]:
    return client.mutate(
        'PUT',
        f"/objects/saml_connection/{params.saml_connection_id}",
        body={"identity_provider_metadata": params.identity_provider_metadata},
    )


@registry.register("samlConnection", "delete", SamlConnectionIdParameters)
def delete_saml_connection(client, params: SamlConnectionIdParameters) -> Dict[str, Any]:
    client.mutate('DELETE', f"/objects/saml_connection/{params.saml_connection_id}")
    return deleted("samlConnectionId", params.saml_connection_id)


registry.register_collection("password", "/domain-types/password/collections/all")
