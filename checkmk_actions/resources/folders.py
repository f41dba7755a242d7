"""Folder actions."""

from typing import Any, Dict, List

from pydantic import Field

from ..utils import normalize_folder_id, sanitize_folder_path
from .base import ActionParameters, GetManyParameters, deleted, get_many, registry

FOLDERS_PATH = "/domain-types/folder_config/collections/all"


def folder_path(folder: str) -> str:
    """Object path of a folder given as ``/a/b`` or ``~a~b``."""
    return f"/objects/folder_config/{normalize_folder_id(folder)}"


class FolderParameters(ActionParameters):
    folder: str = Field("/", description="Folder path (/a/b) or folder id (~a~b)")


class CreateFolderParameters(FolderParameters):
    folder_name: str = Field(..., min_length=1, description="Title of the new folder")
    additional_fields: Dict[str, Any] = Field(default_factory=dict)


class UpdateFolderParameters(FolderParameters):
    additional_fields: Dict[str, Any] = Field(default_factory=dict)


@registry.register("folder", "create", CreateFolderParameters)
def create_folder(client, params: CreateFolderParameters) -> Dict[str, Any]:
    """Create a folder below ``folder``."""
    body = {"title": params.folder_name, "parent": sanitize_folder_path(params.folder)}
    body.update(params.additional_fields)
    return client.request('POST', FOLDERS_PATH, body=body)


@registry.register("folder", "get", FolderParameters)
def get_folder(client, params: FolderParameters) -> Dict[str, Any]:
    return client.request('GET', folder_path(params.folder))


@registry.register("folder", "getMany", GetManyParameters)
def list_folders(client, params: GetManyParameters) -> List[Any]:
    return get_many(client, FOLDERS_PATH, params)


@registry.register("folder", "update", UpdateFolderParameters)
def update_folder(client, params: UpdateFolderParameters) -> Dict[str, Any]:
    return client.mutate('PUT', folder_path(params.folder), body=params.additional_fields)


@registry.register("folder", "delete", FolderParameters)
def delete_folder(client, params: FolderParameters) -> Dict[str, Any]:
    client.mutate('DELETE', folder_path(params.folder))
    return deleted("folder", params.folder)
