"""Action registry and shared helpers for resource handlers."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..exceptions import UnsupportedActionError
from ..pagination import page_records

logger = logging.getLogger(__name__)


class ActionParameters(BaseModel):
    """Base for the typed parameters of one resource/operation pair.

    Field names are snake_case; the workflow host addresses them by their
    camelCase alias (``host_name`` is read from ``hostName``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def lift_additional_field(data: Any, field_name: str) -> Any:
    """
    Fill ``field_name`` from ``additionalFields`` when it is not set directly.

    Meant for ``model_validator(mode='before')``; the field may be given by
    name or camelCase alias, the top-level value wins.
    """
    if not isinstance(data, dict):
        return data

    alias = to_camel(field_name)
    if _is_set(data.get(alias)) or _is_set(data.get(field_name)):
        return data

    extra = data.get("additionalFields", data.get("additional_fields"))
    if isinstance(extra, dict) and _is_set(extra.get(alias)):
        data = dict(data)
        data[alias] = extra[alias]
    return data


class NoParameters(ActionParameters):
    """Operation without parameters."""


class GetManyParameters(ActionParameters):
    """Paging choice shared by every getMany operation."""

    return_all: bool = Field(False, description="Follow pagination and return every record")
    limit: int = Field(50, ge=1, description="Maximum records when return_all is off")


Handler = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class Action:
    """A resource/operation pair bound to its parameter model and handler."""

    resource: str
    operation: str
    parameters: Type[ActionParameters]
    handler: Handler
    description: str = ""


class ActionRegistry:
    """Lookup table from (resource, operation) to ``Action``."""

    def __init__(self):
        self._actions: Dict[tuple, Action] = {}

    def register(
        self,
        resource: str,
        operation: str,
        parameters: Type[ActionParameters] = NoParameters,
        description: str = "",
    ) -> Callable[[Handler], Handler]:
        """Decorator registering ``handler(client, params)`` for an action."""
        def decorator(handler: Handler) -> Handler:
            key = (resource, operation)
            if key in self._actions:
                raise ValueError(f"Action already registered: {resource}.{operation}")
            self._actions[key] = Action(
                resource=resource,
                operation=operation,
                parameters=parameters,
                handler=handler,
                description=description or (handler.__doc__ or "").strip(),
            )
            return handler
        return decorator

    def register_collection(self, resource: str, path: str, description: str = "") -> None:
        """Register a plain getMany action over a collection endpoint."""
        def handler(client, params: GetManyParameters) -> List[Any]:
            return get_many(client, path, params)

        self.register(resource, "getMany", GetManyParameters, description or f"List {resource} objects")(handler)

    def get(self, resource: str, operation: str) -> Action:
        try:
            return self._actions[(resource, operation)]
        except KeyError:
            raise UnsupportedActionError(
                f"Operation '{operation}' is not supported for resource '{resource}'",
                hint=f"Supported operations: {', '.join(self.operations(resource)) or 'none'}",
            ) from None

    def resources(self) -> List[str]:
        return sorted({resource for resource, _ in self._actions})

    def operations(self, resource: str) -> List[str]:
        return sorted(operation for res, operation in self._actions if res == resource)

    def __contains__(self, key) -> bool:
        return key in self._actions

    def __len__(self) -> int:
        return len(self._actions)


registry = ActionRegistry()


def get_many(client, path: str, params: GetManyParameters,
             query: Optional[Dict[str, Any]] = None) -> List[Any]:
    """
    List a collection.

    With ``return_all`` every page is fetched; otherwise a single request is
    made and its records are cut to ``limit``.
    """
    if params.return_all:
        return client.request_all_items('GET', path, query=query)

    response = client.request('GET', path, query=query)
    return page_records(response)[:params.limit]


def deleted(key: str, identifier: Any) -> Dict[str, Any]:
    """Result record emitted for a successful delete."""
    return {"success": True, key: identifier}
