"""Run a resource/operation over every input item."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from .api_client import CheckmkClient
from .config import AdapterConfig, CheckmkCredentials
from .exceptions import CheckmkError, ParameterValidationError
from .parameters import ItemParameters, ParameterSource
from .resources import ActionParameters, ActionRegistry, registry as default_registry
from .transport import HttpTransport

_ABSENT = object()


@dataclass
class ItemResult:
    """One output record, paired with the input item it came from."""

    item_index: int
    data: Any = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.error} if self.error is not None else self.data
        return {"json": payload, "pairedItem": {"item": self.item_index}}


class ResourceDispatcher:
    """Routes a resource/operation pair to its registered handler.

    A fresh ``CheckmkClient`` is built for each execution, so nothing
    learned from the server outlives a single run.
    """

    def __init__(
        self,
        credentials: CheckmkCredentials,
        registry: Optional[ActionRegistry] = None,
        default_limit: int = 50,
        transport: Optional[HttpTransport] = None,
    ):
        self.credentials = credentials
        self.registry = registry or default_registry
        self.default_limit = default_limit
        self.transport = transport
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: AdapterConfig, **kwargs) -> "ResourceDispatcher":
        return cls(config.credentials, default_limit=config.default_limit, **kwargs)

    def read_parameters(
        self,
        model: type,
        source: ParameterSource,
        item_index: int,
        resource: str = None,
        operation: str = None,
    ) -> ActionParameters:
        """
        Collect and validate the parameters of one item.

        Raises:
            ParameterValidationError: The values do not satisfy the model
        """
        raw: Dict[str, Any] = {}
        for name, field in model.model_fields.items():
            key = field.alias or to_camel(name)
            value = source.get_parameter(key, item_index, _ABSENT)
            if value is not _ABSENT:
                raw[key] = value

        if "limit" in model.model_fields and "limit" not in raw:
            raw["limit"] = self.default_limit

        try:
            return model.model_validate(raw)
        except ValidationError as e:
            raise ParameterValidationError(
                f"Invalid parameters for {resource}.{operation}",
                errors=e.errors(),
                resource=resource,
                operation=operation,
            ) from e

    def execute(self, resource: str, operation: str, parameters: ParameterSource) -> List[ItemResult]:
        """
        Execute an operation once per input item.

        Args:
            resource: Resource name, e.g. ``host``
            operation: Operation name, e.g. ``getMany``
            parameters: Source of the per-item parameter values

        Returns:
            Output records in input order; list results yield one record per
            element

        Raises:
            UnsupportedActionError: Unknown resource/operation pair
            CheckmkError: First item failure, unless continue_on_fail is set;
                other exceptions are wrapped in CheckmkError
        """
        action = self.registry.get(resource, operation)
        client = CheckmkClient(self.credentials, transport=self.transport)
        continue_on_fail = parameters.continue_on_fail()
        results: List[ItemResult] = []

        for index in range(parameters.item_count()):
            try:
                params = self.read_parameters(action.parameters, parameters, index, resource, operation)
                self.logger.debug(f"Running {resource}.{operation} for item {index}")
                data = action.handler(client, params)
            except Exception as e:
                error = e
                if not isinstance(e, CheckmkError):
                    error = CheckmkError(f"Unexpected error in {resource}.{operation}: {e}")
                    error.__cause__ = e
                if not continue_on_fail:
                    if error is e:
                        raise
                    raise error
                self.logger.warning(f"{resource}.{operation} failed for item {index}: {error}")
                results.append(ItemResult(index, error=str(error)))
                continue

            if isinstance(data, list):
                results.extend(ItemResult(index, data=record) for record in data)
            else:
                results.append(ItemResult(index, data=data))

        return results


def run_action(
    config: AdapterConfig,
    resource: str,
    operation: str,
    items: Optional[List[Dict[str, Any]]] = None,
    transport: Optional[HttpTransport] = None,
) -> List[Dict[str, Any]]:
    """Convenience wrapper running one action over plain parameter dicts."""
    dispatcher = ResourceDispatcher.from_config(config, transport=transport)
    source = ItemParameters(items, continue_on_fail=config.continue_on_fail)
    return [result.to_dict() for result in dispatcher.execute(resource, operation, source)]
