"""Parameter access as offered by a workflow host."""

from typing import Any, Dict, List, Optional, Protocol


MISSING = object()


class ParameterSource(Protocol):
    """What the dispatcher needs from the embedding workflow host."""

    def get_parameter(self, name: str, item_index: int, default: Any = MISSING) -> Any:
        ...

    def item_count(self) -> int:
        ...

    def continue_on_fail(self) -> bool:
        ...


class ItemParameters:
    """In-process parameter source backed by one dict per input item."""

    def __init__(self, items: Optional[List[Dict[str, Any]]] = None, continue_on_fail: bool = False):
        self.items = items if items is not None else [{}]
        self._continue_on_fail = continue_on_fail

    def get_parameter(self, name: str, item_index: int, default: Any = MISSING) -> Any:
        """
        Return the value of ``name`` for one item.

        Raises:
            KeyError: The parameter is not set and no default was given
        """
        item = self.items[item_index]
        if name in item:
            return item[name]
        if default is MISSING:
            raise KeyError(f"Parameter '{name}' is not set for item {item_index}")
        return default

    def item_count(self) -> int:
        return len(self.items)

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail
