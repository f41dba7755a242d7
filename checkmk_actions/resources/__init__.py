"""Resource/operation catalogue.

Importing this package registers every action with ``registry``.
"""

from .base import Action, ActionParameters, ActionRegistry, GetManyParameters, NoParameters, registry
from . import bi, folders, groups, hosts, monitoring, rules, system, users  # noqa: F401

__all__ = [
    "Action",
    "ActionParameters",
    "ActionRegistry",
    "GetManyParameters",
    "NoParameters",
    "registry",
]
