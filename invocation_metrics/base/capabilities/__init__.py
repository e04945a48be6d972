"""Capabilities package.

Exports capability discovery, member enumeration and operation keys.
"""

from .discovery import (
    CapabilityMembers,
    declared_capabilities,
    enumerate_members,
    is_capability,
    normalize_capabilities,
)
from .operation_key import OperationKey, qualified_name, render_parameters

__all__ = [
    "CapabilityMembers",
    "OperationKey",
    "declared_capabilities",
    "enumerate_members",
    "is_capability",
    "normalize_capabilities",
    "qualified_name",
    "render_parameters",
]
