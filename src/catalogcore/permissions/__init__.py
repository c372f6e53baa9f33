"""Capability registry and group profiles for the catalog.

Defines:
- Capabilities: all capability string constants
- UserGroup: caller groups
- GROUP_PROFILES: group → default capability sets
- expand_capabilities(): resolve groups into capabilities
"""

from .constants import Capabilities, UserGroup
from .inheritance import GROUP_PROFILES, expand_capabilities

__all__ = [
    "GROUP_PROFILES",
    "Capabilities",
    "UserGroup",
    "expand_capabilities",
]
