"""Repository ports."""

from scopeguard.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from scopeguard.application.ports.repositories.trigger_repository import (
    TriggerRepository,
)

__all__ = [
    "PermissionRepository",
    "TriggerRepository",
]
