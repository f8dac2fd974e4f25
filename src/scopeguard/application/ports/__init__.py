"""Application ports - interfaces for external adapters."""

from scopeguard.application.ports.repositories import (
    PermissionRepository,
    TriggerRepository,
)
from scopeguard.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionRepository",
    "TriggerRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
