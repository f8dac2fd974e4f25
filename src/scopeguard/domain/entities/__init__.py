"""Domain entities."""

from scopeguard.domain.entities.doc import Doc
from scopeguard.domain.entities.permission import (
    APPS_DOCTYPE,
    PERMISSIONS_DOCTYPE,
    Permission,
    app_source_id,
)
from scopeguard.domain.entities.permission_set import PermissionSet
from scopeguard.domain.entities.rule import Rule
from scopeguard.domain.entities.trigger import SharingMessage, Trigger, event_arguments

__all__ = [
    "APPS_DOCTYPE",
    "Doc",
    "PERMISSIONS_DOCTYPE",
    "Permission",
    "PermissionSet",
    "Rule",
    "SharingMessage",
    "Trigger",
    "app_source_id",
    "event_arguments",
]
