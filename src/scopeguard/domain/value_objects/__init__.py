"""Domain value objects."""

from scopeguard.domain.value_objects.permission_type import PermissionType
from scopeguard.domain.value_objects.verbs import ALL_LITERAL, Verb, VerbSet

__all__ = [
    "ALL_LITERAL",
    "PermissionType",
    "Verb",
    "VerbSet",
]
