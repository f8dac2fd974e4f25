"""Kinds of permission records."""

from enum import StrEnum


class PermissionType(StrEnum):
    """Origin of a permission record."""

    REGISTER = "register"
    APPLICATION = "app"
    SHARING = "share"
    OAUTH = "oauth"
