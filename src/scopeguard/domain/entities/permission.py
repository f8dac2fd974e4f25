"""Permission record - a stored permission set and where it comes from."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from scopeguard.domain.entities.permission_set import PermissionSet
from scopeguard.domain.entities.rule import Rule
from scopeguard.domain.value_objects import PermissionType, VerbSet

PERMISSIONS_DOCTYPE = "io.cozy.permissions"
APPS_DOCTYPE = "io.cozy.apps"


def app_source_id(slug: str, apps_doctype: str = APPS_DOCTYPE) -> str:
    """source_id shared by an app's permission and every share derived from it."""
    return f"{apps_doctype}/{slug}"


@dataclass
class Permission:
    """Permission record.

    `source_id` points at the owner (``io.cozy.apps/<slug>`` for an app and
    for every share derived from it), so all records of an app can be found
    and removed together. `codes` maps a recipient key to the redemption code
    handed to that recipient.
    """

    type: PermissionType
    source_id: str
    permissions: PermissionSet
    id: str | None = None
    rev: str | None = None
    expires_at: datetime | None = None
    codes: dict[str, str] = field(default_factory=dict)

    @property
    def doctype(self) -> str:
        return PERMISSIONS_DOCTYPE

    @property
    def self_link(self) -> str:
        return f"/permissions/{self.id}"

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or datetime.now(UTC))

    def has_code(self, code: str) -> bool:
        return code in self.codes.values()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "rev": self.rev,
            "type": self.type.value,
            "source_id": self.source_id,
            "permissions": self.permissions.to_list(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }
        if self.codes:
            result["codes"] = dict(self.codes)
        return result

    @classmethod
    def for_register_token(cls, settings_doctype: str, instance_settings_id: str) -> "Permission":
        """Non-persisted record for the register token: read the instance settings."""
        return cls(
            type=PermissionType.REGISTER,
            source_id="",
            permissions=PermissionSet(
                [
                    Rule(
                        type=settings_doctype,
                        verbs=VerbSet.of("GET"),
                        values=(instance_settings_id,),
                    )
                ]
            ),
        )

    @classmethod
    def for_oauth(cls, scope: str, source_id: str = "") -> "Permission":
        """Non-persisted record from an OAuth token scope; raises InvalidScope."""
        return cls(
            type=PermissionType.OAUTH,
            source_id=source_id,
            permissions=PermissionSet.from_scope(scope),
        )
