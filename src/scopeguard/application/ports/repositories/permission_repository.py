"""Permission repository port."""

from typing import Protocol

from scopeguard.domain.entities import Permission
from scopeguard.domain.value_objects import PermissionType


class PermissionRepository(Protocol):
    """Port for permission record persistence.

    `create` assigns `id` and `rev`; it must refuse a second app record for
    the same source_id with AlreadyExists. `update` must refuse a stale `rev`
    with RevisionConflict. `delete` of an absent id is a no-op.
    """

    async def get_by_id(self, permission_id: str) -> Permission | None: ...

    async def find_by_source(
        self, source_id: str, type: PermissionType | None = None
    ) -> list[Permission]: ...

    async def find_by_code(self, code: str) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def update(self, permission: Permission) -> Permission: ...

    async def delete(self, permission_id: str) -> None: ...
