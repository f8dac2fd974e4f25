"""Create sharing permission use case."""

from datetime import datetime

from scopeguard.domain.entities import Permission, PermissionSet
from scopeguard.domain.exceptions import NotSubset, OnlyAppCanDerive
from scopeguard.domain.value_objects import PermissionType
from scopeguard.logging import get_logger

logger = get_logger(__name__)


class CreateSharePermissionUseCase:
    """Derive a restricted sharing permission from an application permission."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        parent: Permission,
        codes: dict[str, str],
        permissions: PermissionSet,
        expires_at: datetime | None = None,
    ) -> Permission:
        """Check derivation policy and containment, then store the share.

        Raises OnlyAppCanDerive when `parent` is not an app permission and
        NotSubset when `permissions` grants anything `parent` does not.
        """
        if parent.type != PermissionType.APPLICATION:
            logger.warning(
                "share_denied_parent_type",
                parent_id=parent.id,
                parent_type=parent.type.value,
            )
            raise OnlyAppCanDerive()

        if not permissions.is_subset_of(parent.permissions):
            logger.warning(
                "share_denied_not_subset",
                parent_id=parent.id,
                source_id=parent.source_id,
            )
            raise NotSubset()

        # Same source_id as the parent so uninstalling the app removes shares too
        permission = Permission(
            type=PermissionType.SHARING,
            source_id=parent.source_id,
            permissions=permissions,
            expires_at=expires_at,
            codes=dict(codes),
        )
        async with self._uow_factory() as uow:
            await uow.permissions.create(permission)

        logger.info(
            "share_permission_created",
            permission_id=permission.id,
            source_id=permission.source_id,
            codes=len(permission.codes),
        )
        return permission
