"""Force application permission use case."""

from scopeguard.domain.entities import APPS_DOCTYPE, Permission, PermissionSet, app_source_id
from scopeguard.domain.value_objects import PermissionType
from scopeguard.logging import get_logger

logger = get_logger(__name__)


class ForceAppPermissionUseCase:
    """Create or replace the permission record of an application (app update)."""

    def __init__(self, unit_of_work_factory: type, apps_doctype: str = APPS_DOCTYPE) -> None:
        self._uow_factory = unit_of_work_factory
        self._apps_doctype = apps_doctype

    async def execute(self, slug: str, permissions: PermissionSet) -> Permission:
        """Replace the whole set in place, keeping the record id."""
        source_id = app_source_id(slug, self._apps_doctype)
        async with self._uow_factory() as uow:
            existing = await uow.permissions.find_by_source(source_id, PermissionType.APPLICATION)
            permission = Permission(
                type=PermissionType.APPLICATION,
                source_id=source_id,
                permissions=permissions,
            )
            if not existing:
                await uow.permissions.create(permission)
                logger.info("app_permission_created", slug=slug, permission_id=permission.id)
                return permission

            permission.id = existing[0].id
            permission.rev = existing[0].rev
            await uow.permissions.update(permission)

        logger.info("app_permission_replaced", slug=slug, permission_id=permission.id)
        return permission
