"""Create application permission use case."""

from scopeguard.domain.entities import APPS_DOCTYPE, Permission, PermissionSet, app_source_id
from scopeguard.domain.exceptions import AlreadyExists
from scopeguard.domain.value_objects import PermissionType
from scopeguard.logging import get_logger

logger = get_logger(__name__)


class CreateAppPermissionUseCase:
    """Store the permission set an application was installed with."""

    def __init__(self, unit_of_work_factory: type, apps_doctype: str = APPS_DOCTYPE) -> None:
        self._uow_factory = unit_of_work_factory
        self._apps_doctype = apps_doctype

    async def execute(self, slug: str, permissions: PermissionSet) -> Permission:
        """Create the app record. No subset check: the manifest is the ceiling.

        Raises AlreadyExists when the app already has a record; the repository
        enforces the same rule atomically, so a concurrent install also ends
        in AlreadyExists.
        """
        source_id = app_source_id(slug, self._apps_doctype)
        async with self._uow_factory() as uow:
            existing = await uow.permissions.find_by_source(source_id, PermissionType.APPLICATION)
            if existing:
                raise AlreadyExists(f"There is already a permission doc for {slug}")

            permission = Permission(
                type=PermissionType.APPLICATION,
                source_id=source_id,
                permissions=permissions,
            )
            await uow.permissions.create(permission)

        logger.info(
            "app_permission_created",
            slug=slug,
            permission_id=permission.id,
            rules=len(permissions),
        )
        return permission
