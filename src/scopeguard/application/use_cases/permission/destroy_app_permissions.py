"""Destroy application permissions use case."""

from scopeguard.domain.entities import APPS_DOCTYPE, app_source_id
from scopeguard.domain.exceptions import DestroyIncomplete
from scopeguard.logging import get_logger

logger = get_logger(__name__)


class DestroyAppPermissionsUseCase:
    """Remove every permission record of an application, shares included."""

    def __init__(self, unit_of_work_factory: type, apps_doctype: str = APPS_DOCTYPE) -> None:
        self._uow_factory = unit_of_work_factory
        self._apps_doctype = apps_doctype

    async def execute(self, slug: str) -> list[str]:
        """Destroy all records of app `slug`; returns the deleted ids."""
        return await self.destroy_source(app_source_id(slug, self._apps_doctype))

    async def destroy_source(self, source_id: str) -> list[str]:
        """Delete records of `source_id` one transaction at a time.

        Deleting a record that is already gone is not an error, so a failed
        run can simply be repeated. A store failure midway raises
        DestroyIncomplete chained to the store error.
        """
        async with self._uow_factory() as uow:
            records = await uow.permissions.find_by_source(source_id)
        ids = [r.id for r in records if r.id is not None]

        deleted: list[str] = []
        for permission_id in ids:
            try:
                async with self._uow_factory() as uow:
                    await uow.permissions.delete(permission_id)
            except Exception as e:
                remaining = ids[len(deleted):]
                logger.error(
                    "destroy_incomplete",
                    source_id=source_id,
                    deleted=len(deleted),
                    remaining=remaining,
                    error=str(e),
                )
                raise DestroyIncomplete(source_id, deleted, remaining) from e
            deleted.append(permission_id)

        logger.info("permissions_destroyed", source_id=source_id, deleted=len(deleted))
        return deleted
