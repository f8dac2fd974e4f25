"""Permission lookup use cases."""

from datetime import datetime

from scopeguard.domain.entities import APPS_DOCTYPE, Permission, app_source_id
from scopeguard.domain.exceptions import InconsistentState, NotFound
from scopeguard.domain.value_objects import PermissionType
from scopeguard.logging import get_logger

logger = get_logger(__name__)


class GetAppPermissionUseCase:
    """Get the permission record of an application."""

    def __init__(self, unit_of_work_factory: type, apps_doctype: str = APPS_DOCTYPE) -> None:
        self._uow_factory = unit_of_work_factory
        self._apps_doctype = apps_doctype

    async def execute(self, slug: str) -> Permission:
        source_id = app_source_id(slug, self._apps_doctype)
        async with self._uow_factory() as uow:
            found = await uow.permissions.find_by_source(source_id, PermissionType.APPLICATION)
        if not found:
            raise NotFound(f"no permission doc for {slug}")
        return found[0]


class GetSharePermissionByCodeUseCase:
    """Get the sharing permission a redemption code was issued for."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, code: str, now: datetime | None = None) -> Permission:
        """Raises NotFound for unknown or expired codes, InconsistentState for reused ones."""
        async with self._uow_factory() as uow:
            found = await uow.permissions.find_by_code(code)
        shares = [p for p in found if p.type == PermissionType.SHARING]
        if not shares:
            raise NotFound("no permission doc for this code")
        if len(shares) > 1:
            # Codes are unique by construction: reported, never repaired here
            logger.error(
                "share_code_reused",
                permission_ids=[p.id for p in shares],
            )
            raise InconsistentState(f"several permission docs ({len(shares)}) for one code")
        share = shares[0]
        if share.is_expired(now):
            logger.info("share_code_expired", permission_id=share.id, expires_at=share.expires_at)
            raise NotFound("permission for this code has expired")
        return share
