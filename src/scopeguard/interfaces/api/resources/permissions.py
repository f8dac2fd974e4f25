"""Permissions API resources."""

from datetime import UTC, datetime
from typing import Any

import falcon.asgi

from scopeguard.application.use_cases.permission.create_app_permission import (
    CreateAppPermissionUseCase,
)
from scopeguard.application.use_cases.permission.create_share_permission import (
    CreateSharePermissionUseCase,
)
from scopeguard.application.use_cases.permission.destroy_app_permissions import (
    DestroyAppPermissionsUseCase,
)
from scopeguard.application.use_cases.permission.force_app_permission import (
    ForceAppPermissionUseCase,
)
from scopeguard.application.use_cases.permission.get_permission import (
    GetAppPermissionUseCase,
    GetSharePermissionByCodeUseCase,
)
from scopeguard.domain.entities import Permission, PermissionSet
from scopeguard.domain.exceptions import (
    AlreadyExists,
    DestroyIncomplete,
    InconsistentState,
    InvalidScope,
    NotFound,
    PermissionDenied,
    RevisionConflict,
    ValidationError,
)


def permission_media(permission: Permission) -> dict[str, Any]:
    """JSON body for a permission record, with its scope string when encodable."""
    media = permission.to_dict()
    try:
        media["scope"] = permission.permissions.to_scope()
    except InvalidScope:
        media["scope"] = None
    media["links"] = {"self": permission.self_link}
    return media


def _parse_permission_set(body: dict[str, Any]) -> PermissionSet:
    """Read a set from `scope` (string) or `permissions` (JSON rules)."""
    if "scope" in body:
        scope = body["scope"]
        if not isinstance(scope, str):
            raise ValidationError("scope must be a string")
        return PermissionSet.from_scope(scope)
    if "permissions" in body:
        return PermissionSet.from_json(body["permissions"])
    raise ValidationError("Missing required field: permissions or scope")


def _parse_codes(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) and v for k, v in value.items()
    ):
        raise ValidationError("codes must map strings to non-empty strings")
    return value


def _parse_expires_at(value: Any) -> datetime | None:
    if value is None:
        return None
    try:
        expires_at = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError("expires_at must be an ISO 8601 datetime") from None
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return expires_at


async def _get_body(req: falcon.asgi.Request) -> dict[str, Any]:
    body = await req.get_media(default_when_empty=None)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


class AppPermissionResource:
    """GET/PUT/DELETE /v1/apps/{slug}/permissions - an application's own grant."""

    def __init__(
        self,
        get_app_permission: GetAppPermissionUseCase,
        create_app_permission: CreateAppPermissionUseCase,
        force_app_permission: ForceAppPermissionUseCase,
        destroy_app_permissions: DestroyAppPermissionsUseCase,
    ) -> None:
        self._get = get_app_permission
        self._create = create_app_permission
        self._force = force_app_permission
        self._destroy = destroy_app_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        slug: str,
    ) -> None:
        """Get the app permission."""
        try:
            permission = await self._get.execute(slug)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        resp.media = permission_media(permission)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        slug: str,
    ) -> None:
        """Install the app permission; ?force=true replaces an existing one."""
        force = req.get_param_as_bool("force", default=False)
        try:
            body = await _get_body(req)
            permissions = _parse_permission_set(body)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            if force:
                permission = await self._force.execute(slug, permissions)
                resp.status = falcon.HTTP_200
            else:
                permission = await self._create.execute(slug, permissions)
                resp.status = falcon.HTTP_201
        except AlreadyExists as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        except RevisionConflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        resp.media = permission_media(permission)

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        slug: str,
    ) -> None:
        """Remove the app permission and every share derived from it."""
        try:
            await self._destroy.execute(slug)
        except DestroyIncomplete as e:
            resp.status = falcon.HTTP_500
            resp.media = {"error": str(e), "remaining": e.remaining}
            return
        resp.status = falcon.HTTP_204


class SharePermissionsResource:
    """POST /v1/apps/{slug}/permissions/share - derive a sharing permission."""

    def __init__(
        self,
        get_app_permission: GetAppPermissionUseCase,
        create_share_permission: CreateSharePermissionUseCase,
    ) -> None:
        self._get_app = get_app_permission
        self._create_share = create_share_permission

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        slug: str,
    ) -> None:
        """Create a share restricted to a subset of the app's permissions."""
        try:
            body = await _get_body(req)
            permissions = _parse_permission_set(body)
            codes = _parse_codes(body.get("codes"))
            expires_at = _parse_expires_at(body.get("expires_at"))
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            parent = await self._get_app.execute(slug)
            permission = await self._create_share.execute(
                parent, codes, permissions, expires_at=expires_at
            )
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except PermissionDenied as e:
            resp.status = falcon.HTTP_403
            resp.media = {"error": str(e)}
            return
        except AlreadyExists as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        resp.media = permission_media(permission)
        resp.status = falcon.HTTP_201


class PermissionByCodeResource:
    """GET /v1/permissions/codes/{code} - sharing permission of a redemption code."""

    def __init__(self, get_by_code: GetSharePermissionByCodeUseCase) -> None:
        self._get_by_code = get_by_code

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        code: str,
    ) -> None:
        try:
            permission = await self._get_by_code.execute(code)
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return
        except InconsistentState as e:
            resp.status = falcon.HTTP_500
            resp.media = {"error": str(e)}
            return
        resp.media = permission_media(permission)
        resp.status = falcon.HTTP_200
