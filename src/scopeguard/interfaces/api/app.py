"""Falcon ASGI application."""

import falcon
import falcon.asgi
from falcon.asgi import App

from scopeguard.interfaces.api.resources.health import HealthResource
from scopeguard.interfaces.api.resources.permissions import (
    AppPermissionResource,
    PermissionByCodeResource,
    SharePermissionsResource,
)
from scopeguard.interfaces.api.resources.sharings import SharingTriggersResource
from scopeguard.logging import get_logger

logger = get_logger(__name__)


async def handle_unexpected(req, resp, ex, params) -> None:
    """Log unexpected exceptions and answer 500 without leaking details."""
    logger.exception("unhandled_exception", method=req.method, path=req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    app_permission_resource: AppPermissionResource,
    share_permissions_resource: SharePermissionsResource,
    permission_by_code_resource: PermissionByCodeResource,
    sharing_triggers_resource: SharingTriggersResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/apps/{slug}/permissions", app_permission_resource)
    app.add_route("/v1/apps/{slug}/permissions/share", share_permissions_resource)
    app.add_route("/v1/permissions/codes/{code}", permission_by_code_resource)
    app.add_route("/v1/sharings/{sharing_id}/triggers", sharing_triggers_resource)
    return app
