"""Application entry point and composition root."""

from scopeguard import __version__
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
from scopeguard.application.use_cases.sharing.add_sharing_trigger import (
    AddSharingTriggerUseCase,
)
from scopeguard.config import get_settings
from scopeguard.infrastructure.persistence.postgres.connection import create_pool
from scopeguard.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from scopeguard.interfaces.api.app import create_app
from scopeguard.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from scopeguard.interfaces.api.resources.health import HealthResource
from scopeguard.interfaces.api.resources.permissions import (
    AppPermissionResource,
    PermissionByCodeResource,
    SharePermissionsResource,
)
from scopeguard.interfaces.api.resources.sharings import SharingTriggersResource
from scopeguard.logging import configure_logging, get_logger


def main() -> None:
    """CLI entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    get_logger(__name__).info("starting", version=__version__, port=settings.port)
    uvicorn.run(create_scopeguard_app(), host=settings.host, port=settings.port)


def create_scopeguard_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)
    pool = create_pool(settings)
    uow_factory = create_uow_factory(pool)
    apps_doctype = settings.apps_doctype

    get_app_permission = GetAppPermissionUseCase(uow_factory, apps_doctype=apps_doctype)
    create_app_permission = CreateAppPermissionUseCase(uow_factory, apps_doctype=apps_doctype)
    force_app_permission = ForceAppPermissionUseCase(uow_factory, apps_doctype=apps_doctype)
    destroy_app_permissions = DestroyAppPermissionsUseCase(uow_factory, apps_doctype=apps_doctype)
    create_share_permission = CreateSharePermissionUseCase(uow_factory)
    get_by_code = GetSharePermissionByCodeUseCase(uow_factory)
    add_sharing_trigger = AddSharingTriggerUseCase(
        uow_factory, worker_type=settings.sharing_worker_type
    )

    return create_app(
        app_permission_resource=AppPermissionResource(
            get_app_permission,
            create_app_permission,
            force_app_permission,
            destroy_app_permissions,
        ),
        share_permissions_resource=SharePermissionsResource(
            get_app_permission, create_share_permission
        ),
        permission_by_code_resource=PermissionByCodeResource(get_by_code),
        sharing_triggers_resource=SharingTriggersResource(add_sharing_trigger),
        health_resource=HealthResource(pool),
        middleware=[PoolLifespanMiddleware(pool)],
    )


if __name__ == "__main__":
    main()
