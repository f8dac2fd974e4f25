"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

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
from scopeguard.interfaces.api.app import create_app
from scopeguard.interfaces.api.resources.health import HealthResource
from scopeguard.interfaces.api.resources.permissions import (
    AppPermissionResource,
    PermissionByCodeResource,
    SharePermissionsResource,
)
from scopeguard.interfaces.api.resources.sharings import SharingTriggersResource


@pytest.fixture
def destroy_use_case(uow_factory) -> DestroyAppPermissionsUseCase:
    return DestroyAppPermissionsUseCase(unit_of_work_factory=uow_factory)


@pytest.fixture
def app(uow_factory, destroy_use_case):
    """Falcon ASGI app wired to the in-memory UnitOfWork."""
    get_app_permission = GetAppPermissionUseCase(unit_of_work_factory=uow_factory)
    return create_app(
        app_permission_resource=AppPermissionResource(
            get_app_permission,
            CreateAppPermissionUseCase(unit_of_work_factory=uow_factory),
            ForceAppPermissionUseCase(unit_of_work_factory=uow_factory),
            destroy_use_case,
        ),
        share_permissions_resource=SharePermissionsResource(
            get_app_permission,
            CreateSharePermissionUseCase(unit_of_work_factory=uow_factory),
        ),
        permission_by_code_resource=PermissionByCodeResource(
            GetSharePermissionByCodeUseCase(unit_of_work_factory=uow_factory)
        ),
        sharing_triggers_resource=SharingTriggersResource(
            AddSharingTriggerUseCase(unit_of_work_factory=uow_factory)
        ),
        health_resource=HealthResource(),
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
