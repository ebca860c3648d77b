import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json
import pytest
from fastapi.testclient import TestClient

import main
from access_console.core.config import settings
from access_console.schemas.application import Application
from access_console.schemas.menu import Menu
from access_console.schemas.permission import Permission
from access_console.services.catalog import FixtureCatalogProvider
from access_console.utils import deps


@pytest.fixture(scope="session")
def catalog_document():
    with open(settings.CATALOG_FIXTURE_PATH, encoding="utf-8") as fh:
        return json.load(fh)

@pytest.fixture(scope="function")
def client(catalog_document):
    main.app.dependency_overrides[deps.get_catalog] = lambda: FixtureCatalogProvider(document=catalog_document)
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def permission_factory():
    def _permission_factory(permission_id, menu_id=None, action="view"):
        return Permission(
            id=permission_id,
            name=f"Permission {permission_id}",
            code=f"perm.{permission_id}.{action}",
            resource=f"perm.{permission_id}",
            action=action,
            menu_id=menu_id,
        )
    return _permission_factory

@pytest.fixture
def menu_factory(permission_factory):
    def _menu_factory(menu_id, parent_id=None, is_active=True, application_id=1, permission_ids=(), sort_order=0, name=None):
        return Menu(
            id=menu_id,
            application_id=application_id,
            parent_id=parent_id,
            name=name or f"Menu {menu_id}",
            code=f"menu_{menu_id}",
            is_active=is_active,
            sort_order=sort_order,
            permissions=[permission_factory(pid, menu_id=menu_id) for pid in permission_ids],
        )
    return _menu_factory

@pytest.fixture
def scenario_application(permission_factory, menu_factory):
    """A1 with direct permission P1 and active menu M1 holding P2 and P3."""
    return Application(
        id=1,
        name="A1",
        code="a1",
        is_active=True,
        permissions=[permission_factory(1, action="access")],
        menus=[menu_factory(10, permission_ids=(2, 3))],
    )

@pytest.fixture
def second_application(permission_factory, menu_factory):
    return Application(
        id=2,
        name="A2",
        code="a2",
        is_active=True,
        permissions=[permission_factory(4, action="access")],
        menus=[menu_factory(20, application_id=2, permission_ids=(5, 6))],
    )
