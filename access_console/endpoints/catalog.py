from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from access_console.core.config import settings
from access_console.schemas.application import Application
from access_console.schemas.permission import Permission
from access_console.schemas.response import APIResponse
from access_console.schemas.selection import SelectionView
from access_console.services.selection import find_application, selection_service
from access_console.services.selection_summary import selection_summary_service
from access_console.utils import deps

router = APIRouter()

@router.get("/applications", response_model=APIResponse[List[Application]])
def read_active_applications(
    *,
    search: Optional[str] = Query(None),
    applications: List[Application] = Depends(deps.get_active_applications)
):
    """Active application graph, optionally narrowed by name, code or description."""
    filtered = selection_summary_service.filter_applications(applications, search)
    return APIResponse(message="Applications retrieved successfully", data=filtered)

@router.get("/applications/{application_id}/permissions", response_model=APIResponse[List[Permission]])
def read_application_permissions(
    *,
    application_id: int,
    search: Optional[str] = Query(None),
    applications: List[Application] = Depends(deps.get_active_applications)
):
    application = find_application(applications, application_id)
    if application is None:
        raise HTTPException(status_code=404, detail="Application not found")
    permissions = list(application.permissions)
    for menu in application.menus:
        permissions.extend(menu.permissions)
    filtered = selection_summary_service.filter_permissions(permissions, search)
    return APIResponse(message="Permissions retrieved successfully", data=filtered)

@router.get("/roles/{role_id}/selection", response_model=APIResponse[SelectionView])
async def read_role_selection(
    *,
    role_id: int,
    catalog=Depends(deps.get_catalog),
    applications: List[Application] = Depends(deps.get_active_applications)
):
    """Selection pre-seeded from a role's checked applications and permissions."""
    role_edit = await catalog.get_role_for_edit(role_id)
    state = selection_service.seed_from_checked(role_edit.available_applications)
    view = selection_summary_service.build_view(applications, state, preview_limit=settings.SELECTION_PREVIEW_LIMIT)
    return APIResponse(message="Role selection retrieved successfully", data=view)
