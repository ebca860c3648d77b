from typing import List
from fastapi import APIRouter, Depends, HTTPException

from access_console.core.config import settings
from access_console.schemas.application import Application
from access_console.schemas.response import APIResponse
from access_console.schemas.selection import (
    SelectionPayload,
    SelectionRequest,
    SelectionState,
    SelectionView,
    ToggleApplicationRequest,
    ToggleMenuRequest,
    TogglePermissionRequest,
    UserPrivilegePayload,
    UserPrivilegeRequest,
)
from access_console.services.selection import find_menu, selection_service
from access_console.services.selection_summary import selection_summary_service
from access_console.utils import deps

router = APIRouter()


def _view(state: SelectionState, applications: List[Application]) -> SelectionView:
    return selection_summary_service.build_view(applications, state, preview_limit=settings.SELECTION_PREVIEW_LIMIT)

@router.post("/toggle-application", response_model=APIResponse[SelectionView])
def toggle_application(
    *,
    request_in: ToggleApplicationRequest,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    state = selection_service.toggle_application(request_in.state, request_in.application_id, applications)
    return APIResponse(message="Application selection updated", data=_view(state, applications))

@router.post("/toggle-permission", response_model=APIResponse[SelectionView])
def toggle_permission(
    *,
    request_in: TogglePermissionRequest,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    state = selection_service.toggle_permission(request_in.state, request_in.permission_id)
    return APIResponse(message="Permission selection updated", data=_view(state, applications))

@router.post("/toggle-menu", response_model=APIResponse[SelectionView])
def toggle_menu_permissions(
    *,
    request_in: ToggleMenuRequest,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    menu = find_menu(applications, request_in.menu_id)
    if menu is None:
        raise HTTPException(status_code=404, detail="Menu not found")
    state = selection_service.toggle_all_menu_permissions(request_in.state, menu)
    return APIResponse(message="Menu permissions updated", data=_view(state, applications))

@router.post("/clear", response_model=APIResponse[SelectionView])
def clear_selection(
    *,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    return APIResponse(message="Selection cleared", data=_view(selection_service.clear_all(), applications))

@router.post("/summary", response_model=APIResponse[SelectionView])
def summarize_selection(
    *,
    request_in: SelectionRequest,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    return APIResponse(message="Selection summarized", data=_view(request_in.state, applications))

@router.post("/prune", response_model=APIResponse[SelectionView])
def prune_selection(
    *,
    request_in: SelectionRequest,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    state = selection_service.prune_stale(request_in.state, applications)
    return APIResponse(message="Stale selections removed", data=_view(state, applications))

@router.post("/payload", response_model=APIResponse[SelectionPayload])
def build_role_payload(*, request_in: SelectionRequest):
    """Flattened ``applications``/``permissions`` arrays for a role request body."""
    return APIResponse(message="Payload built", data=selection_service.to_payload(request_in.state))

@router.post("/user-payload", response_model=APIResponse[UserPrivilegePayload])
def build_user_privilege_payload(*, request_in: UserPrivilegeRequest):
    payload = selection_service.to_user_privilege_payload(
        request_in.state,
        notes=request_in.notes,
        expires_at=request_in.expires_at,
    )
    return APIResponse(message="Payload built", data=payload)
