from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from access_console.schemas.application import Application
from access_console.schemas.menu import Menu, MenuEditability, MenuNode
from access_console.schemas.response import APIResponse
from access_console.services.menu_editability import menu_editability_service
from access_console.services.menu_tree import menu_tree_service
from access_console.utils import deps

router = APIRouter()


def _scoped_menus(applications: List[Application], application_id: Optional[int]) -> List[Menu]:
    menus: List[Menu] = []
    for application in applications:
        if application_id is None or application.id == application_id:
            menus.extend(application.menus)
    return menus

@router.get("/tree", response_model=APIResponse[List[MenuNode]])
def read_menu_tree(
    *,
    application_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    show_inactive: bool = Query(True),
    sorted_: bool = Query(False, alias="sorted"),
    applications: List[Application] = Depends(deps.get_active_applications)
):
    all_menus = _scoped_menus(applications, application_id)
    visible = menu_tree_service.filter_menus(all_menus, search=search, show_inactive=show_inactive)
    forest = menu_tree_service.build_tree(visible)
    if sorted_:
        forest = menu_tree_service.sort_tree(forest)
    nodes = menu_editability_service.annotate_tree(forest, all_menus)
    return APIResponse(message="Menu tree retrieved successfully", data=nodes)

@router.get("/parent-options", response_model=APIResponse[List[Menu]])
def read_parent_options(
    *,
    application_id: Optional[int] = Query(None),
    exclude_id: Optional[int] = Query(None),
    applications: List[Application] = Depends(deps.get_active_applications)
):
    all_menus = _scoped_menus(applications, None)
    options = menu_tree_service.parent_options(all_menus, application_id=application_id, exclude_id=exclude_id)
    return APIResponse(message="Parent options retrieved successfully", data=options)

@router.get("/{menu_id}/editable", response_model=APIResponse[MenuEditability])
def read_menu_editable(
    *,
    menu_id: int,
    applications: List[Application] = Depends(deps.get_active_applications)
):
    all_menus = _scoped_menus(applications, None)
    menu = next((m for m in all_menus if m.id == menu_id), None)
    if menu is None:
        raise HTTPException(status_code=404, detail="Menu not found")
    editable = menu_editability_service.is_editable(menu, all_menus)
    return APIResponse(message="Menu editability resolved", data=MenuEditability(menu_id=menu_id, is_editable=editable))
