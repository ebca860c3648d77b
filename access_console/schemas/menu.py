from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List

from access_console.schemas.permission import Permission, PermissionWithChecked

class Menu(BaseModel):
    """A navigable grouping inside an application.

    ``parent_id`` is a weak reference into the same application's menus.
    Any falsy value (``None``, ``0``, ``""``) means the menu is a root.
    """
    id: int
    application_id: Optional[int] = None
    parent_id: Optional[int] = None
    name: str
    code: str
    description: Optional[str] = None
    url: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
    permissions: List[Permission] = Field(default_factory=list)
    children: Optional[List[Menu]] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("parent_id", mode="before")
    @classmethod
    def normalize_parent_id(cls, v):
        if v is None or v == "" or v == 0 or v == "0":
            return None
        return v

class MenuWithChecked(Menu):
    permissions: List[PermissionWithChecked] = Field(default_factory=list)

class MenuNode(Menu):
    """Row of the menu-management tree view."""
    is_editable: bool = True
    children: List[MenuNode] = Field(default_factory=list)

class MenuEditability(BaseModel):
    menu_id: int
    is_editable: bool

Menu.model_rebuild()
MenuWithChecked.model_rebuild()
MenuNode.model_rebuild()
