from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List

from access_console.schemas.menu import Menu, MenuWithChecked
from access_console.schemas.permission import Permission, PermissionWithChecked

class Application(BaseModel):
    """Top-level access unit with its application-level permissions and menus."""
    id: int
    name: str
    code: str
    description: Optional[str] = None
    url: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool = True
    permissions: List[Permission] = Field(default_factory=list)
    menus: List[Menu] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="after")
    def fill_menu_application_id(self):
        # The active-permission read omits application_id on nested menus.
        # Menu instances are stored as passed in, so filled ones are copies.
        if any(menu.application_id is None for menu in self.menus):
            self.menus = [
                menu if menu.application_id is not None else menu.model_copy(update={"application_id": self.id})
                for menu in self.menus
            ]
        return self

class ApplicationWithChecked(Application):
    """Application as returned by the role-edit read."""
    is_checked: bool = False
    permissions: List[PermissionWithChecked] = Field(default_factory=list)
    menus: List[MenuWithChecked] = Field(default_factory=list)
