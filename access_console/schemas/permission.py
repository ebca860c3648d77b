from pydantic import BaseModel, ConfigDict

class Permission(BaseModel):
    """An atomic grantable capability, optionally scoped to a menu."""
    id: int
    name: str
    code: str
    description: str | None = None
    resource: str
    action: str
    menu_id: int | None = None

    model_config = ConfigDict(from_attributes=True)

class PermissionWithChecked(Permission):
    """Permission as returned by the role-edit read, with its grant flag."""
    is_checked: bool = False
