from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime

from .application import ApplicationWithChecked

class RoleForEdit(BaseModel):
    """Role header returned alongside the checked application graph."""
    id: int
    name: str
    code: str
    description: Optional[str] = None
    is_admin: bool = False
    is_active: bool = True
    users_count: int = 0
    permissions_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class RoleEditResponse(BaseModel):
    role: RoleForEdit
    available_applications: List[ApplicationWithChecked] = []
