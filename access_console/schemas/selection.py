from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Optional, List, FrozenSet
from datetime import datetime

from access_console.core.constants import ToggleDirectionEnum

class SelectionState(BaseModel):
    """Selected application and permission ids of one builder session.

    Immutable: every selection operation returns a new instance.
    """
    selected_application_ids: FrozenSet[int] = frozenset()
    selected_permission_ids: FrozenSet[int] = frozenset()

    model_config = ConfigDict(frozen=True)

    @field_serializer("selected_application_ids", "selected_permission_ids")
    def serialize_ids(self, ids: FrozenSet[int]) -> List[int]:
        return sorted(ids)

class SelectionSummary(BaseModel):
    """Selected/total permission counts for one application."""
    application_id: int
    selected: int
    total: int
    all_selected: bool
    next_toggle: ToggleDirectionEnum

    model_config = ConfigDict(use_enum_values=True)

class SelectionView(BaseModel):
    """Selection plus the projections the builder screens render."""
    state: SelectionState
    summaries: List[SelectionSummary] = Field(default_factory=list)
    fully_selected_menu_ids: List[int] = Field(default_factory=list)
    preview_application_ids: List[int] = Field(default_factory=list)

class SelectionRequest(BaseModel):
    state: SelectionState = Field(default_factory=SelectionState)

class ToggleApplicationRequest(SelectionRequest):
    application_id: int

class TogglePermissionRequest(SelectionRequest):
    permission_id: int

class ToggleMenuRequest(SelectionRequest):
    menu_id: int

class UserPrivilegeRequest(SelectionRequest):
    notes: str = Field("", max_length=1000)
    expires_at: Optional[datetime] = None

class SelectionPayload(BaseModel):
    """Flattened selection sent as the role create/update body."""
    applications: List[int] = Field(default_factory=list)
    permissions: List[int] = Field(default_factory=list)

class UserPrivilegePayload(SelectionPayload):
    """Flattened selection for a user's direct privileges."""
    notes: str = ""
    expires_at: Optional[datetime] = None
