import logging
from typing import Iterable, List, Optional

from access_console.schemas.application import Application, ApplicationWithChecked
from access_console.schemas.menu import Menu
from access_console.schemas.selection import SelectionPayload, SelectionState, UserPrivilegePayload

logger = logging.getLogger(__name__)


def application_permission_ids(application: Application) -> List[int]:
    """Ids of the application's own permissions followed by every menu's."""
    ids = [p.id for p in application.permissions]
    for menu in application.menus:
        ids.extend(p.id for p in menu.permissions)
    return ids


def find_application(applications: List[Application], application_id: int) -> Optional[Application]:
    return next((a for a in applications if a.id == application_id), None)


def find_menu(applications: List[Application], menu_id: int) -> Optional[Menu]:
    for application in applications:
        for menu in application.menus:
            if menu.id == menu_id:
                return menu
    return None


class SelectionService:
    """Selection transitions for the role and direct-privilege builders.

    Every method takes the current ``SelectionState`` and returns a new one.
    Ids are not checked against the loaded graph here; callers only offer ids
    they received from the catalog.
    """

    def empty(self) -> SelectionState:
        return SelectionState()

    def seed(self, application_ids: Iterable[int], permission_ids: Iterable[int]) -> SelectionState:
        return SelectionState(
            selected_application_ids=frozenset(application_ids),
            selected_permission_ids=frozenset(permission_ids),
        )

    def seed_from_checked(self, available_applications: List[ApplicationWithChecked]) -> SelectionState:
        """Pre-seed from a role-edit read, keeping whatever is ``is_checked``."""
        application_ids = [app.id for app in available_applications if app.is_checked]
        permission_ids = []
        for app in available_applications:
            permission_ids.extend(p.id for p in app.permissions if p.is_checked)
            for menu in app.menus:
                permission_ids.extend(p.id for p in menu.permissions if p.is_checked)
        return self.seed(application_ids, permission_ids)

    def toggle_application(self, state: SelectionState, application_id: int, applications: List[Application]) -> SelectionState:
        if application_id not in state.selected_application_ids:
            return state.model_copy(update={
                "selected_application_ids": state.selected_application_ids | {application_id},
            })

        remaining_permissions = state.selected_permission_ids
        application = find_application(applications, application_id)
        if application is not None:
            remaining_permissions = remaining_permissions - set(application_permission_ids(application))
            dropped = len(state.selected_permission_ids) - len(remaining_permissions)
            if dropped:
                logger.debug(f"Deselecting application {application_id} dropped {dropped} permission(s)")

        return state.model_copy(update={
            "selected_application_ids": state.selected_application_ids - {application_id},
            "selected_permission_ids": remaining_permissions,
        })

    def toggle_permission(self, state: SelectionState, permission_id: int) -> SelectionState:
        return state.model_copy(update={
            "selected_permission_ids": state.selected_permission_ids ^ {permission_id},
        })

    def toggle_all_menu_permissions(self, state: SelectionState, menu: Menu) -> SelectionState:
        """Select every permission of ``menu`` unless all are already selected.

        Resolved as one update: any unselected permission means select all.
        """
        menu_permission_ids = {p.id for p in menu.permissions}
        if not menu_permission_ids:
            return state

        if menu_permission_ids <= state.selected_permission_ids:
            selected = state.selected_permission_ids - menu_permission_ids
        else:
            selected = state.selected_permission_ids | menu_permission_ids
        return state.model_copy(update={"selected_permission_ids": selected})

    def clear_all(self) -> SelectionState:
        return SelectionState()

    def prune_stale(self, state: SelectionState, applications: List[Application]) -> SelectionState:
        """Drop ids that the loaded graph no longer contains.

        Never applied implicitly by the other transitions.
        """
        known_applications = {app.id for app in applications}
        known_permissions = set()
        for app in applications:
            known_permissions.update(application_permission_ids(app))

        pruned = SelectionState(
            selected_application_ids=state.selected_application_ids & known_applications,
            selected_permission_ids=state.selected_permission_ids & known_permissions,
        )
        if pruned != state:
            logger.info(
                f"Pruned {len(state.selected_application_ids) - len(pruned.selected_application_ids)} application(s) "
                f"and {len(state.selected_permission_ids) - len(pruned.selected_permission_ids)} permission(s) from selection"
            )
        return pruned

    def to_payload(self, state: SelectionState) -> SelectionPayload:
        return SelectionPayload(
            applications=sorted(state.selected_application_ids),
            permissions=sorted(state.selected_permission_ids),
        )

    def to_user_privilege_payload(self, state: SelectionState, notes: str = "", expires_at=None) -> UserPrivilegePayload:
        payload = self.to_payload(state)
        return UserPrivilegePayload(
            applications=payload.applications,
            permissions=payload.permissions,
            notes=notes,
            expires_at=expires_at,
        )

selection_service = SelectionService()
