from typing import List, Optional

from access_console.core.constants import ToggleDirectionEnum
from access_console.schemas.application import Application
from access_console.schemas.menu import Menu
from access_console.schemas.permission import Permission
from access_console.schemas.selection import SelectionState, SelectionSummary, SelectionView
from access_console.services.selection import application_permission_ids


class SelectionSummaryService:
    """Read-only projections of a selection used by both builder screens."""

    def summarize(self, application: Application, state: SelectionState) -> SelectionSummary:
        # Menu permissions are counted from the flat ``menus`` list; nested
        # ``children`` are never descended into.
        permission_ids = application_permission_ids(application)
        total = len(permission_ids)
        selected = sum(1 for pid in permission_ids if pid in state.selected_permission_ids)
        all_selected = selected == total
        return SelectionSummary(
            application_id=application.id,
            selected=selected,
            total=total,
            all_selected=all_selected,
            next_toggle=ToggleDirectionEnum.DESELECT if all_selected else ToggleDirectionEnum.SELECT,
        )

    def summarize_all(self, applications: List[Application], state: SelectionState) -> List[SelectionSummary]:
        return [self.summarize(app, state) for app in applications]

    def is_menu_fully_selected(self, menu: Menu, state: SelectionState) -> bool:
        return all(p.id in state.selected_permission_ids for p in menu.permissions)

    def filter_applications(self, applications: List[Application], search: Optional[str] = None) -> List[Application]:
        query = (search or "").strip().lower()
        if not query:
            return list(applications)
        return [
            app for app in applications
            if query in app.name.lower()
            or query in app.code.lower()
            or (app.description is not None and query in app.description.lower())
        ]

    def filter_permissions(self, permissions: List[Permission], search: Optional[str] = None) -> List[Permission]:
        query = (search or "").strip().lower()
        if not query:
            return list(permissions)
        return [
            p for p in permissions
            if query in p.name.lower() or query in p.code.lower() or query in p.action.lower()
        ]

    def selected_applications_preview(self, applications: List[Application], state: SelectionState, limit: int = 3) -> List[Application]:
        """First ``limit`` selected applications, in catalog order."""
        selected = [app for app in applications if app.id in state.selected_application_ids]
        return selected[:limit]

    def build_view(self, applications: List[Application], state: SelectionState, preview_limit: int = 3) -> SelectionView:
        # Menus without permissions have nothing to select and are left out.
        fully_selected = [
            menu.id
            for app in applications
            for menu in app.menus
            if menu.permissions and self.is_menu_fully_selected(menu, state)
        ]
        preview = self.selected_applications_preview(applications, state, limit=preview_limit)
        return SelectionView(
            state=state,
            summaries=self.summarize_all(applications, state),
            fully_selected_menu_ids=fully_selected,
            preview_application_ids=[app.id for app in preview],
        )

selection_summary_service = SelectionSummaryService()
