import logging
from typing import Dict, List, Optional

from access_console.core.exceptions import CyclicMenuHierarchyError
from access_console.schemas.menu import Menu, MenuNode

logger = logging.getLogger(__name__)

class MenuEditabilityService:
    """Answers whether a menu may be edited.

    A menu is editable when every ancestor up to its root is active. The
    menu's own ``is_active`` flag is not part of the rule, so root menus are
    always editable. A parent reference that resolves to nothing ends the
    walk as editable.
    """

    def get_parent_menu(self, menu_id: int, all_menus: List[Menu]) -> Optional[Menu]:
        current = next((m for m in all_menus if m.id == menu_id), None)
        if current is None or current.parent_id is None:
            return None
        return next((m for m in all_menus if m.id == current.parent_id), None)

    def is_editable(self, menu: Menu, all_menus: List[Menu]) -> bool:
        index: Dict[int, Menu] = {}
        for m in all_menus:
            index.setdefault(m.id, m)
        return self._walk(menu, index)

    def _walk(self, menu: Menu, index: Dict[int, Menu]) -> bool:
        chain = [menu.id]
        visited = {menu.id}
        current = menu
        while current.parent_id is not None:
            parent = index.get(current.parent_id)
            if parent is None:
                return True
            if not parent.is_active:
                return False
            if parent.id in visited:
                chain.append(parent.id)
                logger.warning(f"Cyclic parent chain detected while resolving menu {menu.id}: {chain}")
                raise CyclicMenuHierarchyError(menu.id, chain)
            visited.add(parent.id)
            chain.append(parent.id)
            current = parent
        return True

    def editability_map(self, all_menus: List[Menu]) -> Dict[int, bool]:
        """Editability of every menu; members of a parent cycle map to False."""
        index: Dict[int, Menu] = {}
        for m in all_menus:
            index.setdefault(m.id, m)
        result: Dict[int, bool] = {}
        for m in all_menus:
            try:
                result[m.id] = self._walk(m, index)
            except CyclicMenuHierarchyError:
                result[m.id] = False
        return result

    def annotate_tree(self, forest: List[Menu], all_menus: List[Menu]) -> List[MenuNode]:
        """Convert a built forest into tree-view rows with ``is_editable`` set."""
        editable = self.editability_map(all_menus)

        def to_node(menu: Menu) -> MenuNode:
            data = menu.model_dump(exclude={"children"})
            return MenuNode(
                **data,
                is_editable=editable.get(menu.id, True),
                children=[to_node(child) for child in (menu.children or [])],
            )

        return [to_node(menu) for menu in forest]

menu_editability_service = MenuEditabilityService()
