import logging
from typing import Dict, List, Optional, Set

from access_console.schemas.menu import Menu

logger = logging.getLogger(__name__)

class MenuTreeService:
    """Turns flat menu lists into parent/child forests."""

    def build_tree(self, menus: List[Menu]) -> List[Menu]:
        """Return the root menus, each carrying its ``children``.

        Input order is kept for siblings. A menu whose parent is not in
        ``menus`` becomes a root. The caller's menus are copied, never mutated.
        """
        nodes = [menu.model_copy(update={"children": []}) for menu in menus]
        index: Dict[int, Menu] = {}
        for node in nodes:
            index.setdefault(node.id, node)

        cyclic = self._cyclic_ids(index)

        roots: List[Menu] = []
        for node in nodes:
            parent = index.get(node.parent_id) if node.parent_id is not None else None
            if parent is None:
                if node.parent_id is not None:
                    logger.debug(f"Menu {node.id} references missing parent {node.parent_id}; treating as root")
                roots.append(node)
            elif node.id in cyclic and index[node.id] is node:
                logger.warning(f"Menu {node.id} is part of a cyclic parent chain; treating as root")
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    @staticmethod
    def _cyclic_ids(index: Dict[int, Menu]) -> Set[int]:
        """Ids lying on a parent cycle, found in one pass over ``index``."""
        state: Dict[int, int] = {}  # 1 = on the current path, 2 = resolved
        cyclic: Set[int] = set()
        for start in index:
            path: List[int] = []
            current: Optional[int] = start
            while current is not None and current in index and current not in state:
                state[current] = 1
                path.append(current)
                current = index[current].parent_id
            if current is not None and state.get(current) == 1:
                cyclic.update(path[path.index(current):])
            for menu_id in path:
                state[menu_id] = 2
        return cyclic

    def filter_menus(self, menus: List[Menu], search: Optional[str] = None, show_inactive: bool = True) -> List[Menu]:
        query = (search or "").strip().lower()
        result = []
        for menu in menus:
            if query and query not in menu.name.lower() and query not in menu.code.lower():
                continue
            if not show_inactive and not menu.is_active:
                continue
            result.append(menu)
        return result

    def parent_options(self, menus: List[Menu], application_id: Optional[int] = None, exclude_id: Optional[int] = None) -> List[Menu]:
        """Menus that may be chosen as the parent of ``exclude_id``.

        The menu itself and all of its descendants are left out so that a
        re-parent can never close a loop.
        """
        excluded = self.descendant_ids(menus, exclude_id) if exclude_id is not None else set()
        if exclude_id is not None:
            excluded.add(exclude_id)
        return [
            menu for menu in menus
            if menu.id not in excluded
            and (application_id is None or menu.application_id == application_id)
        ]

    def descendant_ids(self, menus: List[Menu], menu_id: int) -> Set[int]:
        children_of: Dict[int, List[int]] = {}
        for menu in menus:
            if menu.parent_id is not None:
                children_of.setdefault(menu.parent_id, []).append(menu.id)

        found: Set[int] = set()
        stack = list(children_of.get(menu_id, []))
        while stack:
            current = stack.pop()
            if current in found or current == menu_id:
                continue
            found.add(current)
            stack.extend(children_of.get(current, []))
        return found

    def sort_tree(self, forest: List[Menu]) -> List[Menu]:
        """Copy of ``forest`` with siblings ordered by ``sort_order``.

        ``sorted`` is stable, so equal sort orders keep their input order.
        """
        ordered = sorted(forest, key=lambda menu: menu.sort_order)
        return [
            menu.model_copy(update={"children": self.sort_tree(menu.children or [])})
            for menu in ordered
        ]

menu_tree_service = MenuTreeService()
