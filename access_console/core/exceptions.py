from typing import List


class CyclicMenuHierarchyError(Exception):
    """Raised when a menu's parent chain loops back on itself."""

    def __init__(self, menu_id: int, chain: List[int]):
        self.menu_id = menu_id
        self.chain = list(chain)
        path = " -> ".join(str(i) for i in self.chain)
        super().__init__(f"Menu {menu_id} has a cyclic parent chain: {path}")
