from enum import Enum


class ToggleDirectionEnum(str, Enum):
    SELECT = "select"
    DESELECT = "deselect"

class CatalogEndpoint(str, Enum):
    ACTIVE_APPLICATIONS = "/applications/active-permission"
    ROLE_FOR_EDIT = "/roles/{role_id}"

class ErrorCodeEnum(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CYCLIC_MENU_HIERARCHY = "CYCLIC_MENU_HIERARCHY"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
