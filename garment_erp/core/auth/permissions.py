from enum import Enum
from typing import Dict, FrozenSet, Iterable

from garment_erp.core.models.user import UserRole


class Permission(str, Enum):
    READ_USER = "READ_USER"
    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"

    READ_PRODUCTION = "READ_PRODUCTION"
    CREATE_PRODUCTION = "CREATE_PRODUCTION"
    UPDATE_PRODUCTION = "UPDATE_PRODUCTION"
    DELETE_PRODUCTION = "DELETE_PRODUCTION"

    READ_CUTTING = "READ_CUTTING"
    CREATE_CUTTING = "CREATE_CUTTING"
    UPDATE_CUTTING = "UPDATE_CUTTING"
    DELETE_CUTTING = "DELETE_CUTTING"

    READ_CASHBOOK = "READ_CASHBOOK"
    CREATE_CASHBOOK = "CREATE_CASHBOOK"
    UPDATE_CASHBOOK = "UPDATE_CASHBOOK"
    DELETE_CASHBOOK = "DELETE_CASHBOOK"

    READ_EXPENSE = "READ_EXPENSE"
    CREATE_EXPENSE = "CREATE_EXPENSE"
    UPDATE_EXPENSE = "UPDATE_EXPENSE"
    DELETE_EXPENSE = "DELETE_EXPENSE"

    READ_TARGET = "READ_TARGET"
    CREATE_TARGET = "CREATE_TARGET"
    UPDATE_TARGET = "UPDATE_TARGET"
    DELETE_TARGET = "DELETE_TARGET"

    READ_LINE = "READ_LINE"
    CREATE_LINE = "CREATE_LINE"
    UPDATE_LINE = "UPDATE_LINE"
    DELETE_LINE = "DELETE_LINE"

    READ_SHIPMENT = "READ_SHIPMENT"
    CREATE_SHIPMENT = "CREATE_SHIPMENT"
    UPDATE_SHIPMENT = "UPDATE_SHIPMENT"
    DELETE_SHIPMENT = "DELETE_SHIPMENT"

    READ_REPORT = "READ_REPORT"
    CREATE_REPORT = "CREATE_REPORT"
    UPDATE_REPORT = "UPDATE_REPORT"
    DELETE_REPORT = "DELETE_REPORT"

    MANAGE_SYSTEM = "MANAGE_SYSTEM"
    MANAGE_ROLES = "MANAGE_ROLES"
    MANAGE_PERMISSIONS = "MANAGE_PERMISSIONS"


def _crud(*resources: str, actions: Iterable[str] = ("READ", "CREATE", "UPDATE", "DELETE")) -> set:
    return {Permission(f"{action}_{resource}") for resource in resources for action in actions}


# Static allow-list. Routes never consult the database for authorization.
ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[Permission]] = {
    UserRole.SUPER_ADMIN: frozenset(Permission),
    UserRole.ADMIN: frozenset(
        _crud("PRODUCTION", "CUTTING", "CASHBOOK", "EXPENSE", "TARGET", "LINE", "SHIPMENT")
        | _crud("USER", "REPORT", actions=("READ", "CREATE", "UPDATE"))
    ),
    UserRole.MANAGER: frozenset(
        _crud(
            "PRODUCTION", "CUTTING", "CASHBOOK", "EXPENSE", "TARGET", "LINE", "SHIPMENT",
            actions=("READ", "CREATE", "UPDATE"),
        )
        | _crud("REPORT", actions=("READ", "CREATE"))
    ),
    UserRole.PRODUCTION_MANAGER: frozenset(
        _crud("PRODUCTION", "TARGET", "LINE", actions=("READ", "CREATE", "UPDATE"))
        | {Permission.READ_REPORT}
    ),
    UserRole.CASHBOOK_MANAGER: frozenset(
        _crud("CASHBOOK", "EXPENSE", actions=("READ", "CREATE", "UPDATE"))
        | {Permission.READ_REPORT}
    ),
    UserRole.CUTTING_MANAGER: frozenset(
        _crud("PRODUCTION", "CUTTING", actions=("READ", "CREATE", "UPDATE"))
        | {Permission.READ_REPORT}
    ),
    UserRole.REPORT_VIEWER: frozenset(
        _crud(
            "PRODUCTION", "CUTTING", "CASHBOOK", "EXPENSE", "TARGET", "LINE", "SHIPMENT", "REPORT",
            actions=("READ",),
        )
    ),
    UserRole.USER: frozenset({Permission.READ_PRODUCTION, Permission.READ_REPORT}),
}


def get_role_permissions(role: UserRole) -> FrozenSet[Permission]:
    return ROLE_PERMISSIONS.get(UserRole(role), frozenset())


def has_permission(role: UserRole, permission: Permission) -> bool:
    return permission in get_role_permissions(role)


def has_any_permission(role: UserRole, permissions: Iterable[Permission]) -> bool:
    granted = get_role_permissions(role)
    return any(p in granted for p in permissions)
