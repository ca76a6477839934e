"""Role → permission matrix table.

A permission matrix is stored on every admin as a nested mapping
``{resource: {action: bool}}``. Only the (resource, action) pairs listed in
:data:`PERMISSION_PAIRS` exist; any other pair is always denied, whatever
the stored matrix contains.
"""
import copy
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

PermissionMatrix = Dict[str, Dict[str, bool]]


class Role(str, Enum):
    SUPERADMIN = "superadmin"
    MODERATOR = "moderator"
    VIEWER = "viewer"


class Resource(str, Enum):
    USERS = "users"
    MESSAGES = "messages"
    ROOMS = "rooms"
    REPORTS = "reports"
    SYSTEM = "system"
    ADMINS = "admins"


class Action(str, Enum):
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE = "manage"


PERMISSION_PAIRS: Dict[Resource, Tuple[Action, ...]] = {
    Resource.USERS: (Action.VIEW, Action.EDIT, Action.DELETE),
    Resource.MESSAGES: (Action.VIEW, Action.DELETE),
    Resource.ROOMS: (Action.VIEW, Action.EDIT, Action.DELETE),
    Resource.REPORTS: (Action.VIEW, Action.MANAGE),
    Resource.SYSTEM: (Action.VIEW, Action.EDIT),
    Resource.ADMINS: (Action.VIEW, Action.MANAGE),
}


def _matrix(granted: Mapping[Resource, Tuple[Action, ...]]) -> PermissionMatrix:
    return {
        resource.value: {action.value: action in granted.get(resource, ()) for action in actions}
        for resource, actions in PERMISSION_PAIRS.items()
    }


ROLE_PERMISSIONS: Dict[Role, PermissionMatrix] = {
    Role.SUPERADMIN: _matrix(PERMISSION_PAIRS),
    Role.MODERATOR: _matrix({
        Resource.USERS: (Action.VIEW, Action.EDIT),
        Resource.MESSAGES: (Action.VIEW, Action.DELETE),
        Resource.ROOMS: (Action.VIEW,),
        Resource.REPORTS: (Action.VIEW, Action.MANAGE),
    }),
    Role.VIEWER: _matrix({
        Resource.USERS: (Action.VIEW,),
        Resource.MESSAGES: (Action.VIEW,),
        Resource.ROOMS: (Action.VIEW,),
        Resource.REPORTS: (Action.VIEW,),
    }),
}


def parse_role(role: Any) -> Optional[Role]:
    try:
        return Role(role)
    except ValueError:
        return None


def parse_permission(resource: Any, action: Any) -> Optional[Tuple[Resource, Action]]:
    """Return the typed pair, or None when it is not in the permission table."""
    try:
        typed = (Resource(resource), Action(action))
    except ValueError:
        return None
    if typed[1] not in PERMISSION_PAIRS[typed[0]]:
        return None
    return typed


def get_role_permissions(role: Any) -> PermissionMatrix:
    """Default matrix for ``role``; unknown roles get the viewer matrix."""
    typed = parse_role(role) or Role.VIEWER
    return copy.deepcopy(ROLE_PERMISSIONS[typed])


def has_permission(permissions: Optional[Mapping[str, Any]], resource: Any, action: Any) -> bool:
    """True iff (resource, action) is a known pair and its flag is exactly True."""
    pair = parse_permission(resource, action)
    if pair is None or not permissions:
        return False

    resource_flags = permissions.get(pair[0].value)
    if not isinstance(resource_flags, Mapping):
        return False
    return resource_flags.get(pair[1].value) is True


def normalize_permissions(permissions: Optional[Mapping[str, Any]], role: Any) -> PermissionMatrix:
    """Complete a (possibly partial) matrix from the role defaults.

    Known pairs keep their explicit boolean value when one is given; missing or
    non-boolean entries take the role default. Unknown resources and actions
    are dropped.
    """
    result = get_role_permissions(role)
    if not permissions:
        return result

    for resource, actions in result.items():
        given = permissions.get(resource)
        if not isinstance(given, Mapping):
            continue
        for action in actions:
            value = given.get(action)
            if isinstance(value, bool):
                actions[action] = value
    return result
