"""
Permissions Configuration
This config defines which actions each profile role may perform and the
navigation menu derived from it. Used by the API's route guards and by the
/auth/me response that drives menu rendering.
"""

from enum import Enum
from typing import List, Optional, Union

from audit_manager.core.enums import Role


class Action(str, Enum):
    VIEW_DASHBOARD = "view_dashboard"
    MANAGE_USERS = "manage_users"
    MANAGE_CLIENTS = "manage_clients"
    MANAGE_FORM_TEMPLATES = "manage_form_templates"
    TASKS = "tasks"
    AUDITS = "audits"
    CHECKLISTS = "checklists"
    DOCUMENTS = "documents"
    OWN_PROFILE = "own_profile"


# Everything not listed here is open to every authenticated role
ADMIN_ONLY_ACTIONS = frozenset({
    Action.MANAGE_USERS,
    Action.MANAGE_CLIENTS,
    Action.MANAGE_FORM_TEMPLATES,
})

# Navigation menu, in display order
MENU_ITEMS = [
    {"id": "dashboard", "label": "Dashboard", "action": Action.VIEW_DASHBOARD},
    {"id": "clients", "label": "Clients", "action": Action.MANAGE_CLIENTS},
    {"id": "users", "label": "User Management", "action": Action.MANAGE_USERS},
    {"id": "tasks", "label": "Tasks", "action": Action.TASKS},
    {"id": "audits", "label": "Audits", "action": Action.AUDITS},
    {"id": "checklists", "label": "Checklists", "action": Action.CHECKLISTS},
    {"id": "templates", "label": "Form Templates", "action": Action.MANAGE_FORM_TEMPLATES},
    {"id": "documents", "label": "Documents", "action": Action.DOCUMENTS},
    {"id": "profile", "label": "Profile", "action": Action.OWN_PROFILE},
]

ROLE_LABELS = {
    Role.ADMIN: "Administrator",
    Role.TEAM: "Team Member",
}


def _as_role(role: Union[Role, str, None]) -> Optional[Role]:
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def _as_action(action: Union[Action, str, None]) -> Optional[Action]:
    if isinstance(action, Action):
        return action
    # "manage users" and "Manage Users" name the same action as "manage_users"
    key = str(action or "").strip().lower().replace(" ", "_")
    try:
        return Action(key)
    except ValueError:
        return None


def visible_action(role: Union[Role, str, None], action: Union[Action, str, None]) -> bool:
    """True when a profile with this role may see/perform the action.

    Unknown or missing roles are not authenticated roles and see nothing.
    Unknown actions are refused for every role.
    """
    resolved = _as_role(role)
    if resolved is None:
        return False
    action = _as_action(action)
    if action is None:
        return False
    if action in ADMIN_ONLY_ACTIONS:
        return resolved == Role.ADMIN
    return True


def visible_menu(role: Union[Role, str, None]) -> List[dict]:
    """Menu entries for this role, without the internal action key."""
    return [
        {"id": item["id"], "label": item["label"]}
        for item in MENU_ITEMS
        if visible_action(role, item["action"])
    ]
