"""Tests for the role gate and the menu derived from it."""

import pytest

from audit_manager.config.permissions_config import (
    ADMIN_ONLY_ACTIONS,
    Action,
    visible_action,
    visible_menu,
)
from audit_manager.core.enums import Role


class TestVisibleAction:
    """Admin-only actions are hidden from every other role."""

    @pytest.mark.parametrize("role", [Role.TEAM, "team", "auditor", "", None])
    def test_manage_users_hidden_for_non_admin(self, role) -> None:
        assert visible_action(role, "manage_users") is False

    @pytest.mark.parametrize("role", [Role.ADMIN, "admin"])
    def test_manage_users_visible_for_admin(self, role) -> None:
        assert visible_action(role, "manage_users") is True

    @pytest.mark.parametrize("action", sorted(ADMIN_ONLY_ACTIONS, key=lambda a: a.value))
    def test_admin_only_actions(self, action: Action) -> None:
        assert visible_action(Role.ADMIN, action)
        assert not visible_action(Role.TEAM, action)

    @pytest.mark.parametrize("action", [
        Action.TASKS, Action.AUDITS, Action.CHECKLISTS,
        Action.DOCUMENTS, Action.OWN_PROFILE, Action.VIEW_DASHBOARD,
    ])
    def test_shared_actions_open_to_every_role(self, action: Action) -> None:
        assert visible_action(Role.ADMIN, action)
        assert visible_action(Role.TEAM, action)

    def test_unknown_role_sees_nothing(self) -> None:
        assert not any(visible_action("guest", action) for action in Action)

    @pytest.mark.parametrize("action", ["manage users", "Manage Users", " manage_users "])
    def test_spaced_action_names(self, action: str) -> None:
        assert visible_action(Role.ADMIN, action) is True
        assert visible_action(Role.TEAM, action) is False

    @pytest.mark.parametrize("action", ["delete everything", "", None])
    def test_unknown_action_is_refused(self, action) -> None:
        assert visible_action(Role.ADMIN, action) is False
        assert visible_action(Role.TEAM, action) is False


class TestVisibleMenu:
    def test_admin_menu_is_complete(self) -> None:
        ids = [item["id"] for item in visible_menu(Role.ADMIN)]
        assert ids == [
            "dashboard", "clients", "users", "tasks", "audits",
            "checklists", "templates", "documents", "profile",
        ]

    def test_team_menu_omits_admin_pages(self) -> None:
        ids = {item["id"] for item in visible_menu(Role.TEAM)}
        assert ids.isdisjoint({"clients", "users", "templates"})
        assert {"tasks", "audits", "checklists", "documents", "profile"} <= ids

    def test_menu_entries_hide_internal_action(self) -> None:
        for item in visible_menu(Role.ADMIN):
            assert set(item) == {"id", "label"}
