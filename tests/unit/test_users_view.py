from __future__ import annotations

from swrzee_admin.app.ui.views.users_view import display_row, is_admin_row, row_actions, user_stats

USERS = [
    {"_id": "1", "userId": "SWZ001", "firstName": "Asha", "batchId": "B-1", "activeStatus": True, "paymentStatus": True},
    {"_id": "2", "userId": "SWZ002", "firstName": "Bela"},
    {"_id": "3", "userId": "SWZADMIN01", "firstName": "Chen"},
    {"_id": "4", "userId": "SWZSADMIN01", "firstName": "Diya"},
]


def test_user_stats_counts_roles_from_user_id() -> None:
    assert user_stats(USERS) == {"total": 4, "regular": 2, "admin": 1, "superadmin": 1}
    assert user_stats([]) == {"total": 0, "regular": 0, "admin": 0, "superadmin": 0}


def test_admin_detection_covers_super_admins() -> None:
    assert [is_admin_row(user) for user in USERS] == [False, False, True, True]
    assert is_admin_row({"_id": "5"}) is False


def test_display_row_masks_admin_identifiers() -> None:
    assert display_row(USERS[0])["batchId"] == "Assigned"
    assert display_row(USERS[0])["paymentStatus"] == "Paid"
    assert display_row(USERS[1])["batchId"] == "Unassigned"
    assert display_row(USERS[1])["activeStatus"] == "Inactive"
    admin = display_row(USERS[2])
    assert admin["userId"] == "Hidden"
    assert admin["batchId"] == "Executive"
    assert USERS[2]["userId"] == "SWZADMIN01"


def test_row_actions() -> None:
    assert row_actions(USERS[0]) == ["view", "edit", "delete"]
    assert row_actions(USERS[1]) == ["view", "edit", "delete", "assign"]
    assert row_actions(USERS[3]) == ["view"]
