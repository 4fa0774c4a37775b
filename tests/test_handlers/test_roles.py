"""
Unit tests for user & role management handlers.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from firebase_admin.auth import UserNotFoundError

from src.errors import Internal, InvalidArgument, NotFound, PermissionDenied, Unauthenticated
from src.handlers.auth import Caller
from src.handlers.roles import (
    add_admin_role,
    delete_employee,
    get_employees_with_admin_status,
    remove_admin_role,
)

ADMIN = Caller(uid="admin-1", token={"isAdmin": True})
EMPLOYEE = Caller(uid="emp-1", token={})


@pytest.fixture
def registry():
    return MagicMock()


@pytest.fixture
def store():
    return MagicMock()


def test_add_admin_role_requires_login(registry):
    with pytest.raises(Unauthenticated, match="Login required."):
        add_admin_role(None, {"email": "a@example.com"}, registry)


def test_add_admin_role_requires_admin(registry):
    with pytest.raises(PermissionDenied, match="Admins only."):
        add_admin_role(EMPLOYEE, {"email": "a@example.com"}, registry)
    registry.set_admin.assert_not_called()


@pytest.mark.parametrize("data", [
    {},
    {"email": ""},
    {"email": "   "},
    {"email": 123},
    {"email": ["a@example.com"]},
])
def test_add_admin_role_requires_email(registry, data):
    with pytest.raises(InvalidArgument):
        add_admin_role(ADMIN, data, registry)


def test_add_admin_role_success(registry):
    result = add_admin_role(ADMIN, {"email": "  a@example.com "}, registry)

    registry.set_admin.assert_called_once_with("a@example.com", True)
    assert result == {"message": "a@example.com is now an admin."}


def test_add_admin_role_unknown_user(registry):
    registry.set_admin.side_effect = UserNotFoundError("No user record found")

    with pytest.raises(NotFound, match="User not found."):
        add_admin_role(ADMIN, {"email": "ghost@example.com"}, registry)


def test_add_admin_role_provider_failure(registry):
    registry.set_admin.side_effect = RuntimeError("backend down")

    with pytest.raises(Internal, match="Could not set admin role."):
        add_admin_role(ADMIN, {"email": "a@example.com"}, registry)


def test_remove_admin_role_anonymous_is_permission_denied(registry):
    with pytest.raises(PermissionDenied, match="Only admins can modify roles."):
        remove_admin_role(None, {"email": "a@example.com"}, registry)


def test_remove_admin_role_success(registry):
    result = remove_admin_role(ADMIN, {"email": "a@example.com"}, registry)

    registry.set_admin.assert_called_once_with("a@example.com", False)
    assert result == {"message": "Admin role removed for a@example.com."}


def test_remove_admin_role_provider_failure(registry):
    registry.set_admin.side_effect = RuntimeError("backend down")

    with pytest.raises(Internal, match="Could not remove admin role."):
        remove_admin_role(ADMIN, {"email": "a@example.com"}, registry)


def test_delete_employee_guards(registry, store):
    with pytest.raises(Unauthenticated):
        delete_employee(None, {"uid": "u1"}, registry, store)
    with pytest.raises(PermissionDenied):
        delete_employee(EMPLOYEE, {"uid": "u1"}, registry, store)
    with pytest.raises(InvalidArgument):
        delete_employee(ADMIN, {}, registry, store)


def test_delete_employee_removes_account_then_profile(registry, store):
    calls = MagicMock()
    registry.delete_user.side_effect = lambda uid: calls("auth", uid)
    store.delete_employee.side_effect = lambda uid: calls("profile", uid)

    result = delete_employee(ADMIN, {"uid": "u1"}, registry, store)

    assert [c.args for c in calls.call_args_list] == [("auth", "u1"), ("profile", "u1")]
    assert result == {"message": "User account and profile deleted."}


def test_delete_employee_partial_failure_surfaces_message(registry, store):
    store.delete_employee.side_effect = RuntimeError("firestore unavailable")

    with pytest.raises(Internal, match="firestore unavailable"):
        delete_employee(ADMIN, {"uid": "u1"}, registry, store)
    registry.delete_user.assert_called_once_with("u1")


def test_get_employees_with_admin_status(registry, store):
    joined = datetime(2024, 1, 5, tzinfo=timezone.utc)
    registry.admin_uids.return_value = {"u2"}
    store.list_employees.return_value = [
        ("u1", {"name": "Asha", "joinedAt": joined}),
        ("u2", {"name": "Ravi"}),
    ]

    result = get_employees_with_admin_status(ADMIN, {}, registry, store)

    assert result == [
        {"id": "u1", "name": "Asha", "joinedAt": "2024-01-05T00:00:00+00:00", "isAdmin": False},
        {"id": "u2", "name": "Ravi", "isAdmin": True},
    ]


def test_get_employees_requires_admin(registry, store):
    with pytest.raises(PermissionDenied):
        get_employees_with_admin_status(EMPLOYEE, {}, registry, store)


def test_get_employees_provider_failure(registry, store):
    registry.admin_uids.side_effect = RuntimeError("quota")

    with pytest.raises(Internal, match="Failed to fetch employee data."):
        get_employees_with_admin_status(ADMIN, {}, registry, store)


def test_admin_flag_uses_document_id_not_profile_id_field(registry, store):
    registry.admin_uids.return_value = {"uid-1"}
    store.list_employees.return_value = [("uid-1", {"id": "EMP-007", "name": "Asha"})]

    result = get_employees_with_admin_status(ADMIN, {}, registry, store)

    assert result[0]["isAdmin"] is True
    assert result[0]["id"] == "EMP-007"


def test_nested_timestamps_are_serialized(registry, store):
    registry.admin_uids.return_value = set()
    store.list_employees.return_value = [(
        "u1",
        {
            "name": "Asha",
            "profile": {"joinedAt": datetime(2024, 1, 5, tzinfo=timezone.utc)},
            "reviews": [{"at": datetime(2024, 2, 1, tzinfo=timezone.utc), "score": 4}],
        },
    )]

    result = get_employees_with_admin_status(ADMIN, {}, registry, store)

    assert result[0]["profile"] == {"joinedAt": "2024-01-05T00:00:00+00:00"}
    assert result[0]["reviews"] == [{"at": "2024-02-01T00:00:00+00:00", "score": 4}]
