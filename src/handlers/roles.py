"""
User & role management handlers.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from firebase_admin.auth import UserNotFoundError

from src.errors import Internal, InvalidArgument, NotFound
from src.handlers.auth import Caller, require_admin_claim, require_caller
from src.registry.admin_roles import AdminRoleRegistry
from src.utils.storage import EmployeeStore
import config.settings as settings

logger = logging.getLogger(__name__)


def _registry() -> AdminRoleRegistry:
    return AdminRoleRegistry(page_size=settings.LIST_USERS_PAGE_SIZE)


def _store() -> EmployeeStore:
    return EmployeeStore(collection=settings.EMPLOYEES_COLLECTION)


def _require_email(data: Dict) -> str:
    email = data.get("email")
    if not isinstance(email, str) or not email.strip():
        raise InvalidArgument("Provide a valid email.")
    return email.strip()


def _set_admin_flag(registry: AdminRoleRegistry, email: str, flag: bool, failure: str) -> None:
    try:
        registry.set_admin(email, flag)
    except UserNotFoundError:
        raise NotFound("User not found.")
    except Exception as e:
        logger.error(f"Failed to set admin={flag} for {email}: {e}", exc_info=True)
        raise Internal(failure)


def add_admin_role(
    caller: Optional[Caller],
    data: Dict,
    registry: Optional[AdminRoleRegistry] = None
) -> Dict:
    require_caller(caller, "Login required.")
    require_admin_claim(caller, "Admins only.")
    email = _require_email(data)

    _set_admin_flag(registry or _registry(), email, True, "Could not set admin role.")
    return {"message": f"{email} is now an admin."}


def remove_admin_role(
    caller: Optional[Caller],
    data: Dict,
    registry: Optional[AdminRoleRegistry] = None
) -> Dict:
    require_admin_claim(caller, "Only admins can modify roles.")
    email = _require_email(data)

    _set_admin_flag(registry or _registry(), email, False, "Could not remove admin role.")
    return {"message": f"Admin role removed for {email}."}


def delete_employee(
    caller: Optional[Caller],
    data: Dict,
    registry: Optional[AdminRoleRegistry] = None,
    store: Optional[EmployeeStore] = None
) -> Dict:
    """
    Delete an employee's auth account, then their profile document.

    The two deletes are not atomic; a failure after the first leaves the
    profile in place.
    """
    require_caller(caller, "The function must be called while authenticated.")
    require_admin_claim(caller, "Only admins can delete employees.")

    uid = data.get("uid")
    if not uid or not isinstance(uid, str):
        raise InvalidArgument("Missing or invalid `uid` parameter.")

    registry = registry or _registry()
    store = store or _store()
    try:
        registry.delete_user(uid)
        store.delete_employee(uid)
    except Exception as e:
        logger.error(f"deleteEmployee failed for {uid}: {e}", exc_info=True)
        raise Internal(str(e) or "An unknown error occurred.")

    return {"message": "User account and profile deleted."}


def _serializable(value):
    """Firestore values with timestamps (at any depth) as ISO-8601 strings."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serializable(item) for item in value]
    return value


def get_employees_with_admin_status(
    caller: Optional[Caller],
    data: Dict,
    registry: Optional[AdminRoleRegistry] = None,
    store: Optional[EmployeeStore] = None
) -> List[Dict]:
    """Every employee profile, ordered by name, with an isAdmin flag."""
    require_admin_claim(caller, "Only admins can view the employee list.")

    registry = registry or _registry()
    store = store or _store()
    try:
        admin_uids = registry.admin_uids()
        employees = store.list_employees()
    except Exception as e:
        logger.error(f"Error fetching employees with admin status: {e}", exc_info=True)
        raise Internal("Failed to fetch employee data.")

    return [
        {
            "id": uid,
            **_serializable(fields),
            "isAdmin": uid in admin_uids,
        }
        for uid, fields in employees
    ]
