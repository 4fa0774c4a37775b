"""
Attendance sync handler.
"""

import logging
from typing import Dict, Optional

from src.attendance_sync import AttendanceSync
from src.errors import Internal, InvalidArgument, PermissionDenied
from src.handlers.auth import Caller, require_caller
from src.registry.admin_roles import AdminRoleRegistry
from src.utils.sheets import SheetsClient
from src.utils.storage import EmployeeStore
import config.settings as settings

logger = logging.getLogger(__name__)


def _sync() -> AttendanceSync:
    return AttendanceSync(
        store=EmployeeStore(collection=settings.EMPLOYEES_COLLECTION),
        sheets=SheetsClient.from_service_account_json(
            settings.SHEETS_SA_KEY, settings.SHEETS_SCOPES
        ),
        spreadsheet_id=settings.ATTENDANCE_SPREADSHEET_ID,
        tz_name=settings.ATTENDANCE_TIMEZONE,
    )


def sync_attendance_to_sheet(
    caller: Optional[Caller],
    data: Dict,
    registry: Optional[AdminRoleRegistry] = None,
    sync: Optional[AttendanceSync] = None
) -> Dict:
    """
    Replace a day's rows in the attendance sheet with Firestore records.

    Admin status is read from the identity store rather than the token, so
    a freshly revoked admin cannot sync with a stale token.
    """
    caller = require_caller(caller, "Authentication is required.")

    date = data.get("date")
    session_type = data.get("sessionType")
    if not date or not session_type:
        raise InvalidArgument("Missing 'date' or 'sessionType'.")

    registry = registry or AdminRoleRegistry()
    try:
        is_admin = registry.is_admin(caller.uid)
    except Exception as e:
        logger.error(f"Admin check failed for {caller.uid}: {e}", exc_info=True)
        raise Internal("Could not verify user permissions.")
    if not is_admin:
        raise PermissionDenied("Must be an admin to run this operation.")

    sync = sync or _sync()
    return sync.sync(date, session_type)
