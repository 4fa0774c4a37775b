"""
Attendance Sync.

Mirrors one day of Firestore attendance records into the attendance
spreadsheet, replacing whatever rows that day already had.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from src.errors import HandlerError, Internal, InvalidArgument
from src.utils.sheets import SheetsClient
from src.utils.storage import EmployeeStore

logger = logging.getLogger(__name__)

# session type -> (collection, session id field, sheet tab index)
SESSION_SOURCES = {
    "standups": ("attendance", "standup_id", 0),
    "learning_hours": ("learning_hours_attendance", "learning_hour_id", 1),
}

SHEET_COLUMNS = "A:H"
SESSION_ID_COLUMN = "A2:A"


def format_scheduled_time(value: Optional[datetime], tz_name: str) -> str:
    """Render a scheduled time as e.g. "9:05 AM" in the given timezone."""
    if value is None:
        return "N/A"
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local = value.astimezone(ZoneInfo(tz_name))
    return f"{local.hour % 12 or 12}:{local:%M %p}"


class AttendanceSync:
    """
    Copies attendance records for a date into the attendance sheet.

    Standups go to the first tab, learning hours to the second.
    """

    def __init__(
        self,
        store: EmployeeStore,
        sheets: SheetsClient,
        spreadsheet_id: str,
        tz_name: str = "Asia/Kolkata"
    ):
        self.store = store
        self.sheets = sheets
        self.spreadsheet_id = spreadsheet_id
        self.tz_name = tz_name

    def build_rows(self, records: List[Dict], session_type: str) -> List[List[str]]:
        """One sheet row per attendance record (columns A-H)."""
        rows = []
        for data in records:
            rows.append([
                data.get("standup_id") or data.get("learning_hour_id"),
                format_scheduled_time(data.get("scheduled_at"), self.tz_name),
                session_type,
                data.get("employeeId") or "",
                data.get("employee_name") or "",
                data.get("employee_email") or "",
                data.get("status"),
                data.get("reason") or "",
            ])
        return rows

    def sync(self, date: str, session_type: str) -> Dict:
        """
        Replace the sheet rows for a date with the current Firestore records.

        Returns:
            {"success": True, "message": ...}

        Raises:
            InvalidArgument: If the session type is unknown
            NotFound: If the spreadsheet lacks the target tab
            Internal: If any Sheets call fails
        """
        if session_type not in SESSION_SOURCES:
            raise InvalidArgument(f"Unknown sessionType {session_type!r}.")

        collection, id_field, sheet_index = SESSION_SOURCES[session_type]
        records = self.store.query(collection, id_field, date)

        if not records:
            return {
                "success": True,
                "message": f"No Firestore records found for {date}. Sheet was not modified.",
            }

        rows = self.build_rows(records, session_type)

        try:
            worksheet = self.sheets.worksheet_at(
                self.spreadsheet_id, sheet_index, minimum=len(SESSION_SOURCES)
            )

            existing = self.sheets.read_column(worksheet, SESSION_ID_COLUMN)
            # Values start at row 2, i.e. 0-based row index 1
            stale = [position + 1 for position, value in enumerate(existing) if value == date]
            deleted = self.sheets.delete_rows(self.spreadsheet_id, worksheet.id, stale)
            if deleted:
                logger.info(f"Deleted {deleted} old rows for date {date}.")

            self.sheets.append_rows(self.spreadsheet_id, worksheet.title, SHEET_COLUMNS, rows)
        except HandlerError:
            raise
        except Exception as e:
            logger.error(f"Error during Google Sheets operation: {e}", exc_info=True)
            raise Internal(f"An error occurred while syncing to the sheet. {e}")

        return {"success": True, "message": f"Successfully synced {len(rows)} records."}
