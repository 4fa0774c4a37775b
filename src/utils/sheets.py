"""
Google Sheets utility.

Reads feedback tabs and maintains the attendance sheet through gspread.
"""

import json
import logging
import re
from typing import Iterable, List

import gspread
from gspread.utils import absolute_range_name
from google.oauth2 import service_account

from src.errors import Internal, InvalidArgument, NotFound

logger = logging.getLogger(__name__)

SPREADSHEET_ID_PATTERN = re.compile(r"/d/([\w-]+)")
SHEET_GID_PATTERN = re.compile(r"[#&]gid=(\d+)")

DEFAULT_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def parse_spreadsheet_id(sheet_url: str) -> str:
    """
    Extract the spreadsheet ID from a Google Sheets URL.

    Raises:
        InvalidArgument: If the URL carries no /d/<id> segment
    """
    match = SPREADSHEET_ID_PATTERN.search(sheet_url)
    if not match:
        raise InvalidArgument("Invalid Google Sheet URL format.")
    return match.group(1)


def parse_sheet_gid(sheet_url: str) -> int:
    """Tab ID from the URL fragment/query, 0 (first tab) when absent."""
    match = SHEET_GID_PATTERN.search(sheet_url)
    return int(match.group(1)) if match else 0


class SheetsClient:
    """
    Thin wrapper around a gspread client.

    Handles:
    - Feedback rows (columns A-D of the tab named in a sheet URL)
    - Attendance rows (tab by position, delete + append)
    """

    def __init__(self, client: gspread.Client):
        self.client = client

    @classmethod
    def from_service_account_json(
        cls,
        raw_key: str,
        scopes: List[str] = None
    ) -> "SheetsClient":
        """
        Build a client from a service-account key JSON string.

        Raises:
            Internal: If the key is missing or not valid JSON
        """
        if not raw_key:
            raise Internal("Service Account key is not configured.")

        try:
            info = json.loads(raw_key)
        except json.JSONDecodeError as e:
            logger.error(f"Service account key is not valid JSON: {e}")
            raise Internal("Service Account key is not configured.")
        credentials = service_account.Credentials.from_service_account_info(
            info, scopes=scopes or DEFAULT_SCOPES
        )
        logger.info(f"Authorized Sheets client for {info.get('client_email')}")
        return cls(gspread.authorize(credentials))

    def read_feedback_rows(self, sheet_url: str, columns: str = "A:D") -> List[List[str]]:
        """
        Read the feedback columns of the tab a sheet URL points to.

        Raises:
            InvalidArgument: If the URL is malformed
            NotFound: If the tab does not exist
        """
        spreadsheet_id = parse_spreadsheet_id(sheet_url)
        gid = parse_sheet_gid(sheet_url)

        spreadsheet = self.client.open_by_key(spreadsheet_id)
        try:
            worksheet = spreadsheet.get_worksheet_by_id(gid)
        except gspread.exceptions.WorksheetNotFound:
            raise NotFound(f'Sheet with GID "{gid}" not found.')

        rows = worksheet.get_values(columns)
        logger.info(f"Read {len(rows)} rows from {worksheet.title!r} ({spreadsheet_id})")
        return rows

    def worksheet_at(self, spreadsheet_id: str, index: int, minimum: int = 1) -> gspread.Worksheet:
        """
        Tab at a position.

        Raises:
            NotFound: If the spreadsheet has fewer than `minimum` tabs or none at `index`
        """
        worksheets = self.client.open_by_key(spreadsheet_id).worksheets()
        if len(worksheets) < minimum:
            raise NotFound(f"The spreadsheet must contain at least {minimum} sheets.")
        if index >= len(worksheets):
            raise NotFound(f"No sheet found at index {index}.")
        return worksheets[index]

    def read_column(self, worksheet: gspread.Worksheet, cells: str) -> List[str]:
        """First cell of every row in the range ("" for blank rows)."""
        return [row[0] if row else "" for row in worksheet.get_values(cells)]

    def delete_rows(self, spreadsheet_id: str, sheet_id: int, row_indexes: Iterable[int]) -> int:
        """
        Delete single rows by 0-based index.

        Rows go bottom-up so earlier deletions do not shift later ones.

        Returns:
            Number of rows deleted
        """
        requests = [
            {
                "deleteDimension": {
                    "range": {
                        "sheetId": sheet_id,
                        "dimension": "ROWS",
                        "startIndex": index,
                        "endIndex": index + 1,
                    }
                }
            }
            for index in sorted(set(row_indexes), reverse=True)
        ]
        if not requests:
            return 0

        self.client.open_by_key(spreadsheet_id).batch_update({"requests": requests})
        return len(requests)

    def append_rows(
        self,
        spreadsheet_id: str,
        sheet_title: str,
        columns: str,
        rows: List[List[str]]
    ) -> None:
        """Append rows after the last row of the table, as if typed by a user."""
        self.client.open_by_key(spreadsheet_id).values_append(
            absolute_range_name(sheet_title, columns),
            params={"valueInputOption": "USER_ENTERED"},
            body={"values": rows},
        )
        logger.info(f"Appended {len(rows)} rows to {sheet_title!r}")
