"""
Feedback Pipeline Orchestrator.

Coordinates one request's pass through the feedback pipeline:
sheet lookup → extraction → time-window filter → aggregation / summary.
"""

import logging
from typing import Dict, List, Optional

from src.errors import NotFound
from src.models.feedback import CommentAnalysis, FeedbackRecord
from src.pipeline.aggregation import FeedbackAggregator
from src.pipeline.extraction import extract_records
from src.pipeline.summarization import CommentSummarizer
from src.pipeline.time_window import TimeWindow, filter_records
from src.utils.sheets import SheetsClient
from src.utils.storage import EmployeeStore
import config.settings as settings

logger = logging.getLogger(__name__)


class FeedbackPipeline:
    """
    Runs the feedback pipeline for a single employee and time window.

    Stateless between calls: every request re-reads the sheet.
    """

    def __init__(
        self,
        store: EmployeeStore,
        sheets: SheetsClient,
        summarizer: Optional[CommentSummarizer] = None
    ):
        """
        Args:
            store: Employee profile store (holds the feedback sheet URL)
            sheets: Sheets client used to read feedback rows
            summarizer: Comment summarizer, only needed for ai_summary()
        """
        self.store = store
        self.sheets = sheets
        self.summarizer = summarizer
        self.aggregator = FeedbackAggregator()

    def fetch_records(self, employee_id: str, window: TimeWindow) -> List[FeedbackRecord]:
        """
        Read, normalize and filter an employee's feedback rows.

        Raises:
            NotFound: If the employee has no sheet URL or the tab is missing
            InvalidArgument: If the sheet URL is malformed
        """
        employee = self.store.get_employee(employee_id) or {}
        sheet_url = employee.get("feedbackSheetUrl")
        if not isinstance(sheet_url, str):
            raise NotFound("No feedback sheet URL configured.")

        rows = self.sheets.read_feedback_rows(sheet_url, settings.FEEDBACK_RANGE)
        records = extract_records(rows)
        selected = filter_records(records, window)

        logger.info(
            f"Employee {employee_id}: {len(records)} valid rows, "
            f"{len(selected)} in {window.mode!r} window"
        )
        return selected

    def chart_data(self, employee_id: str, window: TimeWindow) -> Dict:
        """Chart payload: totalFeedbacks, graphData, graphTimeseries."""
        records = self.fetch_records(employee_id, window)
        summary, timeseries = self.aggregator.aggregate(records, window.mode)

        return {
            "totalFeedbacks": len(records),
            "graphData": summary.to_dict() if summary else None,
            "graphTimeseries": timeseries.to_dict() if timeseries else None,
        }

    def ai_summary(self, employee_id: str, window: TimeWindow) -> CommentAnalysis:
        """
        Summarize the comments inside the window.

        Raises:
            CommentSummaryError: If the Gemini call or its parsing fails
        """
        if self.summarizer is None:
            raise ValueError("FeedbackPipeline was built without a summarizer")

        records = self.fetch_records(employee_id, window)
        return self.summarizer.summarize(records)
