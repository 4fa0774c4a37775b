"""
Feedback chart and AI summary handlers.
"""

import logging
from typing import Dict, Optional

from src.errors import HandlerError, Internal, InvalidArgument
from src.handlers.auth import Caller, require_caller
from src.orchestrator import FeedbackPipeline
from src.pipeline.summarization import CommentSummarizer, CommentSummaryError
from src.pipeline.time_window import build_time_window
from src.utils.sheets import SheetsClient
from src.utils.storage import EmployeeStore
import config.settings as settings

logger = logging.getLogger(__name__)


def _pipeline(with_summarizer: bool = False) -> FeedbackPipeline:
    summarizer = None
    if with_summarizer:
        summarizer = CommentSummarizer(
            api_key=settings.GEMINI_KEY,
            model_name=settings.SUMMARY_MODEL,
            temperature=settings.SUMMARY_TEMPERATURE,
        )
    return FeedbackPipeline(
        store=EmployeeStore(collection=settings.EMPLOYEES_COLLECTION),
        sheets=SheetsClient.from_service_account_json(
            settings.SHEETS_SA_KEY, settings.SHEETS_SCOPES
        ),
        summarizer=summarizer,
    )


def _validate(data: Dict):
    employee_id = data.get("employeeId")
    if not employee_id or not isinstance(employee_id, str):
        raise InvalidArgument("Missing 'employeeId'.")
    return employee_id, build_time_window(data)


def get_feedback_chart_data(
    caller: Optional[Caller],
    data: Dict,
    pipeline: Optional[FeedbackPipeline] = None
) -> Dict:
    """Chart data only (no Gemini call), fast enough for every filter change."""
    require_caller(caller)
    employee_id, window = _validate(data)

    try:
        pipeline = pipeline or _pipeline()
        return pipeline.chart_data(employee_id, window)
    except HandlerError:
        raise
    except Exception as e:
        logger.error(f"Chart data failed for {employee_id} ({window.mode}): {e}", exc_info=True)
        raise Internal("Failed to fetch feedback data.")


def get_feedback_ai_summary(
    caller: Optional[Caller],
    data: Dict,
    pipeline: Optional[FeedbackPipeline] = None
) -> Dict:
    """Gemini summary of the comments in the requested window."""
    require_caller(caller)
    employee_id, window = _validate(data)

    try:
        pipeline = pipeline or _pipeline(with_summarizer=True)
        analysis = pipeline.ai_summary(employee_id, window)
    except HandlerError:
        raise
    except CommentSummaryError as e:
        logger.error(f"AI processing error for {employee_id}: {e}", exc_info=True)
        raise Internal("Failed to generate AI summary.")
    except Exception as e:
        logger.error(f"AI summary failed for {employee_id} ({window.mode}): {e}", exc_info=True)
        raise Internal("Failed to fetch feedback data.")

    return analysis.to_dict()
