"""
Dashboard Functions - Firebase callable entry points.

Wires the handlers in src/handlers to Cloud Functions for Firebase.
"""

import logging
import sys

from firebase_admin import initialize_app
from firebase_functions import https_fn, options

from src.errors import HandlerError
from src.handlers import attendance, feedback, roles
from src.handlers.auth import Caller
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )


setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

initialize_app()


def _invoke(handler, req: https_fn.CallableRequest):
    """Run a handler and translate its errors into callable errors."""
    try:
        return handler(Caller.from_auth(req.auth), req.data or {})
    except HandlerError as e:
        logger.warning(f"{handler.__name__} rejected: [{e.code}] {e.message}")
        raise https_fn.HttpsError(
            code=https_fn.FunctionsErrorCode(e.code),
            message=e.message
        )


# Exported names are the callable names the dashboard client uses.

@https_fn.on_call()
def addAdminRole(req: https_fn.CallableRequest):
    return _invoke(roles.add_admin_role, req)


@https_fn.on_call()
def removeAdminRole(req: https_fn.CallableRequest):
    return _invoke(roles.remove_admin_role, req)


@https_fn.on_call()
def deleteEmployee(req: https_fn.CallableRequest):
    return _invoke(roles.delete_employee, req)


@https_fn.on_call()
def getEmployeesWithAdminStatus(req: https_fn.CallableRequest):
    return _invoke(roles.get_employees_with_admin_status, req)


@https_fn.on_call(
    timeout_sec=settings.CHART_TIMEOUT_SECONDS,
    memory=options.MemoryOption.MB_256,
    secrets=["SHEETS_SA_KEY"],
)
def getFeedbackChartData(req: https_fn.CallableRequest):
    return _invoke(feedback.get_feedback_chart_data, req)


@https_fn.on_call(
    timeout_sec=settings.SUMMARY_TIMEOUT_SECONDS,
    memory=options.MemoryOption.MB_512,
    secrets=["GEMINI_KEY", "SHEETS_SA_KEY"],
)
def getFeedbackAiSummary(req: https_fn.CallableRequest):
    return _invoke(feedback.get_feedback_ai_summary, req)


@https_fn.on_call(
    timeout_sec=settings.SYNC_TIMEOUT_SECONDS,
    memory=options.MemoryOption.MB_256,
    secrets=["SHEETS_SA_KEY"],
)
def syncAttendanceToSheet(req: https_fn.CallableRequest):
    return _invoke(attendance.sync_attendance_to_sheet, req)
