"""
Configuration settings for the dashboard functions.

Centralized configuration for handlers, the feedback pipeline and the
external services they talk to.
"""

import os

# Secrets (injected as environment variables by Cloud Functions)
GEMINI_KEY = os.getenv("GEMINI_KEY", "")
SHEETS_SA_KEY = os.getenv("SHEETS_SA_KEY", "")

# LLM Models
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-1.5-flash")

# Temperature settings (0.0 for deterministic)
SUMMARY_TEMPERATURE = float(os.getenv("SUMMARY_TEMPERATURE", "0.0"))

# Google Sheets
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
FEEDBACK_RANGE = "A:D"

# Firestore / Firebase Auth
EMPLOYEES_COLLECTION = "employees"
LIST_USERS_PAGE_SIZE = 1000

# Attendance sync
ATTENDANCE_SPREADSHEET_ID = os.getenv(
    "ATTENDANCE_SPREADSHEET_ID", "1mMTTdmpGNwqJy9co4tcExdj6FZ0nvEZOhLLhW8yMNn4"
)
ATTENDANCE_TIMEZONE = os.getenv("ATTENDANCE_TIMEZONE", "Asia/Kolkata")

# Function runtime limits
CHART_TIMEOUT_SECONDS = 60
SUMMARY_TIMEOUT_SECONDS = 120
SYNC_TIMEOUT_SECONDS = 120

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
