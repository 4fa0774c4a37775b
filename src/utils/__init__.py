"""
Utility modules for the dashboard functions.

External collaborators:
- Sheets: Feedback and attendance spreadsheets (gspread)
- Storage: Employee profiles and attendance records (Firestore)
"""
