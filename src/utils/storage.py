"""
Storage utility.

Firestore access for employee profiles and attendance records.
"""

import logging
from typing import Dict, List, Optional, Tuple

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

logger = logging.getLogger(__name__)


class EmployeeStore:
    """
    Reads and deletes Firestore documents used by the handlers.

    Handles:
    - Employee profiles (employees/<uid>)
    - Attendance records (equality queries on a session id field)
    """

    def __init__(self, db=None, collection: str = "employees"):
        """
        Args:
            db: Firestore client (defaults to the default app's client)
            collection: Employee profile collection
        """
        self.db = db if db is not None else firestore.client()
        self.collection = collection

    def get_employee(self, employee_id: str) -> Optional[Dict]:
        """Employee profile fields, or None if the document does not exist."""
        snapshot = self.db.collection(self.collection).document(employee_id).get()
        if not snapshot.exists:
            logger.warning(f"No employee document for {employee_id}")
            return None
        return snapshot.to_dict() or {}

    def list_employees(self) -> List[Tuple[str, Dict]]:
        """(document id, profile fields) for every employee, ordered by name."""
        docs = self.db.collection(self.collection).order_by("name").stream()
        return [(doc.id, doc.to_dict() or {}) for doc in docs]

    def delete_employee(self, employee_id: str) -> None:
        self.db.collection(self.collection).document(employee_id).delete()
        logger.info(f"Deleted employee document {employee_id}")

    def query(self, collection: str, field: str, value) -> List[Dict]:
        """Documents of a collection whose field equals value."""
        docs = self.db.collection(collection).where(filter=FieldFilter(field, "==", value)).stream()
        return [doc.to_dict() or {} for doc in docs]
