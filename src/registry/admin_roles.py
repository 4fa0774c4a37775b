"""
Admin Role Registry - Firebase Auth custom claims.

Grants and revokes the admin flag without touching a user's other claims.
"""

import logging
from typing import Optional, Set

from firebase_admin import auth as firebase_auth

logger = logging.getLogger(__name__)

ADMIN_CLAIM = "isAdmin"


class AdminRoleRegistry:
    """
    Single source of truth for who is an admin.

    The flag lives in Firebase Auth custom claims, so it travels in every
    ID token the dashboard sends.
    """

    def __init__(self, auth_client=None, page_size: int = 1000):
        """
        Args:
            auth_client: firebase_admin.auth compatible module/object
            page_size: Users fetched when listing admins
        """
        self.auth = auth_client if auth_client is not None else firebase_auth
        self.page_size = page_size

    def set_admin(self, email: str, is_admin: bool) -> str:
        """
        Set the admin flag for the user with this email.

        Existing custom claims are kept; only the admin flag changes.

        Returns:
            The user's uid

        Raises:
            firebase_admin.auth.UserNotFoundError: If no user has this email
        """
        user = self.auth.get_user_by_email(email)
        claims = dict(user.custom_claims or {})
        claims[ADMIN_CLAIM] = is_admin
        self.auth.set_custom_user_claims(user.uid, claims)
        logger.info(f"Set {ADMIN_CLAIM}={is_admin} for {email} ({user.uid})")
        return user.uid

    def is_admin(self, uid: str) -> bool:
        """Check the stored claims (not the caller's token) for the admin flag."""
        user = self.auth.get_user(uid)
        return _has_admin_claim(user.custom_claims)

    def admin_uids(self) -> Set[str]:
        """UIDs flagged as admin within the first page of users."""
        page = self.auth.list_users(max_results=self.page_size)
        return {user.uid for user in page.users if _has_admin_claim(user.custom_claims)}

    def delete_user(self, uid: str) -> None:
        self.auth.delete_user(uid)
        logger.info(f"Deleted auth user {uid}")


def _has_admin_claim(claims: Optional[dict]) -> bool:
    return (claims or {}).get(ADMIN_CLAIM) is True
