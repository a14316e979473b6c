"""
User Service
"""

from apps.core.models import User
from .exceptions import UserNotFoundError


class UserService:
    """Lookup of known users by their external key, the email."""

    def get_user_by_email(self, email: str) -> User:
        try:
            return User.objects.get(email=email)
        except User.DoesNotExist:
            raise UserNotFoundError(f"User {email} not found.")
