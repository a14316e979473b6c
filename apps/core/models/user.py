"""
User Model

Known users of the reservation system, keyed by email.
"""

from django.db import models


class UserRole(models.TextChoices):
    """Closed set of roles. Business rules compare against these members only."""
    STUDENT = 'STUDENT', 'Student'
    ADMIN = 'ADMIN', 'Administrator'


class User(models.Model):
    """
    A person who can hold reservations.

    Authentication happens elsewhere; the service only needs the email to
    resolve the requester, the role to apply quota and cancellation rules,
    and the Google OAuth tokens for calendar sync.
    """

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.STUDENT
    )

    # Google OAuth credential
    google_access_token = models.TextField(null=True, blank=True)
    google_refresh_token = models.TextField(null=True, blank=True)
    google_token_expiry = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'users'
        ordering = ['email']

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def user_role(self) -> UserRole:
        return UserRole(self.role)

    @property
    def has_calendar_credentials(self) -> bool:
        return bool(self.google_access_token and self.google_refresh_token)
