"""
Google OAuth credential provider.

Hands out a usable access token for a user, refreshing it through Google's
token endpoint when it is missing an expiry or has expired.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict

from django.conf import settings

from shared.common.clients import BaseServiceClient, ExternalServiceError

from apps.core.models import User
from .clock import Clock
from .exceptions import CalendarError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME_SECONDS = 3600


@dataclass(frozen=True)
class Credential:
    access_token: str

    def authorization_header(self) -> Dict[str, str]:
        return {'Authorization': f'Bearer {self.access_token}'}


class CredentialsService(BaseServiceClient):
    """Resolves and refreshes per-user Google credentials."""

    def __init__(self, clock: Clock = None, token_url: str = None, transport=None):
        super().__init__(
            'google-oauth',
            token_url or settings.GOOGLE_TOKEN_URL,
            timeout=settings.GOOGLE_HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )
        self.clock = clock or Clock()

    def get_credential(self, user: User) -> Credential:
        """
        Return a credential for ``user``.

        Raises ``CalendarError`` when the user never linked Google or the
        refresh fails.
        """
        if not user.has_calendar_credentials:
            raise CalendarError(f"User {user.email} has no Google credentials")

        expiry = user.google_token_expiry
        if expiry is None or expiry < self.clock.now():
            self._refresh(user)

        return Credential(access_token=user.google_access_token)

    def _refresh(self, user: User):
        logger.info(f"Refreshing Google access token for {user.email}")
        try:
            payload = self._request('POST', '', form={
                'grant_type': 'refresh_token',
                'refresh_token': user.google_refresh_token,
                'client_id': settings.GOOGLE_CLIENT_ID,
                'client_secret': settings.GOOGLE_CLIENT_SECRET,
            })
        except ExternalServiceError as e:
            raise CalendarError(f"Token refresh failed for {user.email}: {e}", status_code=e.status_code) from e

        access_token = payload.get('access_token')
        if not access_token:
            raise CalendarError(f"Token refresh for {user.email} returned no access token")

        try:
            expires_in = int(payload.get('expires_in') or DEFAULT_TOKEN_LIFETIME_SECONDS)
        except (TypeError, ValueError) as e:
            raise CalendarError(
                f"Token refresh for {user.email} returned invalid expires_in: {payload.get('expires_in')!r}"
            ) from e
        user.google_access_token = access_token
        user.google_token_expiry = self.clock.now() + timedelta(seconds=expires_in)
        update_fields = ['google_access_token', 'google_token_expiry']

        # Google only sometimes rotates the refresh token
        if payload.get('refresh_token'):
            user.google_refresh_token = payload['refresh_token']
            update_fields.append('google_refresh_token')

        user.save(update_fields=update_fields)
