from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import google.auth
import httpx
from google.auth import exceptions as auth_exceptions
from google.auth.credentials import Credentials
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from ..core.constants import DEFAULT_FCM_TIMEOUT_SECONDS, FCM_SCOPE, FCM_SEND_URL
from ..core.exceptions import NotificationError
from .sender import NotificationSender

logger = logging.getLogger(__name__)


def load_fcm_credentials(credentials_file: str = "") -> Credentials:
    """Service-account credentials from a JSON key file, else Application Default Credentials."""
    if credentials_file:
        return service_account.Credentials.from_service_account_file(credentials_file, scopes=[FCM_SCOPE])
    credentials, _ = google.auth.default(scopes=[FCM_SCOPE])
    return credentials


class FcmNotificationSender(NotificationSender):
    """Firebase Cloud Messaging HTTP v1 sender.

    OAuth2 access tokens are short-lived: the token is refreshed from
    ``credentials`` whenever it is missing or expired, and once more when FCM
    answers 401.
    """

    def __init__(
        self,
        *,
        project_id: str,
        credentials: Credentials,
        timeout_seconds: float = DEFAULT_FCM_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
        auth_request: Any = None,
    ):
        self._url = FCM_SEND_URL.format(project_id=project_id)
        self._credentials = credentials
        self._timeout_seconds = float(timeout_seconds)
        self._client = client
        self._auth_request = auth_request
        self._token_lock = threading.Lock()

    def send(self, *, token: str, title: str, body: str) -> None:
        payload: dict[str, Any] = {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
            }
        }

        try:
            response = self._post(payload, self._bearer_token())
            if response.status_code == 401:
                logger.info("notification.fcm.token_rejected refreshing=1")
                response = self._post(payload, self._bearer_token(force_refresh=True))
        except httpx.HTTPError as exc:
            raise NotificationError(f"FCM HTTP error: {exc}") from exc

        if response.status_code >= 300:
            raise NotificationError(
                f"FCM send failed (status={response.status_code}): {_extract_error(response)}"
            )
        logger.debug("notification.fcm.sent name=%s", _message_name(response))

    def _bearer_token(self, *, force_refresh: bool = False) -> str:
        with self._token_lock:
            if force_refresh or not self._credentials.valid:
                try:
                    self._credentials.refresh(self._auth_request or Request())
                except auth_exceptions.GoogleAuthError as exc:
                    raise NotificationError(f"FCM credential refresh failed: {exc}") from exc
            return str(self._credentials.token)

    def _post(self, payload: dict[str, Any], access_token: str) -> httpx.Response:
        headers = {"Authorization": f"Bearer {access_token}"}
        if self._client is not None:
            return self._client.post(self._url, json=payload, headers=headers, timeout=self._timeout_seconds)
        with httpx.Client(timeout=self._timeout_seconds) as client:
            return client.post(self._url, json=payload, headers=headers)


def _extract_error(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:500]
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        return str(error.get("message") or error.get("status") or error)
    return response.text[:500]


def _message_name(response: httpx.Response) -> str:
    try:
        return str(response.json().get("name", ""))
    except ValueError:
        return ""
