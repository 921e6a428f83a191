"""OAuth client utilities for drivenav."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

from drivenav.errors import NO_TOKEN_MARKER, AuthError, InvalidStateError, ValidationError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


class OAuthClient:
    """
    Load stored OAuth credentials and run the popup (web) authorization flow.

    Unlike a desktop flow this never blocks on a local server: the
    authorization URL is handed to the caller, and the redirect that comes
    back from the popup is passed to complete_authorization().
    """

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "oauth":
            raise ValidationError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info
        self._pending_flow: Optional[Any] = None

    @property
    def has_pending_flow(self) -> bool:
        return self._pending_flow is not None

    def load_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return stored OAuth credentials for the given scopes.

        Args:
            scopes: OAuth scopes.
            ensure_valid: If True, refresh credentials when possible.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: when no token is stored, or load/refresh fails.
            ValidationError: if scopes is invalid.
        """
        _check_scopes(scopes)

        try:
            from google.auth.transport.requests import Request
            from google.oauth2.credentials import Credentials
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth and google-auth-oauthlib"},
                cause=exc,
            ) from exc

        token_file = self._auth_info.token_file
        if not os.path.exists(token_file):
            raise AuthError(NO_TOKEN_MARKER, details={"token_file": token_file})

        try:
            creds = Credentials.from_authorized_user_file(token_file, scopes=list(scopes))
        except Exception as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

        if not ensure_valid:
            return creds

        if not creds.valid and creds.refresh_token:
            try:
                creds.refresh(Request())
                self._save_credentials(creds)
            except Exception as exc:
                raise AuthError(
                    "Failed to refresh OAuth credentials",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

        return creds

    def has_valid_token(self, scopes: Sequence[str]) -> bool:
        """Return True if a stored token exists and is (or was refreshed to be) valid."""
        creds = self.load_credentials(scopes, ensure_valid=True)
        return bool(creds.valid)

    def authorization_url(self, scopes: Sequence[str]) -> str:
        """
        Start a popup authorization attempt and return the consent URL.

        Starting a new attempt replaces any previous unfinished one.
        """
        _check_scopes(scopes)

        try:
            from google_auth_oauthlib.flow import Flow
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-auth-oauthlib is not available",
                details={"hint": "Install google-auth-oauthlib"},
                cause=exc,
            ) from exc

        client_secrets = self._auth_info.client_secrets_file
        try:
            flow = Flow.from_client_secrets_file(
                client_secrets,
                scopes=list(scopes),
                redirect_uri=self._auth_info.redirect_uri,
            )
            url, _state = flow.authorization_url(access_type="offline", prompt="consent")
        except Exception as exc:
            raise AuthError(
                "Failed to start OAuth authorization flow",
                details={"client_secrets_file": client_secrets},
                cause=exc,
            ) from exc

        if self._pending_flow is not None:
            logger.debug("Replacing unfinished OAuth authorization attempt")
        self._pending_flow = flow
        return url

    def complete_authorization(self, authorization_response: str):
        """
        Exchange the popup redirect URL for a token and store it.

        Raises:
            InvalidStateError: if authorization_url() was not called first.
            AuthError: if the exchange or the save fails.
        """
        flow = self._pending_flow
        if flow is None:
            raise InvalidStateError("No OAuth authorization in progress. Call authorization_url() first.")

        # oauthlib insists on https; the local redirect target is plain http.
        if authorization_response.startswith("http:"):
            authorization_response = "https:" + authorization_response[len("http:"):]

        try:
            flow.fetch_token(authorization_response=authorization_response)
        except Exception as exc:
            raise AuthError("OAuth token exchange failed", cause=exc) from exc

        self._pending_flow = None
        creds = flow.credentials
        self._save_credentials(creds)
        return creds

    def build_drive_service(self, scopes: Sequence[str]):
        """
        Build a Drive API service resource from the stored token.

        Returns:
            googleapiclient.discovery.Resource
        """
        try:
            from googleapiclient.discovery import build
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                details={"hint": "Install google-api-python-client"},
                cause=exc,
            ) from exc

        creds = self.load_credentials(scopes, ensure_valid=True)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    def _save_credentials(self, creds) -> None:
        token_file = self._auth_info.token_file
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except Exception as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc


def _check_scopes(scopes: Sequence[str]) -> None:
    if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
        raise ValidationError("scopes must be a non-empty sequence of strings")
