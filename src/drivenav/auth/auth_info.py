"""Authentication information for drivenav (OAuth only)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_REDIRECT_URI: str = "http://localhost:8765/oauth/callback"


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Only OAuth is supported:
        kind = "oauth"
        data must include:
            - client_secrets_file
            - token_file
        data may include:
            - redirect_uri (where the popup lands after consent)
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "oauth":
            raise ValueError("AuthInfo.kind must be 'oauth'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in ("client_secrets_file", "token_file"):
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

        redirect_uri = self.data.get("redirect_uri")
        if redirect_uri is not None and (not isinstance(redirect_uri, str) or not redirect_uri.strip()):
            raise ValueError("AuthInfo.data['redirect_uri'] must be a non-empty string when given")

    @property
    def client_secrets_file(self) -> str:
        """Path to OAuth client secrets JSON."""
        return str(self.data["client_secrets_file"])

    @property
    def token_file(self) -> str:
        """Path to OAuth token JSON (authorized user)."""
        return str(self.data["token_file"])

    @property
    def redirect_uri(self) -> str:
        """Redirect URI registered for the popup flow."""
        return str(self.data.get("redirect_uri") or DEFAULT_REDIRECT_URI)
