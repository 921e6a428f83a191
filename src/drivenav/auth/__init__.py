"""Public auth exports for drivenav."""

from __future__ import annotations

from .auth_info import DEFAULT_REDIRECT_URI, AuthInfo
from .oauth_client import OAuthClient

__all__ = ["AuthInfo", "OAuthClient", "DEFAULT_REDIRECT_URI"]
