#!/usr/bin/env python3
"""
Data models shared by the burp services.
"""

import time
from dataclasses import dataclass
from typing import Optional

from .constants import SESSION_COOKIE_NAME


@dataclass(frozen=True)
class SessionToken:
    """A session cookie issued by the AUR."""

    value: str
    name: str = SESSION_COOKIE_NAME
    expires: Optional[int] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        """
        Check the expiry the service attached to the cookie.

        A cookie without an expiry is a browser-session cookie and only the
        service can tell whether it is still good.
        """
        if self.expires is None:
            return False
        return self.expires <= (now if now is not None else time.time())


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful login."""

    token: SessionToken
    method: str
    persisted: bool = False
    persist_error: Optional[str] = None


@dataclass(frozen=True)
class UploadResult:
    """Result of uploading a single file."""

    success: bool
    file_path: str
    file_name: str
    category: str
    error: Optional[str] = None
    error_type: Optional[str] = None
    package_url: Optional[str] = None
