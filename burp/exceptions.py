#!/usr/bin/env python3
"""
Exception hierarchy for the burp client.

Every failure the core can report has its own class, so callers decide what
to do next by catching the class rather than comparing error numbers.
"""

from typing import Optional


class BurpError(Exception):
    """
    Base exception for all burp errors.
    """

    message = "burp error"
    error_code = "BURP_ERROR"

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None):
        self.message = message if message else getattr(self, "message", None)
        self.error_code = error_code if error_code else getattr(self, "error_code", None)
        super().__init__(self.message)


class ConfigError(BurpError):
    """
    Raised when the configuration file exists but cannot be read.
    """

    message = "Failed to read configuration file"
    error_code = "CONFIG_READ_FAILED"


class ConfigValidationError(BurpError):
    """
    Raised when a client setting is malformed, e.g. a bad domain.
    """

    message = "Validation failed for client configuration."
    error_code = "CONFIG_VALIDATION_FAILED"


class LoginError(BurpError):
    """Base class for the classified login failures."""

    message = "failed to login"
    error_code = "LOGIN_FAILED"


class InsufficientCredentialsError(LoginError):
    """
    Password login was requested but username or password is missing.
    Raised before any request is sent.
    """

    message = "insufficient credentials provided to login."
    error_code = "INSUFFICIENT_CREDENTIALS"


class BadCredentialsError(LoginError):
    """The service rejected the username/password pair."""

    message = "bad username or password."
    error_code = "BAD_CREDENTIALS"

    def __init__(self, message: Optional[str] = None, service_message: Optional[str] = None):
        super().__init__(message)
        self.service_message = service_message


class NoKeyError(LoginError):
    """
    No session cookie is available for a cookie login.
    The caller should retry with a password login.
    """

    message = "no login cookie available."
    error_code = "NO_KEY"


class KeyExpiredError(LoginError):
    """
    The stored session cookie has expired.
    The caller should retry with a password login.
    """

    message = "required login cookie has expired."
    error_code = "KEY_EXPIRED"


class KeyRejectedError(LoginError):
    """The service did not accept the stored session cookie."""

    message = "login cookie not accepted."
    error_code = "KEY_REJECTED"


class TransportError(BurpError):
    """
    Raised when a request could not be completed: connection failure,
    timeout or TLS failure.
    """

    message = "request to the AUR failed"
    error_code = "TRANSPORT_ERROR"

    NETWORK = "network"
    TIMEOUT = "timeout"
    TLS = "tls"

    def __init__(self, message: Optional[str] = None, kind: str = NETWORK):
        super().__init__(message)
        self.kind = kind


class ProtocolError(BurpError):
    """Raised when a response from the AUR cannot be understood."""

    message = "unexpected response from the AUR"
    error_code = "PROTOCOL_ERROR"


class UploadError(BurpError):
    """
    A file upload was refused by the AUR. `message` holds the text the
    service returned.
    """

    message = "upload failed"
    error_code = "UPLOAD_FAILED"


class SessionStoreError(BurpError):
    """Raised when the cookie file exists but cannot be read, or cannot be written."""

    message = "cookie file I/O failed"
    error_code = "SESSION_STORE_IO"


class SessionError(BurpError):
    """Raised when an operation needs a login that has not happened."""

    message = "Not authenticated. Call login() first."
    error_code = "NOT_AUTHENTICATED"
