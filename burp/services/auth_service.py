#!/usr/bin/env python3
"""
Authentication Service Module

Establishes an AUR session, either by reusing a stored session cookie or by
logging in with a username and password.
"""

import logging
from typing import Optional

from ..constants import (
    LOGIN_PASSWORD_FIELD,
    LOGIN_PATH,
    LOGIN_REMEMBER_FIELD,
    LOGIN_USER_FIELD,
    SESSION_CHECK_PATH,
    SESSION_COOKIE_NAME,
)
from ..exceptions import (
    BadCredentialsError,
    InsufficientCredentialsError,
    KeyExpiredError,
    KeyRejectedError,
    NoKeyError,
    ProtocolError,
    SessionStoreError,
)
from ..models import AuthResult, SessionToken
from ..parsers import extract_error, is_logged_in
from ..session_store import SessionStore
from ..transport import Transport

logger = logging.getLogger(__name__)


class AuthService:
    """
    Logs in to the AUR.

    A login attempt moves through NO_SESSION -> ATTEMPTING_COOKIE ->
    ATTEMPTING_PASSWORD and ends AUTHENTICATED or FAILED. The service never
    retries by itself: after NoKeyError or KeyExpiredError the caller decides
    whether to call login(force_password=True).
    """

    NO_SESSION = "no_session"
    ATTEMPTING_COOKIE = "attempting_cookie"
    ATTEMPTING_PASSWORD = "attempting_password"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"

    METHOD_COOKIE = "cookie"
    METHOD_PASSWORD = "password"

    def __init__(
        self,
        transport: Transport,
        session_store: SessionStore,
        cookie_path: Optional[str] = None,
        persist: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ):
        """
        Initialize the authentication service.

        Args:
            transport: Transport bound to the AUR domain
            session_store: Store used to read and persist the session cookie
            cookie_path: Cookie file to read from and persist to
            persist: Write the session cookie to cookie_path after login
            username: AUR username
            password: AUR password
        """
        self.transport = transport
        self.session_store = session_store
        self.cookie_path = cookie_path
        self.persist = persist
        self.username = username
        self.password = password
        self.state = self.NO_SESSION
        self._token: Optional[SessionToken] = None

    @property
    def token(self) -> Optional[SessionToken]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self.state == self.AUTHENTICATED and self._token is not None

    def login(self, force_password: bool = False) -> AuthResult:
        """
        Establish a session.

        Args:
            force_password: Skip the stored cookie and log in with the password

        Returns:
            AuthResult describing the session

        Raises:
            NoKeyError: No stored cookie and force_password is False
            KeyExpiredError: The stored cookie has expired
            KeyRejectedError: The AUR did not accept the stored cookie
            InsufficientCredentialsError: Username or password missing for a password login
            BadCredentialsError: The AUR rejected the username/password
            TransportError: The request could not be completed
            ProtocolError: The AUR answered with something unexpected
            SessionStoreError: The cookie file exists but cannot be read
        """
        self.state = self.NO_SESSION
        self._token = None
        try:
            if force_password:
                self.state = self.ATTEMPTING_PASSWORD
                token = self._password_login()
                method = self.METHOD_PASSWORD
            else:
                self.state = self.ATTEMPTING_COOKIE
                token = self._cookie_login()
                method = self.METHOD_COOKIE
        except Exception:
            self.state = self.FAILED
            raise

        self._token = token
        self.state = self.AUTHENTICATED
        logger.info(f"Logged in to {self.transport.domain} using {method}")

        persisted, persist_error = self._persist(token)
        return AuthResult(token=token, method=method, persisted=persisted, persist_error=persist_error)

    def _load_token(self) -> Optional[SessionToken]:
        if not self.cookie_path:
            return None
        token = self.session_store.load(self.cookie_path)
        if token is not None and token.name != SESSION_COOKIE_NAME:
            logger.debug(f"Ignoring cookie '{token.name}' in {self.cookie_path}")
            return None
        return token

    def _cookie_login(self) -> SessionToken:
        """Validate the stored session cookie against the AUR."""
        token = self._load_token()
        if token is None or not token.value:
            raise NoKeyError()

        if token.is_expired():
            logger.info("Stored session cookie has expired")
            raise KeyExpiredError()

        self.transport.set_cookie(token)
        response = self.transport.get(SESSION_CHECK_PATH, allow_redirects=True)

        if response.status_code >= 500:
            self.transport.clear_cookie(token.name)
            raise ProtocolError(f"unexpected HTTP status {response.status_code} while checking login cookie")

        if response.status_code == 200 and is_logged_in(response.text):
            refreshed = self.transport.capture_cookie(response, token.name)
            if refreshed is not None and refreshed.value:
                self.transport.set_cookie(refreshed)
                return refreshed
            return token

        self.transport.clear_cookie(token.name)
        if self.transport.cookie_cleared(response, token.name):
            logger.info("The AUR expired the session cookie")
            raise KeyExpiredError()
        logger.info("The AUR did not accept the session cookie")
        raise KeyRejectedError()

    def _password_login(self) -> SessionToken:
        """Log in with username and password and return the new session cookie."""
        if not self.username or not self.password:
            raise InsufficientCredentialsError()

        form = {
            LOGIN_USER_FIELD: self.username,
            LOGIN_PASSWORD_FIELD: self.password,
        }
        if self.persist:
            form[LOGIN_REMEMBER_FIELD] = "on"

        logger.debug(f"Logging in as {self.username}")
        response = self.transport.post(LOGIN_PATH, data=form)

        token = self.transport.capture_cookie(response, SESSION_COOKIE_NAME)
        if token is not None and token.value and not self.transport.cookie_cleared(response, SESSION_COOKIE_NAME):
            self.transport.set_cookie(token)
            return token

        if response.status_code >= 500:
            raise ProtocolError(f"unexpected HTTP status {response.status_code} from login")

        service_message = extract_error(response.text)
        if service_message:
            logger.debug(f"Login refused: {service_message}")
        raise BadCredentialsError(service_message=service_message)

    def _persist(self, token: SessionToken):
        """
        Write the session cookie to the cookie file when persistence is on.

        Returns:
            Tuple of (persisted, error message or None)
        """
        if not self.persist:
            return False, None
        if not self.cookie_path:
            logger.warning("Cookie persistence requested but no cookie file is configured")
            return False, "no cookie file configured"
        try:
            self.session_store.save(self.cookie_path, token)
        except SessionStoreError as e:
            logger.warning(f"Logged in, but could not save the session cookie: {e.message}")
            return False, e.message
        return True, None

