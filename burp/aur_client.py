#!/usr/bin/env python3
"""
AUR client: one handle for logging in and uploading packages.
"""

import os
import re
import tempfile
from typing import Any, List, Optional

from .config import ClientConfig
from .constants import DEFAULT_DOMAIN, DEFAULT_TIMEOUT, DEFAULT_UPLOAD_TIMEOUT
from .exceptions import ConfigValidationError, SessionError
from .logging_utils import get_logger
from .models import AuthResult, UploadResult
from .services import AuthService, UploadService
from .session_store import SessionStore
from .transport import Transport

logger = get_logger(__name__)

_HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def validate_domain(domain: str) -> str:
    """
    Check that domain is a host name, optionally followed by a port.

    Args:
        domain: Domain as given by the user

    Returns:
        The domain, unchanged

    Raises:
        ConfigValidationError: If the domain is malformed
    """
    if not domain or not isinstance(domain, str):
        raise ConfigValidationError("domain must be a non-empty string")

    host, sep, port = domain.partition(":")
    if sep and (not port.isdigit() or not 0 < int(port) < 65536):
        raise ConfigValidationError(f"invalid port in domain: {domain}")
    if len(host) > 253:
        raise ConfigValidationError(f"domain is too long: {domain}")
    if not all(_HOSTNAME_LABEL.match(label) for label in host.split(".")):
        raise ConfigValidationError(f"invalid domain: {domain}")
    return domain


class AurClient:
    """
    Client for uploading packages to the AUR.

    Configure it, call login(), then upload(). Settings cannot change once
    login() has been called.

    Example:
        with AurClient() as client:
            client.set_username("alice")
            client.set_password("secret")
            client.login(force_password=True)
            client.upload("foo-1.0-1.src.tar.gz", CATEGORY_UNSPECIFIED)
    """

    def __init__(
        self,
        domain: str = DEFAULT_DOMAIN,
        insecure: bool = False,
        timeout: int = DEFAULT_TIMEOUT,
        upload_timeout: int = DEFAULT_UPLOAD_TIMEOUT,
        show_progress: bool = False,
    ):
        """
        Initialize the client.

        Args:
            domain: Host of the AUR
            insecure: Reserved for a future TLS opt-out; certificates are always verified
            timeout: Timeout in seconds for login requests
            upload_timeout: Timeout in seconds for each upload request
            show_progress: Show a progress bar for each upload
        """
        self.domain = validate_domain(domain)
        self.insecure = insecure
        self.upload_timeout = upload_timeout
        self.show_progress = show_progress

        self._username: Optional[str] = None
        self._password: Optional[str] = None
        self._cookie_path: Optional[str] = None
        self._temp_cookie_path: Optional[str] = None
        self._persist = False
        self._login_started = False

        self.transport = Transport(self.domain, timeout=timeout)
        self.session_store = SessionStore()
        self._auth: Optional[AuthService] = None
        self._uploader: Optional[UploadService] = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> "AurClient":
        """
        Build a configured client from a ClientConfig.

        Args:
            config: Resolved configuration

        Returns:
            AurClient ready for login()
        """
        client = cls(
            config.domain,
            timeout=config.timeout,
            upload_timeout=config.upload_timeout,
            show_progress=not config.quiet,
        )
        if config.username:
            client.set_username(config.username)
        if config.password:
            client.set_password(config.password)
        if config.cookie_path:
            client.set_cookie_path(config.cookie_path)
        if config.persist:
            client.set_persist(config.persist)
        return client

    def __enter__(self) -> "AurClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _check_configurable(self) -> None:
        if self._login_started:
            raise RuntimeError("client settings cannot change after login()")

    def set_username(self, username: str) -> None:
        self._check_configurable()
        self._username = username

    def set_password(self, password: str) -> None:
        self._check_configurable()
        self._password = password

    def set_cookie_path(self, path: str) -> None:
        self._check_configurable()
        self._cookie_path = path

    def set_persist(self, persist: bool) -> None:
        self._check_configurable()
        self._persist = bool(persist)

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def persist(self) -> bool:
        return self._persist

    @property
    def cookie_path(self) -> str:
        """
        The cookie file in use: the one configured, or a temporary file
        created on first use and removed by close().
        """
        if self._cookie_path:
            return self._cookie_path
        if self._temp_cookie_path is None:
            fd, self._temp_cookie_path = tempfile.mkstemp(prefix="burp-", suffix=".cookies")
            os.close(fd)
            logger.debug(f"Using temporary cookie file {self._temp_cookie_path}")
        return self._temp_cookie_path

    @property
    def is_authenticated(self) -> bool:
        return self._auth is not None and self._auth.is_authenticated

    def _get_auth(self) -> AuthService:
        if self._auth is None:
            if self._persist and not self._cookie_path:
                logger.warning("Persistent cookies requested without a cookie file; the cookie will not outlive this run")
            self._auth = AuthService(
                self.transport,
                self.session_store,
                cookie_path=self.cookie_path,
                persist=self._persist,
                username=self._username,
                password=self._password,
            )
        return self._auth

    def login(self, force_password: bool = False) -> AuthResult:
        """
        Log in to the AUR.

        Args:
            force_password: Skip the stored cookie and use username/password

        Returns:
            AuthResult for the new session

        Raises:
            LoginError: A classified login failure (see AuthService.login)
            TransportError: The request could not be completed
            ProtocolError: The AUR answered with something unexpected
            SessionStoreError: The cookie file exists but cannot be read
        """
        self._login_started = True
        return self._get_auth().login(force_password)

    def _get_uploader(self) -> UploadService:
        if not self.is_authenticated:
            raise SessionError()
        if self._uploader is None:
            self._uploader = UploadService(
                self.transport,
                self._auth,
                upload_timeout=self.upload_timeout,
                show_progress=self.show_progress,
            )
        return self._uploader

    def upload(self, file_path: str, category_id: str) -> UploadResult:
        """
        Upload one package archive.

        Raises:
            SessionError: If login() has not succeeded
        """
        return self._get_uploader().upload(file_path, category_id)

    def upload_many(self, file_paths: List[str], category_id: str) -> List[UploadResult]:
        """
        Upload several archives in order; a failure does not stop the rest.

        Raises:
            SessionError: If login() has not succeeded
        """
        return self._get_uploader().upload_many(file_paths, category_id)

    def close(self) -> None:
        """Close the HTTP session and remove the temporary cookie file, if any."""
        self.transport.close()
        if self._temp_cookie_path:
            try:
                os.unlink(self._temp_cookie_path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove temporary cookie file {self._temp_cookie_path}: {e}")
            self._temp_cookie_path = None
