#!/usr/bin/env python3
"""
HTTPS transport for talking to the AUR.
"""

import mimetypes
import os
import time
from http.cookiejar import http2time
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, List, Optional

import requests
from requests_toolbelt import MultipartEncoder, MultipartEncoderMonitor
from tqdm import tqdm

from . import __version__
from .constants import DEFAULT_MIME_TYPE, DEFAULT_TIMEOUT, FILE_OPEN_MODE
from .exceptions import TransportError
from .logging_utils import get_logger
from .models import SessionToken
from .utils import format_speed

logger = get_logger(__name__)

USER_AGENT = f"burp/{__version__}"


class Transport:
    """Issues requests to one AUR domain over a shared requests session."""

    def __init__(self, domain: str, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the transport.

        Args:
            domain: Host (and optional port) of the AUR
            timeout: Timeout in seconds applied to every request
        """
        self.domain = domain
        self.base_url = f"https://{domain}"
        self.timeout = timeout
        self.session = requests.Session()
        # Certificate verification is mandatory.
        self.session.verify = True
        self.session.headers.update({"User-Agent": USER_AGENT})

    def url(self, path: str) -> str:
        """Build an absolute URL on the configured domain."""
        return f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
        timeout: Optional[float] = None,
        allow_redirects: bool = False,
    ) -> requests.Response:
        """
        Send a request and return the raw response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra request headers
            data: Form dict or multipart encoder
            timeout: Override for the default timeout
            allow_redirects: Whether to follow redirects

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: On connection failure, timeout or TLS failure
        """
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=timeout or self.timeout,
                allow_redirects=allow_redirects,
                verify=True,
            )
        except requests.exceptions.SSLError as e:
            logger.error(f"TLS error talking to {self.domain}: {e}")
            raise TransportError(f"TLS error: {e}", kind=TransportError.TLS) from e
        except requests.exceptions.Timeout as e:
            logger.error(f"Request to {url} timed out")
            raise TransportError(f"request timed out: {e}", kind=TransportError.TIMEOUT) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"network error: {e}", kind=TransportError.NETWORK) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", self.url(path), **kwargs)

    def post(self, path: str, **kwargs) -> requests.Response:
        return self.request("POST", self.url(path), **kwargs)

    def set_cookie(self, token: SessionToken) -> None:
        """Attach a session cookie to all following requests."""
        self.session.cookies.set(token.name, token.value, domain=self.domain.split(":")[0], path="/")

    def clear_cookie(self, name: str) -> None:
        """Drop a cookie from the session jar."""
        for cookie in list(self.session.cookies):
            if cookie.name == name:
                self.session.cookies.clear(cookie.domain, cookie.path, cookie.name)

    @staticmethod
    def capture_cookie(response: requests.Response, name: str) -> Optional[SessionToken]:
        """
        Extract a cookie set by a response.

        Args:
            response: Response to inspect
            name: Cookie name

        Returns:
            SessionToken for the cookie, or None if the response did not set it
        """
        for cookie in response.cookies:
            if cookie.name == name:
                return SessionToken(value=cookie.value or "", name=name, expires=cookie.expires)
        return None

    @staticmethod
    def set_cookie_headers(response: requests.Response) -> List[str]:
        """Every Set-Cookie header of a response, unfolded."""
        raw_headers = getattr(response.raw, "headers", None)
        if raw_headers is not None and hasattr(raw_headers, "getlist"):
            return raw_headers.getlist("Set-Cookie")
        header = response.headers.get("Set-Cookie")
        return [header] if header else []

    @staticmethod
    def cookie_cleared(response: requests.Response, name: str) -> bool:
        """
        Check whether a response tells the client to drop a cookie.

        The cookie jar silently discards such cookies, so the raw
        Set-Cookie headers are inspected instead.
        """
        for header in Transport.set_cookie_headers(response):
            cookie = SimpleCookie()
            try:
                cookie.load(header)
            except CookieError as e:
                logger.debug(f"Ignoring unparsable Set-Cookie header: {e}")
                continue
            morsel = cookie.get(name)
            if morsel is None:
                continue
            if morsel.value in ("", "deleted"):
                return True
            max_age = morsel["max-age"]
            if max_age and max_age.lstrip("-").isdigit() and int(max_age) <= 0:
                return True
            expires = http2time(morsel["expires"]) if morsel["expires"] else None
            if expires is not None and expires <= time.time():
                return True
        return False

    def multipart(
        self,
        fields: Dict[str, str],
        file_field: str,
        file_obj,
        file_name: str,
        show_progress: bool = False,
    ):
        """
        Build a multipart body with form fields and one file part.

        Args:
            fields: Form fields to send alongside the file
            file_field: Name of the file part
            file_obj: Open binary file object
            file_name: Filename reported to the server
            show_progress: Wrap the body in a monitor that drives a tqdm progress bar

        Returns:
            Tuple of (body, progress bar or None)
        """
        mime_type = mimetypes.guess_type(file_name)[0] or DEFAULT_MIME_TYPE
        logger.debug(f"Using MIME type {mime_type} for file {file_name}")
        encoder = MultipartEncoder(fields={**fields, file_field: (file_name, file_obj, mime_type)})

        if not show_progress:
            return encoder, None

        pbar = tqdm(
            total=encoder.len,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=f"↑ {file_name}",
            bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]{postfix}",
        )
        start_time = time.time()
        last_bytes = [0]

        def on_progress(monitor):
            delta = monitor.bytes_read - last_bytes[0]
            if delta > 0:
                pbar.update(delta)
                last_bytes[0] = monitor.bytes_read
                elapsed = time.time() - start_time
                if elapsed > 0:
                    pbar.set_postfix_str(format_speed(monitor.bytes_read / elapsed))

        return MultipartEncoderMonitor(encoder, on_progress), pbar

    def post_file(
        self,
        path: str,
        fields: Dict[str, str],
        file_field: str,
        file_path: str,
        timeout: Optional[float] = None,
        show_progress: bool = False,
    ) -> requests.Response:
        """
        POST a local file as multipart form data.

        Raises:
            TransportError: On connection failure, timeout or TLS failure
            OSError: If the file cannot be opened
        """
        file_name = os.path.basename(file_path)
        with open(file_path, FILE_OPEN_MODE) as file_obj:
            body, pbar = self.multipart(fields, file_field, file_obj, file_name, show_progress)
            try:
                return self.post(
                    path,
                    data=body,
                    headers={"Content-Type": body.content_type},
                    timeout=timeout,
                )
            finally:
                if pbar is not None:
                    pbar.close()

    def close(self) -> None:
        self.session.close()
