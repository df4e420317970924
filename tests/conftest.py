#!/usr/bin/env python3
"""Pytest configuration and shared fixtures."""

import io
import os
import sys
import time
import pytest
import requests
from requests.cookies import create_cookie
from urllib3.response import HTTPResponse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from burp.models import SessionToken
from burp.session_store import SessionStore
from burp.transport import Transport

DOMAIN = "aur.archlinux.org"

LOGGED_IN_PAGE = """
<html><body>
<div id="archdev-navbar"><ul>
  <li><a href="/packages/">Packages</a></li>
  <li><a href="/logout/">Logout</a></li>
</ul></div>
</body></html>
"""

LOGGED_OUT_PAGE = """
<html><body>
<form method="post" action="/login"><input type="text" name="user" /></form>
</body></html>
"""


@pytest.fixture
def make_response():
    """Factory for real requests.Response objects."""

    def _make(status_code=200, body="", headers=None, cookies=None, url=None, set_cookies=None):
        response = requests.Response()
        response.status_code = status_code
        response._content = body.encode("utf-8")
        response.encoding = "utf-8"
        response.headers.update(headers or {})
        # One Set-Cookie header per entry on the wire, folded in response.headers.
        raw_headers = [("Set-Cookie", value) for value in set_cookies or []]
        response.raw = HTTPResponse(
            body=io.BytesIO(b""), headers=raw_headers, status=status_code, preload_content=False
        )
        if set_cookies:
            response.headers["Set-Cookie"] = ", ".join(set_cookies)
        response.url = url or f"https://{DOMAIN}/"
        for name, value, expires in cookies or []:
            response.cookies.set_cookie(
                create_cookie(name, value, domain=DOMAIN, path="/", expires=expires)
            )
        return response

    return _make


@pytest.fixture
def login_response(make_response):
    """Response to a successful password login."""
    expires = int(time.time()) + 30 * 24 * 3600
    return make_response(
        302,
        headers={"Location": "/"},
        cookies=[("AURSID", "fresh_token", expires)],
    )


@pytest.fixture
def transport():
    t = Transport(DOMAIN)
    yield t
    t.close()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def cookie_path(tmp_path):
    return str(tmp_path / "cookies")


@pytest.fixture
def saved_token(store, cookie_path):
    """A valid-looking session cookie already persisted at cookie_path."""
    token = SessionToken(value="stored_token", expires=int(time.time()) + 3600)
    store.save(cookie_path, token)
    return token


@pytest.fixture
def package_file(tmp_path):
    """Create a source package archive for upload testing."""
    path = tmp_path / "foo-1.0-1.src.tar.gz"
    path.write_bytes(b"\x1f\x8b fake source package")
    return str(path)


@pytest.fixture
def other_package_file(tmp_path):
    path = tmp_path / "bar-2.3-1.src.tar.gz"
    path.write_bytes(b"\x1f\x8b another fake source package")
    return str(path)
