#!/usr/bin/env python3
"""
AUR endpoints, form field names and protocol markers.

These values describe the web interface of the AUR as the client talks to it.
"""

DEFAULT_DOMAIN = "aur.archlinux.org"

# ENDPOINTS
LOGIN_PATH = "/login"
SESSION_CHECK_PATH = "/"
UPLOAD_PATH = "/submit/"

# SESSION COOKIE
SESSION_COOKIE_NAME = "AURSID"

# LOGIN FORM
LOGIN_USER_FIELD = "user"
LOGIN_PASSWORD_FIELD = "passwd"
LOGIN_REMEMBER_FIELD = "remember_me"

# UPLOAD FORM
UPLOAD_TOKEN_FIELD = "token"
UPLOAD_SUBMIT_FIELD = "pkgsubmit"
UPLOAD_CATEGORY_FIELD = "category"
UPLOAD_FILE_FIELD = "pfile"

# A logged in page always links to the logout handler.
LOGGED_IN_MARKER = "/logout"
# Package pages live under this path; a successful submit lands there.
PACKAGE_PAGE_MARKER = "/packages/"

# TIMEOUTS (seconds)
DEFAULT_TIMEOUT = 30
DEFAULT_UPLOAD_TIMEOUT = 300

FILE_OPEN_MODE = "rb"
DEFAULT_MIME_TYPE = "application/octet-stream"
