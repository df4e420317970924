#!/usr/bin/env python3
"""
Command Handlers Module

Contains handler functions for each CLI command.
Separates command routing from the client logic.
"""

import logging
import sys
from typing import List

from .aur_client import AurClient
from .config import ClientConfig
from .exceptions import (
    BadCredentialsError,
    BurpError,
    InsufficientCredentialsError,
    KeyExpiredError,
    KeyRejectedError,
    NoKeyError,
)
from .models import AuthResult
from .services import CategoryService
from .utils import print_error, print_success, print_warning

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def handle_list_categories_command() -> int:
    """
    Handle `-c help`: print the valid category names.

    Returns:
        Exit status
    """
    CategoryService().list_categories()
    return EXIT_SUCCESS


def make_login_error(error: BurpError) -> int:
    """
    Print a login failure the way the user expects to read it.

    Args:
        error: The classified login failure

    Returns:
        Exit status
    """
    if isinstance(error, (InsufficientCredentialsError, BadCredentialsError, KeyExpiredError, KeyRejectedError)):
        print_error(error.message)
    else:
        print_error(f"failed to login to AUR: {error.message}")
    return EXIT_FAILURE


def login(client: AurClient) -> AuthResult:
    """
    Log in with the stored cookie, falling back to the password exactly once
    when there is no cookie or it has expired.

    Args:
        client: Configured client

    Returns:
        AuthResult of the successful attempt

    Raises:
        BurpError: The classified failure of the last attempt
    """
    try:
        return client.login(force_password=False)
    except KeyExpiredError:
        print_warning("Your cookie has expired -- using password login")
    except NoKeyError:
        logger.debug("No login cookie found, using password login")
    return client.login(force_password=True)


def handle_upload_command(config: ClientConfig, files: List[str]) -> int:
    """
    Handle the file upload command.

    Args:
        config: Resolved client configuration
        files: Paths of the archives to upload

    Returns:
        Exit status: 0 if login and every upload succeeded, 1 otherwise
    """
    try:
        client = AurClient.from_config(config)
    except BurpError as e:
        print_error(f"failed to create AUR client: {e.message}")
        return EXIT_FAILURE

    with client:
        try:
            result = login(client)
        except BurpError as e:
            return make_login_error(e)

        if result.persist_error:
            print_warning(f"failed to save login cookie: {result.persist_error}")

        status = EXIT_SUCCESS
        for upload_result in client.upload_many(files, config.category):
            if upload_result.success:
                print_success(f"uploaded {upload_result.file_path}")
            else:
                print(
                    f"failed to upload {upload_result.file_path}: {upload_result.error}",
                    file=sys.stderr,
                )
                status = EXIT_FAILURE

    return status
