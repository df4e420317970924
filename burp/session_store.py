#!/usr/bin/env python3
"""
Cookie file persistence for AUR session tokens.

The file holds a single session cookie. The store reads and writes it but
never looks inside the token value.
"""

import json
import os
from datetime import datetime, timezone
from typing import Optional

from .exceptions import SessionStoreError
from .logging_utils import get_logger
from .models import SessionToken

logger = get_logger(__name__)


class SessionStore:
    """Reads and writes a persisted session token at a file path."""

    FILE_MODE = 0o600

    def load(self, path: str) -> Optional[SessionToken]:
        """
        Load the session token stored at path.

        Args:
            path: Cookie file path

        Returns:
            The stored SessionToken, or None if the file does not exist or is empty

        Raises:
            SessionStoreError: If the file exists but cannot be read
        """
        if not os.path.exists(path):
            logger.debug(f"No cookie file at {path}")
            return None

        try:
            with open(path, "r") as f:
                content = f.read()
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise SessionStoreError(f"failed to read cookie file {path}: {e}") from e

        content = content.strip()
        if not content:
            return None

        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            # Plain file: the whole content is the cookie value.
            return SessionToken(value=content)

        if not isinstance(data, dict) or not data.get("value"):
            return SessionToken(value=content)

        expires = data.get("expires")
        if expires is not None:
            try:
                expires = int(expires)
            except (TypeError, ValueError) as e:
                raise SessionStoreError(f"malformed expiry in cookie file {path}: {expires!r}") from e

        return SessionToken(
            value=str(data["value"]),
            name=data.get("name") or SessionToken.name,
            expires=expires,
        )

    def save(self, path: str, token: SessionToken) -> None:
        """
        Write the session token to path, replacing any previous content.

        Args:
            path: Cookie file path
            token: The token to persist

        Raises:
            SessionStoreError: If the file cannot be written
        """
        payload = {
            "name": token.name,
            "value": token.value,
            "expires": token.expires,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            directory = os.path.dirname(path)
            if directory and not os.path.exists(directory):
                os.makedirs(directory, exist_ok=True)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
            with os.fdopen(fd, "w") as f:
                json.dump(payload, f, indent=2)
        except (IOError, OSError) as e:
            raise SessionStoreError(f"failed to write cookie file {path}: {e}") from e
        logger.debug(f"Saved session cookie to {path}")

    def clear(self, path: str) -> None:
        """
        Remove the cookie file at path if it exists.

        Raises:
            SessionStoreError: If the file exists but cannot be removed
        """
        try:
            os.unlink(path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise SessionStoreError(f"failed to remove cookie file {path}: {e}") from e
