#!/usr/bin/env python3
"""
Upload Service Module

Submits package archives to the AUR over an authenticated session.
"""

import os
import logging
import time
from typing import List
from urllib.parse import urljoin

from ..constants import (
    DEFAULT_UPLOAD_TIMEOUT,
    PACKAGE_PAGE_MARKER,
    UPLOAD_CATEGORY_FIELD,
    UPLOAD_FILE_FIELD,
    UPLOAD_PATH,
    UPLOAD_SUBMIT_FIELD,
    UPLOAD_TOKEN_FIELD,
)
from ..exceptions import ProtocolError, SessionError, TransportError, UploadError
from ..models import UploadResult
from ..parsers import extract_error
from ..transport import Transport
from ..utils import format_size, format_time
from .auth_service import AuthService
from .category_service import CategoryService

logger = logging.getLogger(__name__)

ERROR_FILE = "file"
ERROR_UPLOAD = "upload"
ERROR_PROTOCOL = "protocol"
ERROR_TRANSPORT = "transport"


class UploadService:
    """Service for handling file upload operations."""

    def __init__(
        self,
        transport: Transport,
        auth: AuthService,
        upload_timeout: int = DEFAULT_UPLOAD_TIMEOUT,
        show_progress: bool = False,
    ):
        """
        Initialize the upload service.

        Args:
            transport: Transport bound to the AUR domain
            auth: Authentication service holding the session
            upload_timeout: Timeout in seconds for a single upload request
            show_progress: Show a progress bar while sending each file
        """
        self.transport = transport
        self.auth = auth
        self.upload_timeout = upload_timeout
        self.show_progress = show_progress

    def upload(self, file_path: str, category_id: str) -> UploadResult:
        """
        Upload a single package archive.

        Failures are reported in the returned UploadResult, never raised, so
        one bad file does not stop a batch.

        Args:
            file_path: Path to the archive
            category_id: Category id from the category table, or the unspecified sentinel

        Returns:
            UploadResult for the file

        Raises:
            SessionError: If called before a successful login
            ValueError: If category_id is not a known category id
        """
        if not self.auth.is_authenticated:
            raise SessionError()
        if not CategoryService.is_valid_id(category_id):
            raise ValueError(f"invalid category id: {category_id}")

        file_name = os.path.basename(file_path)

        if not os.path.isfile(file_path) or not os.access(file_path, os.R_OK):
            logger.error(f"File not found or not readable: {file_path}")
            return self._failure(file_path, category_id, f"cannot read file {file_path}", ERROR_FILE)

        token = self.auth.token
        fields = {
            UPLOAD_TOKEN_FIELD: token.value,
            UPLOAD_SUBMIT_FIELD: "1",
            UPLOAD_CATEGORY_FIELD: category_id,
        }

        logger.debug(
            f"Uploading {file_name} in category {CategoryService.name_for(category_id)} ({category_id})"
        )
        start_time = time.time()
        try:
            response = self.transport.post_file(
                UPLOAD_PATH,
                fields,
                UPLOAD_FILE_FIELD,
                file_path,
                timeout=self.upload_timeout,
                show_progress=self.show_progress,
            )
            package_url = self._process_upload_response(response)
        except UploadError as e:
            logger.error(f"The AUR rejected {file_name}: {e.message}")
            return self._failure(file_path, category_id, e.message, ERROR_UPLOAD)
        except ProtocolError as e:
            logger.error(f"Could not understand the response for {file_name}: {e.message}")
            return self._failure(file_path, category_id, e.message, ERROR_PROTOCOL)
        except TransportError as e:
            return self._failure(file_path, category_id, e.message, ERROR_TRANSPORT)
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            return self._failure(file_path, category_id, str(e), ERROR_FILE)

        elapsed = time.time() - start_time
        logger.info(
            f"Uploaded {file_name} ({format_size(os.path.getsize(file_path))}) in {format_time(elapsed)}"
        )
        return UploadResult(
            success=True,
            file_path=file_path,
            file_name=file_name,
            category=category_id,
            package_url=package_url,
        )

    def upload_many(self, file_paths: List[str], category_id: str) -> List[UploadResult]:
        """
        Upload files one after another. Every file is attempted, whatever
        happened to the previous ones.

        Args:
            file_paths: Paths to the archives
            category_id: Category id applied to every file

        Returns:
            List of UploadResult in input order
        """
        results = []
        for file_path in file_paths:
            results.append(self.upload(file_path, category_id))
        return results

    def _process_upload_response(self, response) -> str:
        """
        Decide whether the AUR accepted the upload.

        Args:
            response: Response to the submit request

        Returns:
            URL of the package page the AUR redirected to

        Raises:
            UploadError: The page carries an error message from the AUR
            ProtocolError: The response matches neither outcome
        """
        body = response.text or ""
        error = extract_error(body)
        if error:
            raise UploadError(error)

        status = response.status_code
        if 300 <= status < 400:
            location = response.headers.get("Location", "")
            if PACKAGE_PAGE_MARKER in location:
                return urljoin(self.transport.base_url + "/", location)
            raise ProtocolError(f"unexpected redirect to '{location}'")

        if 200 <= status < 300:
            raise ProtocolError("could not find an upload result in the response")

        raise ProtocolError(f"unexpected HTTP status {status}")

    @staticmethod
    def _failure(file_path: str, category_id: str, message: str, error_type: str) -> UploadResult:
        return UploadResult(
            success=False,
            file_path=file_path,
            file_name=os.path.basename(file_path),
            category=category_id,
            error=message,
            error_type=error_type,
        )
