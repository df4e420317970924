#!/usr/bin/env python3
"""
Services package initialization.
"""

from .auth_service import AuthService
from .category_service import CategoryService
from .upload_service import UploadService

__all__ = ["AuthService", "CategoryService", "UploadService"]
