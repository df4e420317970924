#!/usr/bin/env python3
"""
Category Service Module

The fixed table of AUR package categories and lookups against it.
"""

import bisect
import logging
import sys
from typing import List, Optional, Tuple

from ..utils import print_multi_column_list

logger = logging.getLogger(__name__)

# Sent when no category is given: the AUR keeps the current category of an
# existing package and uses "None" for a new one.
CATEGORY_UNSPECIFIED = "1"

# (name, id) pairs. This list must be sorted by name.
CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("daemons", "2"),
    ("devel", "3"),
    ("editors", "4"),
    ("emulators", "5"),
    ("fonts", "20"),
    ("games", "6"),
    ("gnome", "7"),
    ("i18n", "8"),
    ("kde", "9"),
    ("kernels", "19"),
    ("lib", "10"),
    ("modules", "11"),
    ("multimedia", "12"),
    ("network", "13"),
    ("office", "14"),
    ("science", "15"),
    ("system", "16"),
    ("x11", "17"),
    ("xfce", "18"),
)

_CATEGORY_NAMES = [name for name, _ in CATEGORIES]
_CATEGORY_IDS = frozenset(cat_id for _, cat_id in CATEGORIES)


class CategoryService:
    """Lookups against the category table."""

    @staticmethod
    def names() -> List[str]:
        return list(_CATEGORY_NAMES)

    @staticmethod
    def resolve(name: str) -> Optional[str]:
        """
        Look up a category id by name.

        Args:
            name: Category name as typed by the user

        Returns:
            The category id, or None if the name is not in the table
        """
        idx = bisect.bisect_left(_CATEGORY_NAMES, name)
        if idx < len(_CATEGORY_NAMES) and _CATEGORY_NAMES[idx] == name:
            return CATEGORIES[idx][1]
        return None

    @staticmethod
    def is_valid_id(category_id: str) -> bool:
        """Check that an id is in the table or is the unspecified sentinel."""
        return category_id == CATEGORY_UNSPECIFIED or category_id in _CATEGORY_IDS

    @staticmethod
    def name_for(category_id: str) -> str:
        """Human-readable name for an id, 'None' for the sentinel."""
        for name, cat_id in CATEGORIES:
            if cat_id == category_id:
                return name
        return "None"

    def list_categories(self, file=None) -> None:
        """Print the valid category names in columns."""
        out = file or sys.stderr
        print("Valid categories:", file=out)
        print_multi_column_list(self.names(), file=out)
