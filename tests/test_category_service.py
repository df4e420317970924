#!/usr/bin/env python3
"""Tests for the category table."""

import io
import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from burp.services.category_service import CATEGORIES, CATEGORY_UNSPECIFIED, CategoryService


class TestCategoryTable:
    def test_sorted_by_name(self):
        """Lookups bisect the table, so it must stay sorted."""
        names = [name for name, _ in CATEGORIES]
        assert names == sorted(names)

    def test_ids_unique(self):
        ids = [cat_id for _, cat_id in CATEGORIES]
        assert len(ids) == len(set(ids))
        assert CATEGORY_UNSPECIFIED not in ids


class TestResolve:
    """Tests for name to id lookup."""

    @pytest.mark.parametrize(
        "name,expected",
        [("daemons", "2"), ("devel", "3"), ("fonts", "20"), ("kernels", "19"), ("x11", "17"), ("xfce", "18")],
    )
    def test_known_names(self, name, expected):
        assert CategoryService.resolve(name) == expected

    def test_every_entry(self):
        for name, cat_id in CATEGORIES:
            assert CategoryService.resolve(name) == cat_id

    @pytest.mark.parametrize("name", ["", "Devel", "aaa", "zzz", "help", "dev"])
    def test_unknown_names(self, name):
        assert CategoryService.resolve(name) is None


class TestIds:
    def test_is_valid_id(self):
        assert CategoryService.is_valid_id("3")
        assert CategoryService.is_valid_id(CATEGORY_UNSPECIFIED)
        assert not CategoryService.is_valid_id("0")
        assert not CategoryService.is_valid_id("devel")

    def test_name_for(self):
        assert CategoryService.name_for("12") == "multimedia"
        assert CategoryService.name_for(CATEGORY_UNSPECIFIED) == "None"


class TestListCategories:
    def test_lists_every_name(self):
        out = io.StringIO()

        CategoryService().list_categories(file=out)

        text = out.getvalue()
        assert text.startswith("Valid categories:\n")
        for name, _ in CATEGORIES:
            assert name in text

    def test_defaults_to_stderr(self, capsys):
        CategoryService().list_categories()
        captured = capsys.readouterr()
        assert "Valid categories:" in captured.err
        assert captured.out == ""
