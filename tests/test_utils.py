#!/usr/bin/env python3
"""Tests for utility functions."""

import io
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from burp.utils import (
    format_time,
    format_size,
    format_speed,
    get_visual_width,
    pad_string,
    print_error,
    print_multi_column_list,
    print_success,
    print_warning,
)


class TestFormatTime:
    """Tests for format_time function."""

    def test_seconds_only(self):
        """Should format seconds correctly."""
        assert format_time(30) == "30s"
        assert format_time(0) == "0s"

    def test_minutes_and_seconds(self):
        assert format_time(90) == "1m 30s"
        assert format_time(3599) == "59m 59s"

    def test_hours_minutes_seconds(self):
        assert format_time(3661) == "1h 1m 1s"

    def test_float_input(self):
        """Should truncate fractional seconds."""
        assert format_time(90.9) == "1m 30s"


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_larger_units(self):
        assert format_size(1536) == "1.50 KB"
        assert format_size(1024 * 1024 * 500) == "500.00 MB"
        assert format_size(1024 * 1024 * 1024 * 2.5) == "2.50 GB"


class TestFormatSpeed:
    """Tests for format_speed function."""

    def test_units(self):
        assert format_speed(512) == "512.00 B/s"
        assert format_speed(1024 * 100) == "100.00 KB/s"
        assert format_speed(1024 * 1024 * 50) == "50.00 MB/s"
        assert format_speed(1024 * 1024 * 1024) == "1.00 GB/s"


class TestVisualWidth:
    """Tests for wide-character aware padding."""

    def test_ascii(self):
        assert get_visual_width("devel") == 5

    def test_wide_characters(self):
        assert get_visual_width("日本") == 4

    def test_pad_left(self):
        assert pad_string("kde", 6) == "kde   "

    def test_pad_wide_characters(self):
        assert pad_string("日本", 6) == "日本  "

    def test_no_truncation(self):
        assert pad_string("multimedia", 4) == "multimedia"


class TestMultiColumnList:
    """Tests for column layout."""

    def test_column_major_order(self):
        out = io.StringIO()

        print_multi_column_list(["a", "b", "c", "d", "e"], term_width=20, indent="", file=out)

        # Cells are 5 wide, so 4 columns fit and 2 rows are needed.
        assert out.getvalue().splitlines() == ["a    c    e", "b    d"]

    def test_single_column_when_narrow(self):
        out = io.StringIO()

        print_multi_column_list(["daemons", "devel"], term_width=5, indent="", file=out)

        assert out.getvalue().splitlines() == ["daemons", "devel"]

    def test_indent(self):
        out = io.StringIO()
        print_multi_column_list(["x11"], term_width=80, file=out)
        assert out.getvalue() == "\tx11\n"

    def test_empty(self):
        out = io.StringIO()
        print_multi_column_list([], file=out)
        assert out.getvalue() == "No items to display.\n"


class TestMessages:
    def test_success_on_stdout(self, capsys):
        print_success("uploaded foo.tar.gz")
        assert capsys.readouterr().out == "success: uploaded foo.tar.gz\n"

    def test_warning_and_error_on_stderr(self, capsys):
        print_warning("careful")
        print_error("broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "warning: careful\nerror: broken\n"
