#!/usr/bin/env python3
"""
Utility functions for burp: size/time formatting and console output.
"""

import shutil
import sys
import logging
import wcwidth
from typing import List, Union

logger = logging.getLogger(__name__)


def format_time(seconds: float) -> str:
    """
    Format seconds into a human-readable time string.

    Args:
        seconds: Number of seconds

    Returns:
        Human-readable time string
    """
    hours, remainder = divmod(int(seconds), 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    elif minutes > 0:
        return f"{minutes}m {seconds}s"
    else:
        return f"{seconds}s"


def format_size(size_bytes: Union[int, float]) -> str:
    """
    Format a size in bytes to a human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable string with appropriate unit (B, KB, MB, GB)
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.2f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.2f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"


def format_speed(bytes_per_second: float) -> str:
    """
    Format a speed in bytes/second to a human-readable string.

    Args:
        bytes_per_second: Speed in bytes per second

    Returns:
        Human-readable string with appropriate unit (B/s, KB/s, MB/s, GB/s)
    """
    if bytes_per_second < 1024:
        return f"{bytes_per_second:.2f} B/s"
    elif bytes_per_second < 1024 * 1024:
        return f"{bytes_per_second / 1024:.2f} KB/s"
    elif bytes_per_second < 1024 * 1024 * 1024:
        return f"{bytes_per_second / (1024 * 1024):.2f} MB/s"
    else:
        return f"{bytes_per_second / (1024 * 1024 * 1024):.2f} GB/s"


def print_success(message: str) -> None:
    """Print a success line on stdout."""
    print(f"success: {message}")


def print_warning(message: str) -> None:
    """Print a warning line on stderr."""
    print(f"warning: {message}", file=sys.stderr)


def print_error(message: str) -> None:
    """Print an error line on stderr."""
    print(f"error: {message}", file=sys.stderr)


def get_visual_width(text) -> int:
    """
    Calculate the visual width of text, considering wide characters.

    Args:
        text: The string to calculate visual width for

    Returns:
        int: The visual width of the text
    """
    return wcwidth.wcswidth(str(text))


def pad_string(text, width) -> str:
    """
    Left-align a string in the given visual width, taking into account wide characters.

    Args:
        text: The string to pad
        width: The desired visual width

    Returns:
        str: The padded string
    """
    text_str = str(text)
    return text_str + " " * max(0, width - get_visual_width(text_str))


def print_multi_column_list(
    items: List[str], term_width: int = -1, indent: str = "\t", file=None
) -> None:
    """
    Print a list of strings in column-major order across the terminal width.

    Args:
        items: Strings to display
        term_width: Terminal width (auto-detected when -1)
        indent: Prefix for every row
        file: Stream to write to (default: stdout)
    """
    out = file or sys.stdout
    if not items:
        print("No items to display.", file=out)
        return

    if term_width == -1:
        try:
            term_width = shutil.get_terminal_size().columns
        except (AttributeError, OSError):
            term_width = 80

    max_width = max(get_visual_width(item) for item in items) + 4
    usable_width = max(1, term_width - get_visual_width(indent.expandtabs()))
    num_cols = max(1, usable_width // max_width)
    num_rows = (len(items) + num_cols - 1) // num_cols

    for row in range(num_rows):
        row_cells = []
        for col in range(num_cols):
            idx = col * num_rows + row
            if idx < len(items):
                row_cells.append(pad_string(items[idx], max_width))
        print(indent + "".join(row_cells).rstrip(), file=out)
