#!/usr/bin/env python3
"""
burp - upload packages to the Arch User Repository.
"""

__version__ = "5"
