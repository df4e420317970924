#!/usr/bin/env python3
"""
burp - Command Line Interface
Upload packages to the Arch User Repository
"""

import sys

from burp import burp_uploader

if __name__ == "__main__":
    sys.exit(burp_uploader.main())
