#!/usr/bin/env python3
"""
Main entry point for AutoTime.
This allows running the module with: python -m autotime
"""

from autotime.core import main

if __name__ == "__main__":
    main()
