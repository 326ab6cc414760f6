#!/usr/bin/env python3
"""
Application, window title and input detection for AutoTime.
Handles all macOS-specific detection logic.
"""

import sys
from typing import Optional

try:
    from AppKit import NSWorkspace
    from Quartz import (
        CGEventSourceSecondsSinceLastEventType,
        CGWindowListCopyWindowInfo,
        kCGAnyInputEventType,
        kCGEventSourceStateHIDSystemState,
        kCGNullWindowID,
        kCGWindowListOptionOnScreenOnly,
    )
except ImportError:
    print(
        "Error: pyobjc frameworks not installed. "
        "Run: pip install pyobjc-framework-Cocoa pyobjc-framework-Quartz"
    )
    sys.exit(1)


class ApplicationDetector:
    """Detects the currently active application on macOS."""

    def get_active_application(self) -> Optional[str]:
        """Get the currently active application name."""
        try:
            workspace = NSWorkspace.sharedWorkspace()
            active_app = workspace.activeApplication()
            if active_app:
                return active_app["NSApplicationName"]
        except Exception as e:
            print(f"Error getting active application: {e}")
        return None


class WindowTitleDetector:
    """Reads the front window title of an application from the window server."""

    def get_window_title(self, app_name: str) -> str:
        """Get the title of the frontmost window for the given application.

        Without Screen Recording permission macOS hides window names, in
        which case an empty title is returned.
        """
        try:
            window_list = CGWindowListCopyWindowInfo(
                kCGWindowListOptionOnScreenOnly, kCGNullWindowID
            )

            for window in window_list or []:
                owner_name = window.get("kCGWindowOwnerName", "")
                if owner_name != app_name:
                    continue
                if window.get("kCGWindowLayer", 0) != 0:
                    continue
                window_title = window.get("kCGWindowName", "")
                if window_title and window_title.strip():
                    return window_title

        except Exception as e:
            print(f"Warning: Failed to get window title for {app_name}: {e}")

        return ""


class InputDetector:
    """Reports time since the last keyboard or mouse event."""

    def seconds_since_last_input(self) -> float:
        """Get system idle time in seconds."""
        try:
            return float(
                CGEventSourceSecondsSinceLastEventType(
                    kCGEventSourceStateHIDSystemState, kCGAnyInputEventType
                )
            )
        except Exception as e:
            print(f"Error getting system idle time: {e}")
            return 0.0
