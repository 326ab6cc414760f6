#!/usr/bin/env python3
"""
Window title classification for AutoTime.
Maps an application name and its raw window title to a project label.
"""

from typing import Dict, Iterable, Optional


class TitleClassifier:
    """Normalizes window titles into project labels using per-app rules."""

    # Titles look like "DaVinci Resolve - <project>"
    PREFIXES: Dict[str, str] = {
        "DaVinci Resolve": "DaVinci Resolve - ",
    }

    BROWSERS = frozenset(
        ["Google Chrome", "Safari", "Firefox", "Arc", "Microsoft Edge"]
    )

    # Titles look like "<project> - Final Cut Pro" or "<file> — Edited — Xcode"
    SEPARATORS: Dict[str, str] = {
        "Final Cut Pro": " - ",
        "Adobe Premiere Pro": " - ",
        "Premiere Pro": " - ",
        "Xcode": " — ",
    }

    # Titles look like "main.py — my-project — Visual Studio Code"
    SUFFIXES: Dict[str, Iterable[str]] = {
        "Visual Studio Code": (" — Visual Studio Code", " - Visual Studio Code"),
        "Code": (" — Visual Studio Code", " - Visual Studio Code"),
    }

    def __init__(
        self,
        prefixes: Optional[Dict[str, str]] = None,
        separators: Optional[Dict[str, str]] = None,
        suffixes: Optional[Dict[str, Iterable[str]]] = None,
    ):
        self.prefixes = dict(self.PREFIXES)
        self.prefixes.update(prefixes or {})
        self.separators = dict(self.SEPARATORS)
        self.separators.update(separators or {})
        self.suffixes = dict(self.SUFFIXES)
        self.suffixes.update(suffixes or {})

    def classify(self, application: str, raw_title: Optional[str]) -> str:
        """Return the project label for a window of the given application."""
        title = raw_title or ""

        if application in self.prefixes:
            prefix = self.prefixes[application]
            if title.startswith(prefix):
                title = title[len(prefix):]
            return title.strip()

        if application in self.BROWSERS:
            return title.strip()

        if application in self.separators:
            return title.split(self.separators[application])[0].strip()

        if application in self.suffixes:
            for suffix in self.suffixes[application]:
                if title.endswith(suffix):
                    title = title[: -len(suffix)]
                    break
            return title.strip()

        return title.strip()


_default_classifier = TitleClassifier()


def classify(application: str, raw_title: Optional[str]) -> str:
    """Classify with the built-in rule set."""
    return _default_classifier.classify(application, raw_title)
