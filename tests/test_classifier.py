"""Tests for window title classification."""

import unittest

from autotime.classifier import TitleClassifier, classify


class TestClassify(unittest.TestCase):
    """Test cases for the built-in classification rules."""

    def test_davinci_prefix_stripped(self):
        result = classify("DaVinci Resolve", "DaVinci Resolve - Campaign_Video_Final ")
        self.assertEqual(result, "Campaign_Video_Final")

    def test_davinci_without_prefix_is_trimmed(self):
        self.assertEqual(classify("DaVinci Resolve", "  Project Manager "), "Project Manager")

    def test_davinci_prefix_only_stripped_at_start(self):
        self.assertEqual(
            classify("DaVinci Resolve", "Backup of DaVinci Resolve - Promo"),
            "Backup of DaVinci Resolve - Promo",
        )
        self.assertEqual(
            classify("DaVinci Resolve", "DaVinci Resolve - DaVinci Resolve - Promo"),
            "DaVinci Resolve - Promo",
        )

    def test_browser_uses_tab_title(self):
        self.assertEqual(
            classify("Google Chrome", "  GitHub - Activity Tracker  "),
            "GitHub - Activity Tracker",
        )
        self.assertEqual(classify("Safari", "Docs"), "Docs")
        self.assertEqual(classify("Firefox", "MDN - Web Docs"), "MDN - Web Docs")

    def test_final_cut_takes_first_segment(self):
        self.assertEqual(
            classify("Final Cut Pro", "Product_Launch_Assets - Final Cut Pro"),
            "Product_Launch_Assets",
        )

    def test_premiere_takes_first_segment(self):
        self.assertEqual(
            classify("Adobe Premiere Pro", "Client_Review_Edit - Adobe Premiere Pro"),
            "Client_Review_Edit",
        )
        self.assertEqual(
            classify("Premiere Pro", "Shorts_v3 - Premiere Pro"), "Shorts_v3"
        )

    def test_xcode_splits_on_em_dash(self):
        self.assertEqual(
            classify("Xcode", "AutoTime — Edited — Xcode"), "AutoTime"
        )

    def test_vscode_suffix_stripped(self):
        self.assertEqual(
            classify("Code", "main.py — my-project — Visual Studio Code"),
            "main.py — my-project",
        )
        self.assertEqual(
            classify("Visual Studio Code", "notes.md - Visual Studio Code"),
            "notes.md",
        )

    def test_default_uses_trimmed_title(self):
        self.assertEqual(classify("Slack", " general - Acme "), "general - Acme")

    def test_empty_and_whitespace_titles(self):
        for app in ["DaVinci Resolve", "Safari", "Xcode", "Code", "Slack"]:
            self.assertEqual(classify(app, ""), "")
            self.assertEqual(classify(app, "   "), "")
            self.assertEqual(classify(app, None), "")

    def test_classification_is_repeatable(self):
        first = classify("Final Cut Pro", "Edit - Final Cut Pro")
        second = classify("Final Cut Pro", "Edit - Final Cut Pro")
        self.assertEqual(first, second)


class TestTitleClassifier(unittest.TestCase):
    """Test cases for custom rule tables."""

    def test_custom_prefix_rule(self):
        classifier = TitleClassifier(prefixes={"Logic Pro": "Logic Pro - "})
        self.assertEqual(classifier.classify("Logic Pro", "Logic Pro - Album"), "Album")

    def test_custom_separator_rule(self):
        classifier = TitleClassifier(separators={"Figma": " – "})
        self.assertEqual(classifier.classify("Figma", "Landing page – Figma"), "Landing page")

    def test_custom_rules_keep_builtins(self):
        classifier = TitleClassifier(prefixes={"Logic Pro": "Logic Pro - "})
        self.assertEqual(
            classifier.classify("DaVinci Resolve", "DaVinci Resolve - Promo"), "Promo"
        )


if __name__ == "__main__":
    unittest.main()
