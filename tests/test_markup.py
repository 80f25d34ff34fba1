"""
Tests for inline message markup.

Covers:
- Color, background and style tags
- Reset on closing tags
- Icons
- Unknown tags left untouched
- strip() for plain sinks
"""

from logfan.colors import RESET
from logfan.markup import ICONS, colorize, strip


class TestColorize:
    def test_color_tag(self):
        assert colorize("<red>failed</>") == f"\033[31mfailed{RESET}"

    def test_named_closing_tag(self):
        assert colorize("<green>ok</green>") == f"\033[32mok{RESET}"

    def test_bright(self):
        assert colorize("<bright-cyan>x</>") == f"\033[96mx{RESET}"

    def test_background(self):
        assert colorize("<on-red>x</>") == f"\033[41mx{RESET}"

    def test_styles(self):
        assert colorize("<bold>b</>").startswith("\033[1m")
        assert colorize("<u>u</>").startswith("\033[4m")

    def test_icons(self):
        assert colorize("<tick> done") == f"{ICONS['tick']} done"

    def test_unknown_tag_kept(self):
        assert colorize("a <widget> b") == "a <widget> b"

    def test_case_insensitive(self):
        assert colorize("<RED>x</>") == f"\033[31mx{RESET}"

    def test_plain_text(self):
        assert colorize("no tags here") == "no tags here"


class TestStrip:
    def test_removes_tags(self):
        assert strip("<red>failed</> after <bold>3</> retries") == "failed after 3 retries"

    def test_keeps_icons(self):
        assert strip("<cross> broke") == f"{ICONS['cross']} broke"

    def test_unknown_tag_kept(self):
        assert strip("<widget>") == "<widget>"
