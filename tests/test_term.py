"""Tests for terminal colour handling."""

from __future__ import annotations

from seqsort._term import force_color, green, style, supports_color


class TestColor:
    def test_forced_on(self):
        force_color(True)
        assert green("ok") == "\033[32mok\033[0m"
        assert style("x", "red", "bold") == "\033[31;1mx\033[0m"

    def test_forced_off(self):
        force_color(False)
        assert green("ok") == "ok"

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        force_color(None)
        assert supports_color() is False
