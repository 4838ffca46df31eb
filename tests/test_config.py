"""Tests for logging setup."""

from rich.console import Console

import config


class TestSetupLogging:
    def test_handler_shares_console(self, monkeypatch):
        calls = []
        monkeypatch.setattr(config.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        console = Console()

        config.setup_logging("debug", console=console)

        assert calls[0]["level"] == "DEBUG"
        assert calls[0]["handlers"][0].console is console
