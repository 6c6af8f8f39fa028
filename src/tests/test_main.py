"""Tests for the server entry point."""

import logging

import pytest

import pagewiki.main
from pagewiki.config import Settings


@pytest.fixture
def served(monkeypatch):
    """Capture uvicorn.run calls instead of binding a socket."""
    calls = []
    monkeypatch.setattr(
        pagewiki.main.uvicorn, "run", lambda app, **kw: calls.append((app, kw))
    )
    monkeypatch.setattr(pagewiki.main, "configure_logging", lambda level: None)
    return calls


class TestRun:
    def test_serves_on_configured_address(self, monkeypatch, served, tmp_path):
        s = Settings(data_dir=tmp_path, host="0.0.0.0", port=9090)
        monkeypatch.setattr(pagewiki.main, "default_settings", s)

        pagewiki.main.run()

        assert len(served) == 1
        app, kwargs = served[0]
        assert app.state.settings is s
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9090

    def test_startup_error_exits_before_serving(self, monkeypatch, served, tmp_path):
        s = Settings(data_dir=tmp_path, templates_dir=tmp_path / "missing")
        monkeypatch.setattr(pagewiki.main, "default_settings", s)

        with pytest.raises(SystemExit) as excinfo:
            pagewiki.main.run()

        assert excinfo.value.code == 1
        assert served == []


class TestConfigureLogging:
    def test_level_name_is_case_insensitive(self, monkeypatch):
        seen = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))
        pagewiki.main.configure_logging("debug")
        assert seen["level"] == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        seen = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: seen.update(kw))
        pagewiki.main.configure_logging("chatty")
        assert seen["level"] == logging.INFO
