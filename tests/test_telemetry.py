from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from modali.runtime import telemetry


class FakeLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Any]] = []
        self.context: Dict[str, str] = {}
        self.profiled: List[str] = []

    def info_with(self, message: str, pairs: Any) -> None:
        self.records.append(("info", message, dict(pairs)))

    def debug_with(self, message: str, pairs: Any) -> None:
        self.records.append(("debug", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, dict(pairs)))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        yield


def install_fake(monkeypatch: pytest.MonkeyPatch, name: str = "test") -> FakeLogger:
    fake = FakeLogger()
    monkeypatch.setitem(telemetry._LOGGERS, name, fake)
    return fake


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_record_event_attaches_data(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = install_fake(monkeypatch)

    telemetry.record_event("session.dispatch", data={"command": "foot"}, logger_name="test")

    assert fake.records == [
        ("info", "event::session.dispatch", {"event": "session.dispatch", "command": "foot"})
    ]


def test_milestone_reports_elapsed(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = install_fake(monkeypatch)

    elapsed = telemetry.milestone("bindings loaded", logger_name="test")

    assert elapsed >= 0
    level, message, payload = fake.records[0]
    assert level == "debug"
    assert payload["milestone"] == "bindings loaded"


def test_span_profiles_and_clears_context(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = install_fake(monkeypatch)

    with telemetry.span("config::load", logger_name="test", metadata={"path": "x"}) as handle:
        assert fake.context == {"path": "x"}
        handle.add_metadata("actions", 3)

    assert fake.profiled == ["config::load"]
    assert fake.context == {}
    assert handle.metadata == {"path": "x", "actions": "3"}


def test_span_reports_failure_and_reraises(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = install_fake(monkeypatch)

    with pytest.raises(RuntimeError):
        with telemetry.span("dispatch::run", logger_name="test"):
            raise RuntimeError("boom")

    assert fake.records[-1][0] == "error"
    assert fake.records[-1][2]["reason"] == "boom"
