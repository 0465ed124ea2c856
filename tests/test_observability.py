import logging

from omunits.config import EngineSettings
from omunits.observability import (
    bind_trace_id,
    current_trace_id,
    log_event,
    reset_trace_id,
    traced,
)


def test_trace_id_binding():
    assert current_trace_id() is None
    token = bind_trace_id("outer")
    assert current_trace_id() == "outer"
    reset_trace_id(token)
    assert current_trace_id() is None
    assert bind_trace_id(None) is None


def test_traced_binds_and_restores():
    with traced("install") as trace_id:
        assert trace_id.startswith("install-")
        assert current_trace_id() == trace_id
    assert current_trace_id() is None


def test_traced_keeps_enclosing_trace():
    token = bind_trace_id("run-1")
    try:
        with traced("install") as trace_id:
            assert trace_id == "run-1"
        assert current_trace_id() == "run-1"
    finally:
        reset_trace_id(token)


def test_log_event_attaches_payload(caplog):
    caplog.set_level(logging.INFO, logger="omunits")
    token = bind_trace_id("abc")
    try:
        log_event("something happened", count=3)
    finally:
        reset_trace_id(token)
    record = next(r for r in caplog.records if r.getMessage() == "something happened")
    assert record.payload == {"trace_id": "abc", "count": 3}


def test_settings_defaults(monkeypatch):
    for name in ("OMU_CACHE_INVERSE", "OMU_LOG_CONVERSIONS", "OMU_SCALE_REQUIRE_COMMON_BASE"):
        monkeypatch.delenv(name, raising=False)
    assert EngineSettings.from_env() == EngineSettings()


def test_settings_flags(monkeypatch):
    monkeypatch.setenv("OMU_LOG_CONVERSIONS", "off")
    monkeypatch.setenv("OMU_CACHE_INVERSE", "  ")
    monkeypatch.setenv("OMU_SCALE_REQUIRE_COMMON_BASE", "Yes")
    settings = EngineSettings.from_env()
    assert settings.log_conversions is False
    assert settings.cache_inverse is True
    assert settings.scale_require_common_base is True
