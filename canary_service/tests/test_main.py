import socket

import pytest
import structlog
import uvicorn
from structlog.testing import capture_logs

from canary_service.api import main as main_module
from canary_service.api.main import bind_listener, main
from canary_service.config import AppSettings


@pytest.fixture
def captured(monkeypatch):
    calls = {}

    def _fake_bind(host, port):
        calls["host"] = host
        calls["port"] = port
        return "listener"

    def _fake_run(self, sockets=None):
        calls["sockets"] = sockets

    monkeypatch.setattr(main_module, "bind_listener", _fake_bind)
    monkeypatch.setattr(uvicorn.Server, "run", _fake_run)
    return calls


@pytest.fixture
def events(monkeypatch):
    # main() reconfigures structlog; keep the capturing config in place
    monkeypatch.setattr(main_module, "init_logging", lambda *args, **kwargs: structlog.get_logger())
    with capture_logs() as logs:
        yield logs


def test_default_port(captured):
    main()
    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 9898
    assert captured["sockets"] == ["listener"]


def test_port_from_environment(captured, monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    main()
    assert captured["port"] == 8080


def test_settings_defaults():
    settings = AppSettings()
    assert settings.port == 9898
    assert settings.host == "0.0.0.0"
    assert settings.revision == ""
    assert settings.color == "#34577c"
    assert settings.environment == "unknown"
    assert settings.log_level == "info"


def test_bind_listener_binds_requested_address():
    sock = bind_listener("127.0.0.1", 0)
    try:
        host, port = sock.getsockname()
        assert host == "127.0.0.1"
        assert port > 0
    finally:
        sock.close()


def test_bind_failure_exits_non_zero(monkeypatch):
    busy = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    busy.bind(("127.0.0.1", 0))
    busy.listen(1)
    port = busy.getsockname()[1]

    def _unexpected_run(self, sockets=None):
        raise AssertionError("server must not start")

    monkeypatch.setattr(uvicorn.Server, "run", _unexpected_run)
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", str(port))
    try:
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
    finally:
        busy.close()


def test_request_id_header(client):
    resp = client.get("/healthz")
    assert resp.headers.get("x-request-id")

    resp = client.get("/healthz", headers={"X-Request-ID": "abc"})
    assert resp.headers["x-request-id"] == "abc"


def test_startup_line_reports_port(captured, events, monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    main()

    [entry] = [e for e in events if e["event"] == "starting_server"]
    assert entry["log_level"] == "info"
    assert entry["port"] == 8080
    assert entry["host"] == "0.0.0.0"


def test_bind_failure_is_logged(events, monkeypatch):
    busy = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    busy.bind(("127.0.0.1", 0))
    busy.listen(1)
    port = busy.getsockname()[1]

    monkeypatch.setattr(uvicorn.Server, "run", lambda self, sockets=None: None)
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", str(port))
    try:
        with pytest.raises(SystemExit):
            main()
    finally:
        busy.close()

    [entry] = [e for e in events if e["event"] == "listener_bind_failed"]
    assert entry["log_level"] == "error"
    assert entry["port"] == port
    assert entry["error"]


def test_main_serves_one_process_wide_metrics(captured, monkeypatch):
    apps = []
    real_create_app = main_module.create_app

    def _create_app(settings, request_metrics=None):
        apps.append(request_metrics)
        return real_create_app(settings, request_metrics)

    monkeypatch.setattr(main_module, "create_app", _create_app)
    main()

    [request_metrics] = apps
    assert isinstance(request_metrics, main_module.RequestMetrics)
