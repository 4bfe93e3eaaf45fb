# tests/test_health.py
import json

from healthsrv import create_app
from healthsrv.logger import Logger

BODY = '{"status": "healthy", "message": "Server is running"}'

def test_health_returns_fixed_body(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_data(as_text=True) == BODY
    assert r.headers["Content-Type"] == "application/json"
    assert json.loads(r.get_data()) == {"status": "healthy", "message": "Server is running"}

def test_health_ignores_query_and_headers(client):
    r = client.get("/health?verbose=1&x=y", headers={"Accept": "text/html", "X-Debug": "on"})
    assert r.status_code == 200
    assert r.get_data(as_text=True) == BODY

def test_health_request_is_logged_once(client, records):
    client.get("/health?probe=1", buffered=True)
    logs = [e for e in records() if e["message"] == "HTTP Request"]
    assert len(logs) == 1
    fields = dict(logs[0]["fields"])
    assert logs[0]["level"] == "INFO"
    assert fields["method"] == "GET"
    assert fields["path"] == "/health"
    assert fields["code"] == "200"
    assert fields["status"] == "✅"
    assert fields["ip"] == "127.0.0.1"
    assert [k for k, _ in logs[0]["fields"]] == ["method", "path", "status", "code", "duration", "ip"]

def test_unknown_path_logged_as_404(client, records):
    r = client.get("/nope", buffered=True)
    assert r.status_code == 404
    fields = dict(next(e for e in records() if e["message"] == "HTTP Request")["fields"])
    assert fields["code"] == "404"
    assert fields["status"] == "❌"

def test_post_health_is_405(client, records):
    r = client.post("/health", buffered=True)
    assert r.status_code == 405
    fields = dict(next(e for e in records() if e["message"] == "HTTP Request")["fields"])
    assert fields["method"] == "POST"
    assert fields["code"] == "405"

def test_request_logged_even_with_log_level_env(monkeypatch, records):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    client = create_app(Logger()).test_client()
    client.get("/health", buffered=True)
    assert len([e for e in records() if e["message"] == "HTTP Request"]) == 1
