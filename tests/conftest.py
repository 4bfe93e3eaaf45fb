# tests/conftest.py
import re
import sys
from pathlib import Path

import pytest

# Ensure project root is importable for 'healthsrv' when tests run from any cwd
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from healthsrv import create_app
from healthsrv import logger as logger_mod
from healthsrv.logger import Logger

HEADER = re.compile(r"^📝 \[(\d{2}:\d{2}:\d{2})\] (\w+): (.*)$")


def parse_records(captured: str):
    """Split pretty-printed output back into {time, level, message, fields}."""
    out = []
    for line in captured.splitlines():
        m = HEADER.match(line)
        if m:
            out.append({"time": m.group(1), "level": m.group(2), "message": m.group(3), "fields": []})
        elif line.startswith("   ") and out:
            key, _, value = line[3:].partition(": ")
            out[-1]["fields"].append((key, value))
    return out


@pytest.fixture(autouse=True)
def _reset_global_logger(monkeypatch):
    monkeypatch.setattr(logger_mod, "_global", None)
    yield


@pytest.fixture()
def log():
    return Logger()


@pytest.fixture()
def app(log):
    return create_app(log)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def records(capsys):
    def read():
        return parse_records(capsys.readouterr().out)
    return read
