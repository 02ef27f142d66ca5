"""Shared fixtures: throwaway simplifier scripts and an app wired to tmp dirs."""

import sys
import textwrap
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from legalease.core.settings import Settings
from legalease.main import create_app

SCRIPTS = {
    "success": """
        import sys
        sys.stdin.read()
        print("  SIMPLIFIED TEXT  ")
    """,
    "echo": """
        import sys
        print("received:" + sys.stdin.read())
    """,
    "failure": """
        import sys
        sys.stdin.read()
        sys.stderr.write("boom: cannot parse document")
        sys.exit(1)
    """,
    "empty": """
        import sys
        sys.stdin.read()
    """,
    "silent_failure": """
        import sys
        sys.stdin.read()
        sys.exit(3)
    """,
    "hang": """
        import sys, time
        sys.stdin.read()
        print("partial", flush=True)
        time.sleep(60)
    """,
    "stubborn": """
        import signal, sys, time
        signal.signal(signal.SIGTERM, signal.SIG_IGN)
        sys.stdin.read()
        time.sleep(60)
    """,
}


@pytest.fixture
def make_script(tmp_path: Path):
    """Write one of the SCRIPTS to disk and return its path."""

    def _make(kind: str) -> Path:
        path = tmp_path / "scripts" / f"{kind}.py"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(SCRIPTS[kind]), encoding="utf-8")
        return path

    return _make


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "input" / "contract.txt"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("The tenant shall pay rent prior to the first day.", encoding="utf-8")
    return path


@pytest.fixture
def uploads_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def make_settings(uploads_dir: Path):
    def _make(**overrides) -> Settings:
        values = {
            "UPLOADS_DIR": uploads_dir,
            "PYTHON_EXECUTABLE": sys.executable,
            "SIMPLIFY_TIMEOUT_SECONDS": 1.0,
            "KILL_GRACE_SECONDS": 0.5,
            "LOG_JSON": False,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def make_client(make_settings):
    clients = []

    def _make(**overrides) -> TestClient:
        raise_server_exceptions = overrides.pop("raise_server_exceptions", True)
        app = create_app(make_settings(**overrides))
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
