import os
import stat
import pytest
from core.config.settings import DumpToolSettings


def _write_tool(path, body: str) -> str:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's DBDUMPER_* variables and .env out of the tests."""
    for name in list(os.environ):
        if name.startswith("DBDUMPER_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("PGPASSWORD", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_pg_dump(tmp_path) -> str:
    """Echoes its arguments and PGPASSWORD, partly on stderr, then exits 0."""
    return _write_tool(
        tmp_path / "pg_dump",
        'echo "pg_dump: args $*"\n'
        'echo "pg_dump: password=$PGPASSWORD" 1>&2\n'
        'echo "pg_dump: done"\n'
        "exit 0\n",
    )


@pytest.fixture
def fake_mysqldump(tmp_path) -> str:
    return _write_tool(
        tmp_path / "mysqldump",
        'echo "mysqldump: args $*"\n'
        'echo "mysqldump: pgpassword=${PGPASSWORD:-unset}"\n'
        "exit 0\n",
    )


@pytest.fixture
def silent_tool(tmp_path) -> str:
    return _write_tool(tmp_path / "silent_dump", "exit 0\n")


@pytest.fixture
def failing_tool(tmp_path) -> str:
    return _write_tool(
        tmp_path / "failing_dump",
        'echo "error: connection refused" 1>&2\n'
        "exit 1\n",
    )


@pytest.fixture
def settings_for(tmp_path):
    def _make(pg_dump_path=None, mysqldump_path=None) -> DumpToolSettings:
        return DumpToolSettings(
            pg_dump_path=pg_dump_path or str(tmp_path / "missing" / "pg_dump"),
            mysqldump_path=mysqldump_path or str(tmp_path / "missing" / "mysqldump"),
        )
    return _make


@pytest.fixture
def valid_fields(tmp_path) -> dict:
    return {
        "host": "localhost",
        "database_name": "orders",
        "user": "admin",
        "password": "secret",
        "target_directory": str(tmp_path),
        "label": "nightly",
        "database_engine": "postgresql",
    }
