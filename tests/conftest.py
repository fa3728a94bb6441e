"""
Pytest configuration and shared fixtures for loganalysis tests.
"""

import json
import sys
import tempfile
from pathlib import Path

import pytest


# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


BASE_EPOCH = 1476312345


def make_line(
    message,
    offset=0,
    log_level=1,
    source="locket",
    data=None,
    prefix="",
):
    """Build one structured log line as the locking service writes it."""
    payload = {
        "timestamp": f"{BASE_EPOCH + offset}.000000000",
        "source": source,
        "message": message,
        "log_level": log_level,
        "data": data or {},
    }
    return prefix + json.dumps(payload)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def lager_line():
    """Factory for structured log lines."""
    return make_line


@pytest.fixture
def write_log(temp_dir):
    """Write lines (str or bytes) to a log file and return its path."""

    def _write(name, lines):
        path = temp_dir / name
        chunks = [l if isinstance(l, bytes) else l.encode("utf-8") for l in lines]
        path.write_bytes(b"\n".join(chunks) + b"\n")
        return str(path)

    return _write


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """Run with no LOGANALYSIS_* settings and no .env file in reach."""
    for name in ("LOG_LEVEL", "DOT_SIZE", "DPI", "WIDTH", "HEIGHT"):
        monkeypatch.delenv(f"LOGANALYSIS_{name}", raising=False)
    monkeypatch.chdir(temp_dir)
    return temp_dir
