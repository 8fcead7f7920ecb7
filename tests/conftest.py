"""Shared pytest fixtures and configuration."""

import pytest


class FakeClock:
    """Monotonic clock that only moves when the session sleeps."""

    def __init__(self, start=0.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def log_file(tmp_path):
    """An empty source log file inside a temporary directory."""
    path = tmp_path / "app.log"
    path.write_bytes(b"")
    return path
