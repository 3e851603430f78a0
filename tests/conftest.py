"""Shared fixtures."""

import logging
import os

import platformdirs
import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    factory = logging.getLogRecordFactory()
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.setLogRecordFactory(factory)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point user config at an empty directory and drop CRC64_BENCH_* variables."""
    user_dir = tmp_path / "user_config"
    user_dir.mkdir()
    monkeypatch.setattr(platformdirs, "user_config_dir", lambda *args, **kwargs: str(user_dir))
    for key in list(os.environ):
        if key.startswith("CRC64_BENCH_"):
            monkeypatch.delenv(key)
    return user_dir


@pytest.fixture
def workdir(tmp_path, monkeypatch, isolated_config):
    """Run in an empty working directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
