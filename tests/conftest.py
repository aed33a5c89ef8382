# /tests/conftest.py
"""Shared fixtures for countdown server tests"""

from datetime import datetime

import pytest
import pytz

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=pytz.utc)


@pytest.fixture(autouse=True)
def activity_log_dir(tmp_path, monkeypatch):
    """Keep the web activity CSV log out of the working tree"""
    from src.utils import logging_utils

    log_dir = tmp_path / 'logs'
    monkeypatch.setattr(logging_utils, 'LOG_FILE_DIR', log_dir)
    return log_dir


@pytest.fixture
def fixed_now(monkeypatch):
    """Freeze the clock used by the countdown routes"""
    from src.components import countdown_calculator

    monkeypatch.setattr(countdown_calculator, 'utc_now', lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def client():
    """Flask test client for the countdown app"""
    from web.web_server import app

    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client
