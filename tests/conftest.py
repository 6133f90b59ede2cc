"""
Pytest configuration for the dose_explorer test suite.

Session event logs are redirected to a per-test temporary directory so the
suite never writes into the package data folder.
"""

import pytest

from dose_explorer import config


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    return data_dir


@pytest.fixture
def seed_points():
    from dose_explorer.models import generate_fixed_data

    return generate_fixed_data()
