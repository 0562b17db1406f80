# SPDX-License-Identifier: LGPL-3.0-or-later
import json
import os
import sys
from pathlib import Path

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

os.environ.setdefault("PYTHONPATH", str(_REPO_ROOT))

SAMPLE_CONFIG = {
    "url": "https://vcd.example.com/api",
    "api": "37.0",
    "org": "Org1",
    "vdc": "Vdc1",
    "vapp": "App1",
    "user": "admin",
    "password": "secret",
}


@pytest.fixture
def sample_config():
    return dict(SAMPLE_CONFIG)


@pytest.fixture
def config_file(tmp_path, sample_config):
    p = tmp_path / "config.json"
    p.write_text(json.dumps(sample_config), encoding="utf-8")
    return p


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: fast tests with no network access")
    config.addinivalue_line("markers", "security: secret handling and redaction")
