"""Pytest config to ensure project root is on sys.path during test collection.

Every test gets its own empty DBC store directory and fresh metrics, so
uploads made by one test never leak into another.
"""
import os
import sys

import pytest

_HERE = os.path.dirname(__file__)
_ROOT = os.path.abspath(os.path.join(_HERE, ".."))  # decoder_backend/
PROJECT_ROOT = os.path.abspath(os.path.join(_ROOT, ".."))  # repo root

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from decoder_backend import metrics  # noqa: E402
from decoder_backend.api import dbc_store  # noqa: E402
from decoder_backend.api.main import app  # noqa: E402


@pytest.fixture
def dbcs_dir(tmp_path, monkeypatch):
    path = tmp_path / "dbcs"
    monkeypatch.setenv("DBCS_PATH", str(path))
    monkeypatch.setenv("DECODER_CONFIG", str(tmp_path / "no-config.json"))
    for name in ("DECODER_SINGLE_BIT_POLICY", "DECODER_PAD_SHORT_PAYLOADS"):
        monkeypatch.delenv(name, raising=False)
    metrics.reset_all()
    yield path
    dbc_store.set_dbcs_dir(None)


@pytest.fixture
def client(dbcs_dir):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def status_dbc():
    return """
VERSION "1.0"
NS_ :
BS_:
BU_: ECU
BO_ 256 Status: 8 ECU
 SG_ Speed : 0|16@1+ (0.01,0) [0|655.35] "km/h" ECU
 SG_ Temp : 23|12@0- (0.5,-10) [-1034|1013.5] "degC" ECU
 SG_ Flag : 32|1@1+ (1,0) [0|1] "" ECU
"""
