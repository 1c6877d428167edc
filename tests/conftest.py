"""
Shared fixtures for the Showcase test suite.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import io
import os
import shutil
import tempfile

import pytest
from PIL import Image

from showcase import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret123"


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases and uploads, cleaned up after."""
    d = tempfile.mkdtemp(prefix="showcase-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with every Showcase module registered."""
    return create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "JWT_SECRET": "test-jwt-secret",
        "DB_DIR": tmp_db_dir,
        "SHOWCASE_DB": os.path.join(tmp_db_dir, "showcase.db"),
        "UPLOAD_FOLDER": os.path.join(tmp_db_dir, "uploads"),
        "ADMIN_USERNAME": ADMIN_USERNAME,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token(client):
    resp = client.post("/api/auth/login", json={
        "username": ADMIN_USERNAME,
        "password": ADMIN_PASSWORD,
    })
    assert resp.status_code == 200
    return resp.get_json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def make_image(size=(800, 600), fmt="PNG", color=(200, 40, 40)):
    """An in-memory image file ready for a multipart upload."""
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    buf.seek(0)
    return buf


@pytest.fixture
def image_file():
    return make_image
