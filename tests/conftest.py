import os

# must be set before config.py is imported anywhere
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("INIT_DB_ON_STARTUP", "0")

import pytest

from tests.helpers import bearer


@pytest.fixture
def admin_headers():
    return bearer(user_id=1, role="admin", email="admin@example.com")


@pytest.fixture
def owner_headers():
    return bearer(user_id=7, role="store_owner", email="owner@example.com")


@pytest.fixture
def user_headers():
    return bearer(user_id=3, role="user", email="rater@example.com")
