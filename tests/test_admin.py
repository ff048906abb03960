import pytest
from psycopg import errors as pg_errors

from services.auth import verify_password
from tests.fakes import FakeConnection
from tests.helpers import build_client


def _user_body(**overrides):
    body = {
        "name": "Alexandra Montgomery",  # 20 characters
        "email": "alexandra@example.com",
        "password": "Admin@123",
        "address": "42 Harbour Road",
        "role": "store_owner",
    }
    body.update(overrides)
    return body


def _store_body(**overrides):
    body = {
        "name": "Harbour Books",
        "email": "books@example.com",
        "address": "42 Harbour Road",
        "ownerEmail": "alexandra@example.com",
    }
    body.update(overrides)
    return body


# --- add user ---

def test_admin_add_user_with_20_char_name_is_created(admin_headers):
    conn = FakeConnection([("INSERT INTO users", {"id": 31})])

    response = build_client(conn).post("/admin/user", json=_user_body(), headers=admin_headers)

    assert response.status_code == 201
    assert response.json() == {"message": "User created successfully", "id": 31}
    (_, params), = conn.statements("INSERT INTO users")
    assert params[0] == "Alexandra Montgomery"
    assert verify_password("Admin@123", params[2])
    assert params[4] == "store_owner"


def test_admin_add_user_with_8_char_name_is_rejected(admin_headers):
    conn = FakeConnection()

    response = build_client(conn).post("/admin/user", json=_user_body(name="Jane Doe"), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Name must be between 20-60 characters"
    assert conn.executed == []


def test_admin_add_user_uses_stricter_password_policy(admin_headers):
    # valid for signup (6-12) but too short for admin creation (8-16)
    response = build_client(FakeConnection()).post(
        "/admin/user", json=_user_body(password="Abc@12"), headers=admin_headers
    )

    assert response.status_code == 400
    assert "8-16 characters" in response.json()["message"]


def test_admin_add_user_rejects_unknown_role(admin_headers):
    response = build_client(FakeConnection()).post(
        "/admin/user", json=_user_body(role="superuser"), headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("Role must be one of")


def test_admin_add_user_duplicate_email(admin_headers):
    conn = FakeConnection([("INSERT INTO users", pg_errors.UniqueViolation("duplicate key"))])

    response = build_client(conn).post("/admin/user", json=_user_body(), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Email already exists"


# --- add store ---

def test_add_store_resolves_store_owner_email(admin_headers):
    conn = FakeConnection([
        ("SELECT id FROM users WHERE email = %s AND role = 'store_owner'", {"id": 31}),
        ("INSERT INTO stores", {"id": 5}),
    ])

    response = build_client(conn).post("/admin/store", json=_store_body(), headers=admin_headers)

    assert response.status_code == 201
    assert response.json() == {"message": "Store created successfully", "id": 5}
    (_, params), = conn.statements("INSERT INTO stores")
    assert params == ["Harbour Books", "books@example.com", "42 Harbour Road", 31]


def test_add_store_with_unresolvable_owner_leaves_owner_unset(admin_headers):
    conn = FakeConnection([
        ("AND role = 'store_owner'", []),
        ("INSERT INTO stores", {"id": 6}),
    ])

    response = build_client(conn).post(
        "/admin/store", json=_store_body(ownerEmail="ghost@example.com"), headers=admin_headers
    )

    assert response.status_code == 201
    (_, params), = conn.statements("INSERT INTO stores")
    assert params[3] is None


def test_add_store_without_owner_email_skips_lookup(admin_headers):
    conn = FakeConnection([("INSERT INTO stores", {"id": 7})])

    body = _store_body()
    del body["ownerEmail"]
    response = build_client(conn).post("/admin/store", json=body, headers=admin_headers)

    assert response.status_code == 201
    assert conn.statements("FROM users") == []


@pytest.mark.parametrize("name", ["Tiny Shop", "S" * 61])
def test_add_store_name_length(admin_headers, name):
    response = build_client(FakeConnection()).post("/admin/store", json=_store_body(name=name), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Name must be between 10-60 characters"


# --- lists and details ---

def test_users_list_passes_filters_as_parameters(admin_headers):
    conn = FakeConnection([("FROM users WHERE 1=1", [{"id": 1, "name": "x"}])])

    response = build_client(conn).get(
        "/admin/users",
        params={"name": "ann", "role": "user", "sortBy": "email", "sortOrder": "desc"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    (sql, params), = conn.executed
    assert "name ILIKE %s" in sql
    assert "role = %s" in sql
    assert sql.endswith("ORDER BY email DESC")
    assert params == ["%ann%", "user"]


def test_users_list_ignores_unknown_sort_column(admin_headers):
    conn = FakeConnection([("FROM users WHERE 1=1", [])])

    response = build_client(conn).get("/admin/users", params={"sortBy": "password"}, headers=admin_headers)

    assert response.status_code == 200
    (sql, _), = conn.executed
    assert "ORDER BY" not in sql


def test_stores_list_includes_rating(admin_headers):
    rows = [{"id": 1, "name": "Harbour Books", "email": "b@example.com", "address": "x", "rating": 4.5}]
    conn = FakeConnection([("FROM stores s", rows)])

    response = build_client(conn).get("/admin/stores", params={"sortBy": "rating"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == rows
    (sql, _), = conn.executed
    assert "COALESCE(AVG(r.rating), 0)" in sql
    assert sql.endswith("ORDER BY rating ASC")


def test_user_details_for_store_owner_include_stores(admin_headers):
    conn = FakeConnection([
        ("FROM users WHERE id", {"id": 31, "name": "Alexandra Montgomery", "email": "a@example.com", "address": None, "role": "store_owner"}),
        ("WHERE s.owner_id", [{"id": 5, "name": "Harbour Books", "rating": 4.0}]),
    ])

    response = build_client(conn).get("/admin/users/31", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["stores"] == [{"id": 5, "name": "Harbour Books", "rating": 4.0}]


def test_user_details_for_plain_user_have_no_stores(admin_headers):
    conn = FakeConnection([
        ("FROM users WHERE id", {"id": 3, "name": "Jane Rater", "email": "j@example.com", "address": None, "role": "user"}),
    ])

    response = build_client(conn).get("/admin/users/3", headers=admin_headers)

    assert response.status_code == 200
    assert "stores" not in response.json()
    assert len(conn.executed) == 1


def test_user_details_missing_user_is_404(admin_headers):
    response = build_client(FakeConnection()).get("/admin/users/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"
