from fastapi import FastAPI
from fastapi.testclient import TestClient

from db import getDB
from errors import register_error_handlers
from routes.admin import router as admin_router
from routes.auth import router as auth_router
from routes.store import router as store_router
from routes.user import router as user_router
from services.auth import create_access_token
from tests.fakes import FakeConnection


def build_client(conn: FakeConnection, **client_kwargs) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)
    for router in (auth_router, admin_router, store_router, user_router):
        app.include_router(router)
    app.dependency_overrides[getDB] = lambda: conn
    return TestClient(app, **client_kwargs)


def bearer(user_id: int = 1, role: str = "user", email: str = "someone@example.com") -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, email, role)}"}
