import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import API_PREFIX, CORS_ORIGINS, INIT_DB_ON_STARTUP
from db import close_pool, open_pool
from errors import register_error_handlers
from init_db import init_database
from logging_setup import RequestLoggingMiddleware, configure_logging

# --- 1. Logging ---
configure_logging()
logger = logging.getLogger(__name__)


# --- 2. Startup / shutdown ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs once around the server's lifetime:
    - create missing tables (so nobody has to run SQL by hand)
    - open the connection pool and hand it to requests through app.state
    """
    if INIT_DB_ON_STARTUP:
        init_database()
    app.state.pool = await open_pool()
    try:
        yield
    finally:
        await close_pool(app.state.pool)
        app.state.pool = None


# --- 3. Application ---
app = FastAPI(title="Store Rating API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
register_error_handlers(app)

# --- 4. Routers ---
# Each role's endpoints live in their own file under routes/
from routes.auth import router as auth_router
from routes.admin import router as admin_router
from routes.store import router as store_router
from routes.user import router as user_router

app.include_router(auth_router, prefix=API_PREFIX)    # /auth/...
app.include_router(admin_router, prefix=API_PREFIX)   # /admin/... (admin only)
app.include_router(store_router, prefix=API_PREFIX)   # /store/... (store_owner only)
app.include_router(user_router, prefix=API_PREFIX)    # /user/... (any logged-in role)


@app.get("/health")
async def health():
    return {"status": "ok"}
