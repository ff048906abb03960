import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg import AsyncConnection

from db import getDB
from errors import Forbidden, Unauthorized
from logging_setup import set_request_context
from models import ChangePasswordRequest, LoginRequest, SignupRequest
from services import auth_service
from services.auth import decode_access_token

# --- 1. Router ---
router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches our own 401 instead of FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


# --- 2. Core dependency: who is calling? ---
async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """
    Validate the bearer token and return its claims.

    How it works:
    1. The client sends `Authorization: Bearer <token>`.
    2. The token's signature and expiry are checked; nothing is looked up in
       the database, the claims themselves are the caller identity.
    3. The claims are stored on request.state.user for the rest of the request.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No token provided")

    try:
        claims = decode_access_token(credentials.credentials)
    except ValueError:
        raise Unauthorized("Invalid or expired token")

    user = {"id": claims["id"], "email": claims.get("email"), "role": claims["role"]}
    request.state.user = user
    set_request_context(user_id=str(user["id"]))
    return user


# --- 3. Role guards ---
# These protect whole routers, e.g. only admins may reach /admin/*

def require_role(*roles: str):
    """Build a dependency that lets through only callers holding one of `roles`."""
    async def role_dependency(request: Request, user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in roles:
            logger.warning(
                "Access denied: user_id=%s role=%s endpoint=%s %s",
                user["id"],
                user["role"],
                request.method,
                request.url.path,
            )
            raise Forbidden("Access denied")
        return user

    return role_dependency


is_admin = require_role("admin")
is_store_owner = require_role("store_owner")


# --- 4. Login / signup ---

@router.post("/login")
async def handle_login(body: LoginRequest, conn: AsyncConnection = Depends(getDB)):
    return await auth_service.login(conn, body.email, body.password)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def handle_signup(body: SignupRequest, conn: AsyncConnection = Depends(getDB)):
    return await auth_service.signup(conn, body.name, body.email, body.password, body.address)


# --- 5. Change password (any logged-in role) ---

@router.put("/change-password")
async def handle_change_password(
    body: ChangePasswordRequest,
    user: dict = Depends(get_current_user),
    conn: AsyncConnection = Depends(getDB),
):
    message = await auth_service.change_password(conn, user["id"], body.old_password, body.new_password)
    return {"message": message}
