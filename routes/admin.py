from typing import Optional

from fastapi import APIRouter, Depends, status
from psycopg import AsyncConnection

from db import getDB
# Every endpoint below is admin-only; the guard runs before any handler
from routes.auth import is_admin
from models import CreateStoreRequest, CreateUserRequest
from services import provisioning

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(is_admin)])


# =========================================================
# Part 1: overview and lists
# =========================================================

@router.get("/dashboard")
async def get_dashboard(conn: AsyncConnection = Depends(getDB)):
    return await provisioning.dashboard(conn)


@router.get("/users")
async def get_users(
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    role: Optional[str] = None,
    sortBy: Optional[str] = None,
    sortOrder: Optional[str] = None,
    conn: AsyncConnection = Depends(getDB),
):
    return await provisioning.list_users(
        conn,
        name=name,
        email=email,
        address=address,
        role=role,
        sort_by=sortBy,
        sort_order=sortOrder,
    )


@router.get("/users/{user_id}")
async def get_user_details(user_id: int, conn: AsyncConnection = Depends(getDB)):
    # store owners also get their stores with the current average
    return await provisioning.user_details(conn, user_id)


@router.get("/stores")
async def get_stores(
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    sortBy: Optional[str] = None,
    sortOrder: Optional[str] = None,
    conn: AsyncConnection = Depends(getDB),
):
    return await provisioning.list_stores(
        conn,
        name=name,
        email=email,
        address=address,
        sort_by=sortBy,
        sort_order=sortOrder,
    )


# =========================================================
# Part 2: provisioning
# =========================================================

@router.post("/user", status_code=status.HTTP_201_CREATED)
async def add_user(body: CreateUserRequest, conn: AsyncConnection = Depends(getDB)):
    user_id = await provisioning.add_user(
        conn, body.name, body.email, body.password, body.role, body.address
    )
    return {"message": "User created successfully", "id": user_id}


@router.post("/store", status_code=status.HTTP_201_CREATED)
async def add_store(body: CreateStoreRequest, conn: AsyncConnection = Depends(getDB)):
    store_id = await provisioning.add_store(
        conn, body.name, body.email, body.address, body.owner_email
    )
    return {"message": "Store created successfully", "id": store_id}
