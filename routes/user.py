from typing import Optional

from fastapi import APIRouter, Depends
from psycopg import AsyncConnection

from db import getDB
# any logged-in role may browse and rate
from routes.auth import get_current_user
from models import RatingRequest
from services import ratings

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/stores")
async def get_stores(
    name: Optional[str] = None,
    address: Optional[str] = None,
    sortBy: Optional[str] = None,
    sortOrder: Optional[str] = None,
    user: dict = Depends(get_current_user),
    conn: AsyncConnection = Depends(getDB),
):
    return await ratings.list_stores_for_user(
        conn, user["id"], name=name, address=address, sort_by=sortBy, sort_order=sortOrder
    )


@router.post("/rate")
async def submit_rating(
    body: RatingRequest,
    user: dict = Depends(get_current_user),
    conn: AsyncConnection = Depends(getDB),
):
    await ratings.submit_rating(conn, user["id"], body.store_id, body.rating)
    return {"message": "Rating submitted successfully"}
