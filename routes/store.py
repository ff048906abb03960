from fastapi import APIRouter, Depends
from psycopg import AsyncConnection

from db import getDB
from routes.auth import is_store_owner
from services import ratings

router = APIRouter(prefix="/store", tags=["store"])


@router.get("/ratings")
async def get_ratings(
    user: dict = Depends(is_store_owner),
    conn: AsyncConnection = Depends(getDB),
):
    """Everyone who rated the caller's store, newest first."""
    store = await ratings.owned_store(conn, user["id"])
    if not store:
        return []
    return await ratings.ratings_for_store(conn, store["id"])


@router.get("/average")
async def get_average_rating(
    user: dict = Depends(is_store_owner),
    conn: AsyncConnection = Depends(getDB),
):
    store = await ratings.owned_store(conn, user["id"])
    if not store:
        return {"storeName": None, "averageRating": 0}

    average = await ratings.average_rating(conn, store["id"])
    return {"storeName": store["name"], "averageRating": ratings.format_average(average)}
