"""Main API router for v1."""
from fastapi import APIRouter

from guestlist.api.v1.endpoints import guests

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(guests.router, tags=["Guests"])
