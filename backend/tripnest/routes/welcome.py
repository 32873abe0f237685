"""
TripNest Backend — Welcome Route
==================================

What:  GET / returns a plain-text greeting so a browser or uptime probe hitting
       the root URL gets a 200 without touching the store.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Welcome"])

WELCOME_TEXT = "Welcome to the REST API!"


@router.get("/", response_class=PlainTextResponse, summary="Welcome message")
async def welcome() -> str:
    return WELCOME_TEXT
