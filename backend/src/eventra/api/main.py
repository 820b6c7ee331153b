from fastapi import APIRouter

from eventra.api.routes import events

api_router = APIRouter()
api_router.include_router(events.router)
