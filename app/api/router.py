from fastapi import APIRouter

from app.api.routes import negotiation

api_router = APIRouter()
api_router.include_router(negotiation.router)
