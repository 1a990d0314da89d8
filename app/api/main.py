from fastapi import APIRouter

from app.api.routes import health, productions

api_router = APIRouter()

api_router.include_router(productions.router, prefix="", tags=["Productions"])
api_router.include_router(health.router, prefix="", tags=["Health"])
