"""API route registration."""

from fastapi import APIRouter

from genoserve.api.routes import data, files, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.router, tags=["files"])

data_router = APIRouter()

data_router.include_router(data.router, prefix="/data", tags=["data"])
