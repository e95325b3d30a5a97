# showlog/api/v1/api.py

from fastapi import APIRouter

from showlog.api.v1.endpoints import (
    auth,
    concerts,
    records,
    stats,
    transfer,
    uploads,
    venues,
)

# Main router; the application mounts it under /api.
api_router = APIRouter()

api_router.include_router(concerts.router)
api_router.include_router(venues.router)
api_router.include_router(stats.router)
api_router.include_router(auth.router)
api_router.include_router(records.router)
api_router.include_router(transfer.router)
api_router.include_router(uploads.router)
