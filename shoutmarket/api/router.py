"""Main API router"""

from fastapi import APIRouter

from .routes import admin, auth, catalog, creators, orders, users

# Main API router
api_router = APIRouter()

# auth carries full paths (/auth, /creators and /admin logins), so it has no prefix.
# creators must precede catalog so /creators/me is not read as /creators/{creator_id}.
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(creators.router, prefix="/creators", tags=["creators"])
api_router.include_router(catalog.router, tags=["catalog"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
