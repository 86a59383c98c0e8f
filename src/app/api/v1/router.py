from fastapi import APIRouter

from src.app.api.v1 import (
    admin,
    audit,
    members,
    products,
    promoters,
    seller_setup,
    sellers,
    stewards,
    users,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(users.router)
api_router.include_router(members.router)
api_router.include_router(sellers.router)
api_router.include_router(promoters.router)
api_router.include_router(stewards.router)
api_router.include_router(products.router)
api_router.include_router(seller_setup.router)
api_router.include_router(admin.router)
api_router.include_router(audit.router)
