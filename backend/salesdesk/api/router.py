from fastapi import APIRouter

from salesdesk.api.routes import customers, health, supplier_quotes

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(customers.router)
api_router.include_router(supplier_quotes.router)
