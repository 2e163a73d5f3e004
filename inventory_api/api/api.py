"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from inventory_api.api.endpoints import auth, health, products

api_router = APIRouter()

# Signup / login (public)
api_router.include_router(auth.router)

# Products (bearer token required)
api_router.include_router(products.router)

api_router.include_router(health.router)
