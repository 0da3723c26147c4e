# oauth_gateway/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from oauth_gateway.adapters.inbound.api.v1.endpoints import client_endpoint

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(client_endpoint.router, prefix="/client")
