"""
REST API main application.
Entry point for the FastAPI REST server.

Run with:
    uvicorn rest_api.main:app --reload --app-dir backend
"""

from fastapi import FastAPI

from rest_api.core.cors import configure_cors
from rest_api.core.exceptions import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.auth import router as auth_router
from rest_api.routers.marketplace import router as marketplace_router
from rest_api.routers.public import health_router
from shared.security.rate_limit import limiter


app = FastAPI(
    title="Marketplace REST API",
    description="Restaurants, menus, orders and reviews",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting (login)
app.state.limiter = limiter
register_exception_handlers(app)

register_middlewares(app)
# CORS last so it wraps every other middleware
configure_cors(app)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(marketplace_router)
