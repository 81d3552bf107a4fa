"""
Hospeda API main application.
Entry point for the FastAPI REST server.

Run:
    uvicorn hospeda_api.main:app --reload
"""

from fastapi import FastAPI

from hospeda_api.core import configure_cors, lifespan, register_middlewares
from hospeda_api.routers import health_router, public_router
from hospeda_shared.config.settings import settings


app = FastAPI(
    title=settings.api_title,
    description="Accommodations, destinations, events and posts",
    version="0.1.0",
    lifespan=lifespan,
)

register_middlewares(app)
# CORS registered last so it wraps every other middleware
configure_cors(app)

app.include_router(health_router)
app.include_router(public_router)
