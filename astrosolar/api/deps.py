"""
FastAPI dependency injection providers.

Storage and the upstream clients are created once in the application
lifespan and kept on app.state; these providers hand them to route
handlers through Depends().

CHANGELOG:
- 2026-10-18: Initial creation
"""

from typing import Annotated

from fastapi import Depends, Request

from astrosolar.clients.geocoding import GeocodingClient
from astrosolar.clients.nasa_power import PowerClient
from astrosolar.storage.base import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_power_client(request: Request) -> PowerClient:
    return request.app.state.power_client


def get_geocoder(request: Request) -> GeocodingClient:
    return request.app.state.geocoder


# Type aliases for injecting app.state services via FastAPI Depends().
# Usage in route handlers:
#   async def my_route(storage: StorageDep):
#       project = await storage.get_project(...)
StorageDep = Annotated[Storage, Depends(get_storage)]
PowerClientDep = Annotated[PowerClient, Depends(get_power_client)]
GeocoderDep = Annotated[GeocodingClient, Depends(get_geocoder)]
