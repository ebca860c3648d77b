from typing import List
from fastapi import Depends

from access_console.schemas.application import Application
from access_console.services.catalog import get_catalog_provider


def get_catalog():
    return get_catalog_provider()

async def get_active_applications(catalog=Depends(get_catalog)) -> List[Application]:
    """Awaits the catalog read so the selection engine only ever sees loaded data."""
    return await catalog.get_active_applications()
