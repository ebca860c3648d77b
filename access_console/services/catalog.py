import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from fastapi import HTTPException, status
from pydantic import TypeAdapter, ValidationError

from access_console.core.config import settings
from access_console.core.constants import CatalogEndpoint
from access_console.schemas.application import Application
from access_console.schemas.role import RoleEditResponse

logger = logging.getLogger(__name__)

_applications_adapter = TypeAdapter(List[Application])


def _parse_applications(data: Any) -> List[Application]:
    try:
        return _applications_adapter.validate_python(data or [])
    except ValidationError as e:
        logger.error(f"Catalog returned a malformed application graph: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Catalog returned a malformed application graph")


def _parse_role(data: Any) -> RoleEditResponse:
    try:
        return RoleEditResponse.model_validate(data)
    except ValidationError as e:
        logger.error(f"Catalog returned a malformed role: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Catalog returned a malformed role")


class HttpCatalogProvider:
    """Reads the application/menu/permission graph from the upstream service."""

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def _make_request(self, path: str, allow_404: bool = False) -> Optional[Any]:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(path, headers=self._headers())
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                if allow_404 and e.response.status_code == 404:
                    return None
                raise HTTPException(status_code=e.response.status_code, detail=f"Catalog service error: {e.response.text}")
            except httpx.RequestError as e:
                logger.error(f"Catalog service unreachable at {self.base_url}: {e}")
                raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"Network error: {e}")

        try:
            envelope = response.json()
        except ValueError as e:
            logger.error(f"Catalog service returned a non-JSON body from {path}: {e}")
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Catalog returned a malformed response")
        if not isinstance(envelope, dict):
            logger.error(f"Catalog service returned a {type(envelope).__name__} envelope from {path}")
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Catalog returned a malformed response")
        if not envelope.get("success", True):
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=envelope.get("message") or "Catalog service reported a failure",
            )
        return envelope.get("data")

    async def get_active_applications(self) -> List[Application]:
        data = await self._make_request(CatalogEndpoint.ACTIVE_APPLICATIONS.value)
        applications = _parse_applications(data)
        logger.info(f"Fetched {len(applications)} active application(s) from {self.base_url}")
        return applications

    async def get_role_for_edit(self, role_id: int) -> RoleEditResponse:
        data = await self._make_request(CatalogEndpoint.ROLE_FOR_EDIT.value.format(role_id=role_id), allow_404=True)
        if data is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
        return _parse_role(data)


class FixtureCatalogProvider:
    """Serves the graph from a JSON document instead of the upstream service.

    The document holds ``applications`` (the active-permission payload) and
    ``roles`` (role-edit payloads).
    """

    def __init__(self, path: Optional[str] = None, document: Optional[Dict[str, Any]] = None):
        self.path = path
        self._document = document

    def _load(self) -> Dict[str, Any]:
        if self._document is None:
            with Path(self.path).open(encoding="utf-8") as fh:
                self._document = json.load(fh)
            logger.info(f"Loaded catalog fixture from {self.path}")
        return self._document

    async def get_active_applications(self) -> List[Application]:
        applications = _parse_applications(self._load().get("applications"))
        return [app for app in applications if app.is_active]

    async def get_role_for_edit(self, role_id: int) -> RoleEditResponse:
        for entry in self._load().get("roles", []):
            if entry.get("role", {}).get("id") == role_id:
                return _parse_role(entry)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")


@lru_cache(maxsize=1)
def get_catalog_provider():
    if settings.CATALOG_API_URL:
        return HttpCatalogProvider(
            base_url=settings.CATALOG_API_URL,
            token=settings.CATALOG_API_TOKEN,
            timeout=settings.CATALOG_TIMEOUT_SECONDS,
        )
    return FixtureCatalogProvider(path=settings.CATALOG_FIXTURE_PATH)
