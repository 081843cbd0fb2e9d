"""Async HTTP client for the tower inventory backing store."""

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from config.defaults import (
    API_BASE_URL, API_TOKEN, API_LANGUAGE, API_TIMEOUT_SECONDS, API_VERIFY_TLS,
)
from data.errors import AssignmentError, DataLoadError
from data.loader import parse_block_record, parse_design_record, parse_floor_record, parse_unit_record
from models.building import Block, Floor, Tower
from models.design import Design
from models.unit import Unit

logger = logging.getLogger(__name__)


def unwrap_envelope(payload: Any, error_cls=DataLoadError) -> Any:
    """Return the `data` of a {success, message, statusCode, data} response.

    Paginated results nest their rows one level deeper under `data`.
    Bare lists are returned as-is.
    """
    if not isinstance(payload, dict):
        return payload
    if "success" in payload and not payload.get("success"):
        raise error_cls(payload.get("message") or "Request failed", payload.get("statusCode"))
    data = payload.get("data", payload)
    if isinstance(data, dict) and isinstance(data.get("data"), list):
        return data["data"]
    return data


class InventoryClient:
    """Thin wrapper over the store's Tower/Block/Floor/Unit/UnitDesign endpoints."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: str = API_TOKEN,
        language: str = API_LANGUAGE,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.language = language
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
            verify=API_VERIFY_TLS,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {"lang": self.language}
        query.update(params or {})
        try:
            response = await self._http.get(path, params=query)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise DataLoadError(f"GET {path} failed: {e.response.status_code}",
                                e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            raise DataLoadError(f"GET {path} failed: {e}") from e
        return unwrap_envelope(payload, DataLoadError)

    async def get_tower(self, tower_id: int) -> Tower:
        record = await self._get(f"/Tower/{tower_id}")
        name = ""
        if isinstance(record, dict):
            name = record.get("englishName") or record.get("arabicName") or ""
        return Tower(tower_id=tower_id, name=name or f"Tower {tower_id}")

    async def get_blocks(self, tower_id: int) -> List[Block]:
        rows = await self._get(f"/Tower/{tower_id}/blocks")
        return [parse_block_record(r, tower_id) for r in rows or []]

    async def get_floors(self, block_id: int) -> List[Floor]:
        rows = await self._get(f"/Block/{block_id}/floors")
        return [parse_floor_record(r, block_id) for r in rows or []]

    async def get_units(self, floor_id: int) -> List[Unit]:
        rows = await self._get(f"/Floor/{floor_id}/units")
        return [parse_unit_record(r, floor_id) for r in rows or []]

    async def get_designs(self) -> List[Design]:
        rows = await self._get("/UnitDesign", {"onlyActive": "true"})
        return [parse_design_record(r) for r in rows or []]

    async def assign_design(self, unit_ids: Iterable[int], design_id: int) -> str:
        """Assign one design to many units. Returns the store's message."""
        body = {"unitIds": sorted(unit_ids), "unitDesignId": design_id}
        try:
            response = await self._http.post(
                "/Unit/assign-design", params={"lang": self.language}, json=body,
            )
            payload = response.json() if response.content else {}
        except (httpx.HTTPError, ValueError) as e:
            raise AssignmentError(f"Assign design failed: {e}") from e

        if response.is_error:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise AssignmentError(message or f"Assign design failed: {response.status_code}",
                                  response.status_code)
        unwrap_envelope(payload, AssignmentError)
        logger.info("Assigned design %s to %d units", design_id, len(body["unitIds"]))
        return payload.get("message", "") if isinstance(payload, dict) else ""
