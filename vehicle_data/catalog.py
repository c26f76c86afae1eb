# vehicle_data/catalog.py
"""
Hierarchical make -> model -> trim catalog served by our own backend.

The backend fills its cache asynchronously, so a first query can race an
empty cache. An empty answer is re-asked exactly once with refresh=true;
there is never a third request for the same logical query.

Upstream failures are not errors here: every list degrades to [] so the
picker can fall back to free text.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from vehicle_data import http_client
from vehicle_data.cache import ResultCache
from vehicle_data.config import VehicleDataConfig
from vehicle_data.errors import CatalogUnavailable, UpstreamError
from vehicle_data.models import TrimRow, cache_key
from vehicle_data.normalizer import list_from_payload, sorted_trims, sorted_unique

logger = logging.getLogger(__name__)

MAKERS = "makers"
MODELS = "models"
TRIMS = "trims"


class CatalogAdapter:
    def __init__(self, config: VehicleDataConfig, cache: Optional[ResultCache] = None):
        self.config = config
        self.cache = cache if cache is not None else ResultCache()

    def _headers(self) -> Dict[str, str]:
        if self.config.api_key:
            return {"X-API-Key": self.config.api_key}
        return {}

    async def _request(self, kind: str, params: Dict[str, Any], refresh: bool) -> List[Any]:
        url = f"{self.config.catalog_base}/{kind}"
        q = dict(params)
        if refresh:
            q["refresh"] = "true"
        try:
            status, text, payload = await http_client.fetch_json(
                url, params=q, headers=self._headers(), timeout_sec=self.config.timeout_sec
            )
        except (aiohttp.ClientError, asyncio.TimeoutError, UpstreamError) as e:
            raise CatalogUnavailable(f"catalog GET failed @ {url}: {e}", url=url) from e
        if payload is None:
            raise CatalogUnavailable(f"catalog GET {status} @ {url} :: {text[:200]}", status=status, url=url)
        return list_from_payload(payload)

    async def _query(self, kind: str, params: Dict[str, Any], key, normalize, refresh: bool) -> List[Any]:
        if not refresh:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            items = normalize(await self._request(kind, params, refresh))
            if not items and not refresh:
                logger.debug("empty %s for %s, retrying once with refresh", kind, params)
                items = normalize(await self._request(kind, params, True))
        except CatalogUnavailable as e:
            # only successful answers are cached
            logger.warning("%s", e)
            return []

        self.cache.put(key, items)
        return items

    async def list_makers(self, refresh: bool = False) -> List[str]:
        return await self._query(MAKERS, {}, cache_key(MAKERS), sorted_unique, refresh)

    async def list_models(self, maker: str, year: Optional[int] = None, refresh: bool = False) -> List[str]:
        params: Dict[str, Any] = {"maker": maker}
        if year:
            params["year"] = str(year)
        return await self._query(MODELS, params, cache_key(MODELS, maker, year=year), sorted_unique, refresh)

    async def list_trims(
        self, maker: str, model: str, year: Optional[int] = None, refresh: bool = False
    ) -> List[TrimRow]:
        params: Dict[str, Any] = {"maker": maker, "model": model}
        if year:
            params["year"] = str(year)
        return await self._query(TRIMS, params, cache_key(TRIMS, maker, model, year), sorted_trims, refresh)
