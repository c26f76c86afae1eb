# vehicle_data/years.py
import asyncio
import logging
from typing import Any, List

import aiohttp

from vehicle_data import http_client
from vehicle_data.config import VehicleDataConfig
from vehicle_data.errors import UpstreamError
from vehicle_data.normalizer import parse_int, parse_years

logger = logging.getLogger(__name__)


def _years_from_payload(payload: Any) -> List[int]:
    years = payload.get("Years") if isinstance(payload, dict) else None
    if isinstance(years, list):
        return parse_years(years)
    # some deployments answer {"Years": {"min_year": "1941", "max_year": "2022"}}
    if isinstance(years, dict):
        lo, hi = parse_int(years.get("min_year")), parse_int(years.get("max_year"))
        if 0 < lo <= hi:
            return list(range(lo, hi + 1))
    return []


class YearRangeAdapter:
    """Model years per make from the public CarQuery catalog. No retry, no cache."""

    def __init__(self, config: VehicleDataConfig):
        self.config = config

    async def list_years(self, make: str) -> List[int]:
        url = f"{self.config.years_base}/"
        params = {"cmd": "getYears", "make": make}
        try:
            status, text, payload = await http_client.fetch_json(url, params=params, timeout_sec=self.config.timeout_sec)
        except (aiohttp.ClientError, asyncio.TimeoutError, UpstreamError) as e:
            logger.warning("year lookup failed for %s: %s", make, e)
            return []
        if payload is None:
            logger.warning("year lookup HTTP %s for %s :: %s", status, make, text[:200])
            return []
        return _years_from_payload(payload)
