# vehicle_data/vin_decoder.py
"""
VIN decode against the public vPIC registry.

DecodeVinValues returns one flattened object per VIN instead of the
per-variable array DecodeVin gives, so extraction is a key lookup.
Input validation is the caller's job (see normalize_vin / validate_vin).
"""
import asyncio
import logging
from urllib.parse import quote

import aiohttp

from vehicle_data import http_client
from vehicle_data.config import VehicleDataConfig
from vehicle_data.errors import DecodeFailed, InvalidInput, NotFound, UpstreamError
from vehicle_data.models import VehicleDescriptor
from vehicle_data.normalizer import descriptor_from_registry

logger = logging.getLogger(__name__)

VIN_LENGTH = 17


def normalize_vin(raw: str) -> str:
    return (raw or "").strip().upper()


def validate_vin(raw: str) -> str:
    vin = normalize_vin(raw)
    if not vin:
        raise InvalidInput("VIN is required", field="vin", reason="required")
    if len(vin) != VIN_LENGTH:
        raise InvalidInput(f"VIN must be {VIN_LENGTH} characters", field="vin", reason="length")
    return vin


class VinDecoderAdapter:
    def __init__(self, config: VehicleDataConfig):
        self.config = config

    async def decode_vin(self, vin: str) -> VehicleDescriptor:
        """
        Raises NotFound when the registry answered without make/model/year,
        DecodeFailed on transport errors or non-success status.
        """
        url = f"{self.config.registry_base}/DecodeVinValues/{quote(vin, safe='')}"
        try:
            status, text, payload = await http_client.fetch_json(
                url, params={"format": "json"}, timeout_sec=self.config.timeout_sec
            )
        except (aiohttp.ClientError, asyncio.TimeoutError, UpstreamError) as e:
            logger.warning("VIN decode request failed @ %s: %s", url, e)
            raise DecodeFailed(f"VIN decode failed: {e}", url=url) from e

        if payload is None:
            logger.warning("VIN decode HTTP %s @ %s :: %s", status, url, text[:200])
            raise DecodeFailed(f"VIN decode HTTP {status}", status=status, url=url)

        results = payload.get("Results") if isinstance(payload, dict) else None
        first = results[0] if isinstance(results, list) and results else None
        desc = descriptor_from_registry(first)
        if desc is None:
            raise NotFound(f"No vehicle found for VIN {vin}")
        logger.debug("VIN %s -> %s %s %s (unknown: %s)", vin, desc.year, desc.make, desc.model, desc.unknown_fields())
        return desc
