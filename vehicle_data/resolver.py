# vehicle_data/resolver.py
from typing import List, Optional

from vehicle_data.cache import ResultCache
from vehicle_data.catalog import CatalogAdapter
from vehicle_data.config import VehicleDataConfig
from vehicle_data.coordinator import SelectionCoordinator
from vehicle_data.models import TrimRow, VehicleDescriptor
from vehicle_data.vin_decoder import VinDecoderAdapter, validate_vin
from vehicle_data.years import YearRangeAdapter



class VehicleDataEngine:
    """
    Entry point for callers: VIN path and cascading catalog path.
    One instance per session; its ResultCache is shared by every selection it creates.
    """

    def __init__(self, config: VehicleDataConfig, cache: Optional[ResultCache] = None):
        self.config = config
        self.cache = cache if cache is not None else ResultCache()
        self.vin_decoder = VinDecoderAdapter(config)
        self.catalog = CatalogAdapter(config, self.cache)
        self.years = YearRangeAdapter(config)

    async def decode_vin(self, raw_vin: str) -> VehicleDescriptor:
        vin = validate_vin(raw_vin)
        return await self.vin_decoder.decode_vin(vin)

    async def list_makers(self, refresh: bool = False) -> List[str]:
        return await self.catalog.list_makers(refresh=refresh)

    async def list_models(self, maker: str, year: Optional[int] = None, refresh: bool = False) -> List[str]:
        return await self.catalog.list_models(maker, year, refresh=refresh)

    async def list_trims(
        self, maker: str, model: str, year: Optional[int] = None, refresh: bool = False
    ) -> List[TrimRow]:
        return await self.catalog.list_trims(maker, model, year, refresh=refresh)

    async def list_years(self, make: str) -> List[int]:
        return await self.years.list_years(make)

    def new_selection(self) -> SelectionCoordinator:
        return SelectionCoordinator(self.catalog, self.years)
