from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from api_vehicle_data import decode_vin, get_engine, get_models, get_trims
from vehicle_data.errors import DecodeFailed, NotFound
from vehicle_data.models import TrimRow, VehicleDescriptor
from vehicle_data.resolver import VehicleDataEngine


def test_get_engine_reads_app_state(config):
    engine = VehicleDataEngine(config)
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(vehicle_engine=engine)))
    assert get_engine(request) is engine


@pytest.mark.asyncio
async def test_vin_route_returns_descriptor(config):
    engine = VehicleDataEngine(config)
    engine.vin_decoder.decode_vin = AsyncMock(return_value=VehicleDescriptor(make="HONDA", model="ACCORD", year=2003))
    body = await decode_vin("1HGCM82633A004352", engine=engine)
    assert body["vehicle"]["make"] == "HONDA"
    assert "engine" in body["unknown_fields"]


@pytest.mark.asyncio
@pytest.mark.parametrize("vin,side_effect,status", [
    ("SHORT", None, 422),
    ("1HGCM82633A004352", NotFound("nope"), 404),
    ("1HGCM82633A004352", DecodeFailed("down"), 502),
])
async def test_vin_route_error_mapping(config, vin, side_effect, status):
    engine = VehicleDataEngine(config)
    engine.vin_decoder.decode_vin = AsyncMock(side_effect=side_effect)
    with pytest.raises(HTTPException) as exc:
        await decode_vin(vin, engine=engine)
    assert exc.value.status_code == status


@pytest.mark.asyncio
async def test_models_and_trims_routes(config):
    engine = VehicleDataEngine(config)
    engine.catalog.list_models = AsyncMock(return_value=["Camry", "Corolla"])
    engine.catalog.list_trims = AsyncMock(return_value=[TrimRow(engine="2.5L", fields={"hp": 203})])
    assert await get_models(maker="Toyota", year=2020, refresh=False, engine=engine) == {"models": ["Camry", "Corolla"]}
    body = await get_trims(maker="Toyota", model="Camry", year=None, refresh=True, engine=engine)
    assert body == {"trims": [{"hp": 203, "engine": "2.5L"}], "labels": ["2.5L"]}
    engine.catalog.list_trims.assert_awaited_once_with("Toyota", "Camry", None, refresh=True)
