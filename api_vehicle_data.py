# api_vehicle_data.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from vehicle_data.errors import DecodeFailed, InvalidInput, NotFound
from vehicle_data.resolver import VehicleDataEngine

vehicle_data_router = APIRouter(prefix="/vehicle-data")


class VinDecodeOut(BaseModel):
    vehicle: Dict[str, Any]
    unknown_fields: List[str]


class TrimsOut(BaseModel):
    trims: List[Dict[str, Any]]
    labels: List[str]


def get_engine(request: Request) -> VehicleDataEngine:
    return request.app.state.vehicle_engine


@vehicle_data_router.get("/vin/{vin}", response_model=VinDecodeOut)
async def decode_vin(vin: str, engine: VehicleDataEngine = Depends(get_engine)):
    try:
        desc = await engine.decode_vin(vin)
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail={"field": e.field, "reason": e.reason, "msg": str(e)})
    except NotFound as e:
        # caller should offer manual entry
        raise HTTPException(status_code=404, detail=str(e))
    except DecodeFailed as e:
        # caller should offer a retry
        raise HTTPException(status_code=502, detail=str(e))
    return {"vehicle": desc.to_dict(), "unknown_fields": desc.unknown_fields()}


@vehicle_data_router.get("/makers")
async def get_makers(refresh: bool = Query(default=False), engine: VehicleDataEngine = Depends(get_engine)):
    return {"makers": await engine.list_makers(refresh=refresh)}


@vehicle_data_router.get("/models")
async def get_models(
    maker: str = Query(..., min_length=1),
    year: Optional[int] = Query(default=None),
    refresh: bool = Query(default=False),
    engine: VehicleDataEngine = Depends(get_engine),
):
    return {"models": await engine.list_models(maker, year, refresh=refresh)}


@vehicle_data_router.get("/trims", response_model=TrimsOut)
async def get_trims(
    maker: str = Query(..., min_length=1),
    model: str = Query(..., min_length=1),
    year: Optional[int] = Query(default=None),
    refresh: bool = Query(default=False),
    engine: VehicleDataEngine = Depends(get_engine),
):
    rows = await engine.list_trims(maker, model, year, refresh=refresh)
    return {"trims": [r.to_dict() for r in rows], "labels": [r.engine for r in rows]}


@vehicle_data_router.get("/years")
async def get_years(make: str = Query(..., min_length=1), engine: VehicleDataEngine = Depends(get_engine)):
    return {"years": await engine.list_years(make)}
