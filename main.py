# main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api_vehicle_data import vehicle_data_router
from vehicle_data.config import VehicleDataConfig, configure_logging
from vehicle_data.resolver import VehicleDataEngine

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# -----------------------------
# Config (resolved once, injected below)
# -----------------------------
CONFIG = VehicleDataConfig.from_env()
configure_logging(CONFIG)


def create_app(config: VehicleDataConfig = CONFIG) -> FastAPI:
    app = FastAPI(title="Vehicle Data Resolution")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],   # tighten for prod
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.vehicle_engine = VehicleDataEngine(config)
    app.include_router(vehicle_data_router)   # /vehicle-data/*

    @app.get("/health")
    def health():
        return {"ok": True, "service": "vehicle-data", "has_api_key": bool(config.api_key)}

    return app


app = create_app()
