# vehicle_data/config.py
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv, find_dotenv

DEFAULT_REGISTRY_BASE = "https://vpic.nhtsa.dot.gov/api/vehicles"
DEFAULT_BACKEND_BASE = "https://mygarage.uno/api"
DEFAULT_YEARS_BASE = "https://www.carqueryapi.com/api/0.3"
DEFAULT_TIMEOUT_SEC = 15.0


def _clean_base(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    raw = raw.strip().rstrip("/")
    return raw or None


def _sanitize_key(k: Optional[str]) -> str:
    if k is None:
        return ""
    return " ".join(k.strip().split())


def _timeout(raw: Optional[str]) -> float:
    try:
        val = float((raw or "").strip())
    except ValueError:
        return DEFAULT_TIMEOUT_SEC
    return val if val > 0 else DEFAULT_TIMEOUT_SEC


@dataclass(frozen=True)
class VehicleDataConfig:
    registry_base: str = DEFAULT_REGISTRY_BASE
    backend_base: str = DEFAULT_BACKEND_BASE
    years_base: str = DEFAULT_YEARS_BASE
    api_key: str = ""
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    debug: bool = False

    @property
    def catalog_base(self) -> str:
        return f"{self.backend_base}/car-data"

    def masked_key(self) -> str:
        if not self.api_key:
            return "<missing>"
        if len(self.api_key) <= 8:
            return "****"
        return self.api_key[:4] + "…" + self.api_key[-4:]

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "VehicleDataConfig":
        """
        Resolve configuration once at startup.
        .env values override OS vars so a stale shell export doesn't win.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=True)
        return cls(
            registry_base=_clean_base(os.getenv("VEHICLE_REGISTRY_BASE")) or DEFAULT_REGISTRY_BASE,
            backend_base=_clean_base(os.getenv("VEHICLE_API_BASE_URL")) or DEFAULT_BACKEND_BASE,
            years_base=_clean_base(os.getenv("VEHICLE_YEARS_BASE")) or DEFAULT_YEARS_BASE,
            api_key=_sanitize_key(os.getenv("VEHICLE_API_KEY")),
            timeout_sec=_timeout(os.getenv("VEHICLE_HTTP_TIMEOUT")),
            debug=os.getenv("VEHICLE_DATA_DEBUG", "0") == "1",
        )


def configure_logging(config: VehicleDataConfig) -> None:
    logger = logging.getLogger("vehicle_data")
    logger.setLevel(logging.DEBUG if config.debug else logging.INFO)
    logger.debug(
        "config: backend=%s registry=%s years=%s key=%s",
        config.backend_base, config.registry_base, config.years_base, config.masked_key(),
    )
