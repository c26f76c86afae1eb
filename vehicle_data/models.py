# vehicle_data/models.py
from dataclasses import dataclass, field, fields as dataclass_fields
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class VehicleDescriptor:
    """
    Canonical result of a VIN decode.
    Unknown values are "" (text) or 0 (year/cylinders), never None.
    """
    make: str = ""
    model: str = ""
    year: int = 0
    engine: str = ""
    body_type: str = ""
    fuel_type: str = ""
    transmission: str = ""
    drive_type: str = ""
    cylinders: int = 0
    displacement: str = ""

    def unknown_fields(self) -> List[str]:
        return [f.name for f in dataclass_fields(self) if getattr(self, f.name) in ("", 0)]

    def is_identified(self) -> bool:
        return bool(self.make or self.model or self.year)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self)}


@dataclass(frozen=True)
class TrimRow:
    # label already resolved from engine / trim_engine
    engine: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.fields, "engine": self.engine}


# (operation kind, maker, model, year)
CacheKey = Tuple[str, str, str, Optional[int]]


def cache_key(kind: str, maker: str = "", model: str = "", year: Optional[int] = None) -> CacheKey:
    return (kind, maker, model, year or None)


@dataclass
class SelectionState:
    maker: str = ""
    model: str = ""
    year: Optional[int] = None
    engine: str = ""

    def year_filter(self) -> Optional[int]:
        return self.year or None
