# vehicle_data/normalizer.py
# Maps raw upstream shapes into the canonical types in vehicle_data.models.

import re
import unicodedata
from typing import Any, Dict, Iterable, List, Optional

from vehicle_data.models import TrimRow, VehicleDescriptor

_LEADING_INT = re.compile(r"^\s*(-?\d+)")


def _text(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def parse_int(v: Any) -> int:
    """Leading integer of `v`, 0 when absent or non-numeric."""
    if isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v)
    m = _LEADING_INT.match(_text(v))
    return int(m.group(1)) if m else 0


def _first(result: Dict[str, Any], *keys: str) -> str:
    for k in keys:
        v = _text(result.get(k))
        if v:
            return v
    return ""


def _displacement(result: Dict[str, Any]) -> str:
    litres = _text(result.get("DisplacementL"))
    if litres:
        return f"{litres}L"
    cc = _text(result.get("DisplacementCC"))
    if cc:
        return f"{cc}cc"
    return ""


def descriptor_from_registry(result: Optional[Dict[str, Any]]) -> Optional[VehicleDescriptor]:
    """
    Build a descriptor from one flattened registry result.
    Returns None when none of make/model/year could be extracted:
    secondary attributes alone do not identify a vehicle.
    """
    if not isinstance(result, dict):
        return None
    year = parse_int(result.get("ModelYear"))
    desc = VehicleDescriptor(
        make=_text(result.get("Make")),
        model=_text(result.get("Model")),
        year=year if year > 0 else 0,
        engine=_first(result, "EngineModel", "EngineConfiguration"),
        body_type=_text(result.get("BodyClass")),
        fuel_type=_text(result.get("FuelTypePrimary")),
        transmission=_first(result, "TransmissionStyle", "TransmissionSpeeds"),
        drive_type=_text(result.get("DriveType")),
        cylinders=max(parse_int(result.get("EngineCylinders")), 0),
        displacement=_displacement(result),
    )
    if not desc.is_identified():
        return None
    return desc


def sort_key(label: str):
    # accent-insensitive, case-insensitive first; raw string breaks ties
    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), label)


def sorted_unique(labels: Iterable[Any]) -> List[str]:
    seen = set()
    out: List[str] = []
    for raw in labels:
        if not isinstance(raw, str):
            continue
        if raw not in seen:
            seen.add(raw)
            out.append(raw)
    return sorted(out, key=sort_key)


def trim_label(row: Any) -> str:
    if isinstance(row, str):
        return row.strip()
    if not isinstance(row, dict):
        return ""
    return _first(row, "engine", "trim_engine")


def unique_trims(rows: Iterable[Any]) -> List[TrimRow]:
    """First row wins per engine label; later duplicates are dropped even if other fields differ."""
    seen = set()
    out: List[TrimRow] = []
    for row in rows:
        label = trim_label(row)
        if not label or label in seen:
            continue
        seen.add(label)
        extra = dict(row) if isinstance(row, dict) else {}
        out.append(TrimRow(engine=label, fields=extra))
    return out


def parse_years(entries: Iterable[Any]) -> List[int]:
    years: List[int] = []
    for e in entries:
        raw = e.get("year") if isinstance(e, dict) else e
        y = parse_int(raw)
        if y > 0:
            years.append(y)
    return years


def list_from_payload(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        v = payload.get("data")
        if isinstance(v, list):
            return v
    return []


def sorted_trims(rows: Iterable[Any]) -> List[TrimRow]:
    return sorted(unique_trims(rows), key=lambda r: sort_key(r.engine))
