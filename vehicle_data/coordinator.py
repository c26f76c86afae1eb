# vehicle_data/coordinator.py
"""
Cascading make -> model -> trim selection used by manual entry.

Owns ordering and precondition checks only; network retry and caching
live in CatalogAdapter. Year is a refinement passed to every catalog
query, not an ancestor, so changing it keeps model and engine.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from vehicle_data.catalog import CatalogAdapter
from vehicle_data.errors import InvalidInput, PreconditionFailed
from vehicle_data.models import SelectionState, TrimRow
from vehicle_data.normalizer import parse_int, trim_label
from vehicle_data.years import YearRangeAdapter

logger = logging.getLogger(__name__)

MIN_YEAR = 1900

PICKER_MAKER = "maker"
PICKER_MODEL = "model"
PICKER_TRIM = "trim"
_PICKER_ALIASES = {"make": PICKER_MAKER, "engine": PICKER_TRIM}


def _coerce_year(year: Union[int, str, None]) -> Optional[int]:
    y = parse_int(year)
    return y if y > 0 else None


class SelectionCoordinator:
    def __init__(self, catalog: CatalogAdapter, years: Optional[YearRangeAdapter] = None):
        self.catalog = catalog
        self.years_source = years
        self.state = SelectionState()
        self.makers: List[str] = []
        self.models: List[str] = []
        self.trims: List[TrimRow] = []
        self.years: List[int] = []
        self.search = ""

    # ---------------------------
    # transitions
    # ---------------------------
    async def set_maker(self, maker: str, preload_makers: bool = True) -> None:
        self.state.maker = (maker or "").strip()
        logger.debug("maker -> %r, clearing model/engine", self.state.maker)
        self.state.model = ""
        self.state.engine = ""
        self.models = []
        self.trims = []
        self.years = []
        if preload_makers and not self.makers:
            self.makers = await self.catalog.list_makers()

    def set_model(self, model: str) -> None:
        if not self.state.maker:
            raise PreconditionFailed("select make first", field="model")
        self.state.model = (model or "").strip()
        self.state.engine = ""
        self.trims = []

    def set_year(self, year: Union[int, str, None]) -> None:
        self.state.year = _coerce_year(year)

    def set_trim(self, row: Union[TrimRow, Dict[str, Any], str, None]) -> str:
        if not self.state.maker or not self.state.model:
            raise PreconditionFailed("select make and model first", field="engine")
        label = row.engine if isinstance(row, TrimRow) else trim_label(row)
        self.state.engine = label
        return label

    def set_search(self, text: str) -> None:
        self.search = text or ""

    # ---------------------------
    # option lists
    # ---------------------------
    def filter_options(self, labels: List[str]) -> List[str]:
        needle = self.search.strip().lower()
        if not needle:
            return list(labels)
        return [s for s in labels if needle in s.lower()]

    async def open_picker(self, kind: str) -> List[str]:
        kind = _PICKER_ALIASES.get(kind, kind)
        if kind == PICKER_MAKER:
            if not self.makers:
                self.makers = await self.catalog.list_makers()
            return self.filter_options(self.makers)

        if kind == PICKER_MODEL:
            if not self.state.maker:
                raise PreconditionFailed("select make first", field="model")
            maker, year = self.state.maker, self.state.year_filter()
            models = await self.catalog.list_models(maker, year)
            # maker may have changed while the request was outstanding
            if self.state.maker == maker:
                self.models = models
            return self.filter_options(models)

        if kind == PICKER_TRIM:
            if not self.state.maker or not self.state.model:
                raise PreconditionFailed("select make and model first", field="engine")
            maker, model, year = self.state.maker, self.state.model, self.state.year_filter()
            trims = await self.catalog.list_trims(maker, model, year)
            if (self.state.maker, self.state.model) == (maker, model):
                self.trims = trims
            return self.filter_options([t.engine for t in trims])

        raise InvalidInput(f"unknown picker {kind!r}", field="picker", reason="unknown")

    async def load_years(self) -> List[int]:
        if not self.state.maker:
            raise PreconditionFailed("select make first", field="year")
        if self.years_source is None:
            return []
        maker = self.state.maker
        years = await self.years_source.list_years(maker)
        if self.state.maker == maker:
            self.years = years
        return years

    # ---------------------------
    # completion
    # ---------------------------
    def missing_fields(self) -> Dict[str, str]:
        missing: Dict[str, str] = {}
        if not self.state.year:
            missing["year"] = "required"
        elif self.state.year < MIN_YEAR:
            missing["year"] = "invalid"
        if not self.state.maker:
            missing["maker"] = "required"
        if not self.state.model:
            missing["model"] = "required"
        if not self.state.engine:
            missing["engine"] = "required"
        return missing

    def as_vehicle_fields(self) -> Dict[str, Any]:
        missing = self.missing_fields()
        if missing:
            field, reason = next(iter(missing.items()))
            raise InvalidInput(f"{field} is {reason}", field=field, reason=reason)
        return {
            "year": self.state.year,
            "make": self.state.maker,
            "model": self.state.model,
            "engine_type": self.state.engine,
        }
