"""
Print options catalog models.

The catalog holds every pricing parameter the quote engine reads: per-page
rates by color type, paper size and duplex multipliers, optional resolution
multipliers, flat additional services (stapling) and the copies limit.

It normally comes from the backend ``print-jobs/options`` endpoint. When the
backend is unavailable the single built-in default catalog below applies.

Option lookups are keyed by closed enums, so a value outside the enum can
never match an entry by accident.

Thread Safety:
    - PrintOptionsCatalog is a frozen dataclass, shared read-only
    - The catalog service swaps whole catalogs, never mutates one
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple, Type, TypeVar

from core.exceptions import UnknownCatalogValue

logger = logging.getLogger(__name__)


# =============================================================================
# OPTION ENUMS (wire values match the backend)
# =============================================================================

class PaperSize(str, Enum):
    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"
    LEGAL = "Legal"
    TABLOID = "Tabloid"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ColorType(str, Enum):
    BLACK_WHITE = "black_white"
    COLOR = "color"


class Duplex(str, Enum):
    SINGLE_SIDED = "single_sided"
    DOUBLE_SIDED_LONG_EDGE = "double_sided_long_edge"
    DOUBLE_SIDED_SHORT_EDGE = "double_sided_short_edge"


E = TypeVar("E", bound=Enum)


def coerce_option(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Return the enum member for a raw wire value, or None if there is none."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


# =============================================================================
# DEFAULT PRICING
# =============================================================================

DEFAULT_COLOR_RATES: Dict[ColorType, float] = {
    ColorType.COLOR: 25.0,
    ColorType.BLACK_WHITE: 10.0,
}
"""Per-page base rate used when the catalog has no entry for a color type."""

FALLBACK_COLOR_TYPE = ColorType.BLACK_WHITE
"""Color type whose default rate applies to unrecognized color values."""

DEFAULT_MULTIPLIER = 1.0
DEFAULT_STAPLE_FEE = 0.05
DEFAULT_MAX_COPIES = 100
STAPLING_SERVICE = "stapling"

MIN_RESOLUTION_DPI = 150
MAX_RESOLUTION_DPI = 600
RESOLUTION_STEP_DPI = 50


# =============================================================================
# OPTION RECORDS
# =============================================================================

@dataclass(frozen=True)
class PaperSizeOption:
    value: PaperSize
    label: str
    cost_multiplier: float = DEFAULT_MULTIPLIER

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.value, "label": self.label, "costMultiplier": self.cost_multiplier}


@dataclass(frozen=True)
class OrientationOption:
    value: Orientation
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.value, "label": self.label}


@dataclass(frozen=True)
class ColorTypeOption:
    value: ColorType
    label: str
    cost_per_page: float

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.value, "label": self.label, "costPerPage": self.cost_per_page}


@dataclass(frozen=True)
class DuplexOption:
    value: Duplex
    label: str
    cost_multiplier: float = DEFAULT_MULTIPLIER

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.value, "label": self.label, "costMultiplier": self.cost_multiplier}


@dataclass(frozen=True)
class ResolutionOption:
    """A DPI choice. Price-neutral unless the backend sends a multiplier."""

    value: int
    label: str
    cost_multiplier: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value, "label": self.label}
        if self.cost_multiplier is not None:
            data["costMultiplier"] = self.cost_multiplier
        return data


@dataclass(frozen=True)
class AdditionalService:
    """A flat per-job fee, looked up by case-insensitive name."""

    name: str
    cost: float
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "cost": self.cost, "description": self.description}


# =============================================================================
# CATALOG
# =============================================================================

@dataclass(frozen=True)
class PrintOptionsCatalog:
    """
    The pricing parameter table in force at quote time.

    Mappings keep the backend's ordering, which is also the display order.
    """

    paper_sizes: Dict[PaperSize, PaperSizeOption] = field(default_factory=dict)
    orientations: Dict[Orientation, OrientationOption] = field(default_factory=dict)
    color_types: Dict[ColorType, ColorTypeOption] = field(default_factory=dict)
    duplex_options: Dict[Duplex, DuplexOption] = field(default_factory=dict)
    resolutions: Dict[int, ResolutionOption] = field(default_factory=dict)
    additional_services: Tuple[AdditionalService, ...] = ()
    max_copies: int = DEFAULT_MAX_COPIES
    supported_file_types: Tuple[str, ...] = ("pdf",)

    # ------------------------------------------------------------------
    # Lookups. Each raises UnknownCatalogValue so the engine can record
    # the degradation before falling back.
    # ------------------------------------------------------------------

    def color_type_option(self, value: Any) -> ColorTypeOption:
        key = coerce_option(ColorType, value)
        if key is None or key not in self.color_types:
            raise UnknownCatalogValue("color type", value)
        return self.color_types[key]

    def paper_size_option(self, value: Any) -> PaperSizeOption:
        key = coerce_option(PaperSize, value)
        if key is None or key not in self.paper_sizes:
            raise UnknownCatalogValue("paper size", value)
        return self.paper_sizes[key]

    def duplex_option(self, value: Any) -> DuplexOption:
        key = coerce_option(Duplex, value)
        if key is None or key not in self.duplex_options:
            raise UnknownCatalogValue("duplex option", value)
        return self.duplex_options[key]

    def orientation_option(self, value: Any) -> OrientationOption:
        key = coerce_option(Orientation, value)
        if key is None or key not in self.orientations:
            raise UnknownCatalogValue("orientation", value)
        return self.orientations[key]

    def resolution_option(self, dpi: Any) -> Optional[ResolutionOption]:
        """Resolutions are optional in the catalog, so a miss is not an error."""
        try:
            return self.resolutions.get(int(dpi))
        except (TypeError, ValueError, OverflowError):
            return None

    def find_service(self, name: str) -> Optional[AdditionalService]:
        wanted = name.lower()
        for service in self.additional_services:
            if service.name.lower() == wanted:
                return service
        return None

    # ------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the backend ``PrintOptions`` JSON shape."""
        return {
            "paperSizes": [o.to_dict() for o in self.paper_sizes.values()],
            "orientations": [o.to_dict() for o in self.orientations.values()],
            "colorTypes": [o.to_dict() for o in self.color_types.values()],
            "duplexOptions": [o.to_dict() for o in self.duplex_options.values()],
            "resolutions": [o.to_dict() for o in self.resolutions.values()],
            "additionalServices": [s.to_dict() for s in self.additional_services],
            "maxCopies": self.max_copies,
            "supportedFileTypes": list(self.supported_file_types),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrintOptionsCatalog":
        """
        Build a catalog from backend JSON.

        Entries whose ``value`` is outside the known enums are skipped with a
        warning. Missing numbers take their defaults.

        Raises:
            TypeError: If ``data`` is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"Catalog must be a JSON object, got {type(data).__name__}")

        paper_sizes: Dict[PaperSize, PaperSizeOption] = {}
        for entry, key in _known_entries(data.get("paperSizes"), PaperSize, "paper size"):
            paper_sizes[key] = PaperSizeOption(
                value=key,
                label=str(entry.get("label") or key.value),
                cost_multiplier=_as_float(entry.get("costMultiplier"), DEFAULT_MULTIPLIER),
            )

        orientations: Dict[Orientation, OrientationOption] = {}
        for entry, key in _known_entries(data.get("orientations"), Orientation, "orientation"):
            orientations[key] = OrientationOption(value=key, label=str(entry.get("label") or key.value))

        color_types: Dict[ColorType, ColorTypeOption] = {}
        for entry, key in _known_entries(data.get("colorTypes"), ColorType, "color type"):
            color_types[key] = ColorTypeOption(
                value=key,
                label=str(entry.get("label") or key.value),
                cost_per_page=_as_float(entry.get("costPerPage"), DEFAULT_COLOR_RATES[key]),
            )

        duplex_options: Dict[Duplex, DuplexOption] = {}
        for entry, key in _known_entries(data.get("duplexOptions"), Duplex, "duplex option"):
            duplex_options[key] = DuplexOption(
                value=key,
                label=str(entry.get("label") or key.value),
                cost_multiplier=_as_float(entry.get("costMultiplier"), DEFAULT_MULTIPLIER),
            )

        resolutions: Dict[int, ResolutionOption] = {}
        for entry in data.get("resolutions") or []:
            try:
                dpi = int(entry.get("value"))
            except (TypeError, ValueError, AttributeError):
                logger.warning(f"Skipping malformed resolution entry: {entry!r}")
                continue
            multiplier = entry.get("costMultiplier")
            resolutions[dpi] = ResolutionOption(
                value=dpi,
                label=str(entry.get("label") or f"{dpi} DPI"),
                cost_multiplier=_as_float(multiplier, DEFAULT_MULTIPLIER) if multiplier is not None else None,
            )

        services = []
        for entry in data.get("additionalServices") or []:
            if not isinstance(entry, dict) or not entry.get("name"):
                logger.warning(f"Skipping malformed additional service: {entry!r}")
                continue
            services.append(AdditionalService(
                name=str(entry["name"]),
                cost=_as_float(entry.get("cost"), 0.0),
                description=str(entry.get("description") or ""),
            ))

        max_copies = data.get("maxCopies")
        try:
            max_copies = int(max_copies) if max_copies else DEFAULT_MAX_COPIES
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Invalid maxCopies {max_copies!r}, using {DEFAULT_MAX_COPIES}")
            max_copies = DEFAULT_MAX_COPIES
        if max_copies < 1:
            max_copies = DEFAULT_MAX_COPIES

        file_types = data.get("supportedFileTypes") or ["pdf"]

        return cls(
            paper_sizes=paper_sizes,
            orientations=orientations,
            color_types=color_types,
            duplex_options=duplex_options,
            resolutions=resolutions,
            additional_services=tuple(services),
            max_copies=max_copies,
            supported_file_types=tuple(str(t).lower().lstrip(".") for t in file_types),
        )


def _known_entries(entries: Optional[List[Any]], enum_cls: Type[E], field_name: str):
    """Yield (entry, enum member) for well-formed entries with a known value."""
    for entry in entries or []:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed {field_name} entry: {entry!r}")
            continue
        key = coerce_option(enum_cls, entry.get("value"))
        if key is None:
            logger.warning(UnknownCatalogValue(field_name, entry.get("value")).message)
            continue
        yield entry, key


def _as_float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


# =============================================================================
# DEFAULT CATALOG
# =============================================================================

def default_catalog() -> PrintOptionsCatalog:
    """
    The built-in catalog used whenever the backend catalog is unavailable.

    Rates: color 25/page, black & white 10/page, stapling 0.05 flat.
    Every multiplier is 1.0 and up to 100 copies are allowed.
    """
    return PrintOptionsCatalog(
        paper_sizes={
            PaperSize.A4: PaperSizeOption(PaperSize.A4, "A4 (210 × 297 mm)"),
            PaperSize.A3: PaperSizeOption(PaperSize.A3, "A3 (297 × 420 mm)"),
            PaperSize.LETTER: PaperSizeOption(PaperSize.LETTER, "Letter (8.5 × 11 in)"),
            PaperSize.LEGAL: PaperSizeOption(PaperSize.LEGAL, "Legal (8.5 × 14 in)"),
            PaperSize.TABLOID: PaperSizeOption(PaperSize.TABLOID, "Tabloid (11 × 17 in)"),
        },
        orientations={
            Orientation.PORTRAIT: OrientationOption(Orientation.PORTRAIT, "Portrait"),
            Orientation.LANDSCAPE: OrientationOption(Orientation.LANDSCAPE, "Landscape"),
        },
        color_types={
            ColorType.COLOR: ColorTypeOption(ColorType.COLOR, "Color", DEFAULT_COLOR_RATES[ColorType.COLOR]),
            ColorType.BLACK_WHITE: ColorTypeOption(
                ColorType.BLACK_WHITE, "Black & White", DEFAULT_COLOR_RATES[ColorType.BLACK_WHITE]
            ),
        },
        duplex_options={
            Duplex.SINGLE_SIDED: DuplexOption(Duplex.SINGLE_SIDED, "Single-sided"),
            Duplex.DOUBLE_SIDED_LONG_EDGE: DuplexOption(Duplex.DOUBLE_SIDED_LONG_EDGE, "Double-sided (Long Edge)"),
            Duplex.DOUBLE_SIDED_SHORT_EDGE: DuplexOption(Duplex.DOUBLE_SIDED_SHORT_EDGE, "Double-sided (Short Edge)"),
        },
        resolutions={
            dpi: ResolutionOption(dpi, f"{dpi} DPI")
            for dpi in range(MIN_RESOLUTION_DPI, MAX_RESOLUTION_DPI + 1, RESOLUTION_STEP_DPI)
        },
        additional_services=(
            AdditionalService(STAPLING_SERVICE, DEFAULT_STAPLE_FEE, "Staple printed pages together"),
        ),
        max_copies=DEFAULT_MAX_COPIES,
        supported_file_types=("pdf",),
    )


def resolve_catalog(server_catalog: Any = None) -> PrintOptionsCatalog:
    """
    Pick the catalog to price with.

    A catalog object is used as-is, backend JSON is parsed, and anything
    missing or unreadable yields the default catalog. Never raises.
    """
    if server_catalog is None:
        return default_catalog()

    if isinstance(server_catalog, PrintOptionsCatalog):
        return server_catalog

    try:
        return PrintOptionsCatalog.from_dict(server_catalog)
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Unreadable server catalog, using defaults: {e}")
        return default_catalog()
