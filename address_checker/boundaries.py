"""Municipal boundary loading.

GeoJSON sources come in three shapes: a FeatureCollection, a single Feature,
or a bare geometry. Each source is classified once at load time and
normalized into a single immutable ``BoundaryFeature``. The features are
collected into a ``BoundaryRegistry`` whose order is the detection priority.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

import shapely
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon, shape
from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("address_checker.boundaries")

GEOMETRY_TYPES = frozenset(
    {
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    }
)
POLYGONAL_TYPES = frozenset({"Polygon", "MultiPolygon"})


class BoundaryLoadError(Exception):
    """Raised when boundary data is missing, unreadable or malformed."""


class SourceKind(str, Enum):
    FEATURE_COLLECTION = "FeatureCollection"
    FEATURE = "Feature"
    GEOMETRY = "Geometry"


@dataclass(frozen=True)
class BoundaryFeature:
    """A named municipality and its boundary geometry."""

    key: str
    name: str
    geometry: BaseGeometry
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def geometry_type(self) -> str:
        return self.geometry.geom_type

    @property
    def is_polygonal(self) -> bool:
        return self.geometry_type in POLYGONAL_TYPES


@dataclass(frozen=True)
class BoundaryRegistry:
    """Ordered, read-only set of municipalities keyed by their stable key."""

    features: tuple[BoundaryFeature, ...]

    def __post_init__(self):
        by_key = {}
        for feature in self.features:
            if feature.key in by_key:
                raise BoundaryLoadError(f"Duplicate municipality key: {feature.key!r}")
            by_key[feature.key] = feature
        object.__setattr__(self, "_by_key", MappingProxyType(by_key))

    def __iter__(self) -> Iterator[BoundaryFeature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str | None) -> BoundaryFeature | None:
        if key is None:
            return None
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return [feature.key for feature in self.features]


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
def classify_source(source: Any) -> SourceKind:
    """Decide which of the three supported GeoJSON shapes ``source`` is."""
    if not isinstance(source, Mapping):
        raise BoundaryLoadError(
            f"Boundary source must be a JSON object, got {type(source).__name__}"
        )
    kind = source.get("type")
    if kind == "FeatureCollection":
        return SourceKind.FEATURE_COLLECTION
    if kind == "Feature":
        return SourceKind.FEATURE
    if kind in GEOMETRY_TYPES:
        return SourceKind.GEOMETRY
    raise BoundaryLoadError(f"Unsupported GeoJSON type: {kind!r}")


def _build_geometry(geojson_geometry: Any) -> BaseGeometry:
    if not isinstance(geojson_geometry, Mapping):
        raise BoundaryLoadError("Feature has no geometry")
    try:
        geometry = shape(geojson_geometry)
    except (GEOSException, ValueError, TypeError, KeyError, IndexError, AttributeError) as exc:
        raise BoundaryLoadError(f"Malformed geometry: {exc}") from exc
    if geometry.is_empty:
        raise BoundaryLoadError("Boundary geometry is empty")
    if geometry.geom_type in POLYGONAL_TYPES and not geometry.is_valid:
        logger.warning("Boundary geometry is not valid (%s)", shapely.is_valid_reason(geometry))
    return geometry


def _merge_polygonal(features: list[Mapping[str, Any]]) -> BaseGeometry:
    polygons: list[Polygon] = []
    for index, feature in enumerate(features):
        geometry = _build_geometry(feature.get("geometry"))
        if isinstance(geometry, Polygon):
            polygons.append(geometry)
        elif isinstance(geometry, MultiPolygon):
            polygons.extend(geometry.geoms)
        else:
            logger.warning(
                "Skipping non-polygonal feature #%d (%s) in collection",
                index,
                geometry.geom_type,
            )
    if not polygons:
        raise BoundaryLoadError("FeatureCollection has no polygonal features")
    # overlapping features would make a raw MultiPolygon invalid
    merged = shapely.union_all(polygons)
    if isinstance(merged, Polygon):
        merged = MultiPolygon([merged])
    if not merged.is_valid:
        logger.warning("Merged boundary is not valid (%s)", shapely.is_valid_reason(merged))
    return merged


def load_boundary(
    source: Any,
    key: str,
    name: str,
    collection_mode: str = "first",
) -> BoundaryFeature:
    """Normalize a parsed GeoJSON object into a ``BoundaryFeature``.

    Args:
        source: Parsed GeoJSON (FeatureCollection, Feature or bare geometry)
        key: Stable municipality key used in requests, e.g. "homestead"
        name: Display name, e.g. "Homestead"
        collection_mode: "first" keeps only the first feature of a
            collection; "all" merges every polygonal feature

    Raises:
        BoundaryLoadError: If the source cannot be turned into a feature
    """
    kind = classify_source(source)

    if kind is SourceKind.FEATURE_COLLECTION:
        features = source.get("features")
        if not isinstance(features, list) or not features:
            raise BoundaryLoadError(f"{key}: FeatureCollection has no features")
        first = features[0]
        if not isinstance(first, Mapping):
            raise BoundaryLoadError(f"{key}: collection entry is not a feature")
        properties = first.get("properties") or {}
        if len(features) > 1 and collection_mode == "all":
            geometry = _merge_polygonal(features)
        else:
            if len(features) > 1:
                logger.warning(
                    "%s: collection has %d features, keeping the first only",
                    key,
                    len(features),
                )
            geometry = _build_geometry(first.get("geometry"))
    elif kind is SourceKind.FEATURE:
        properties = source.get("properties") or {}
        geometry = _build_geometry(source.get("geometry"))
    else:
        properties = {}
        geometry = _build_geometry(source)

    if geometry.geom_type not in POLYGONAL_TYPES:
        logger.warning(
            "%s: geometry type %s will never contain a point", key, geometry.geom_type
        )
    shapely.prepare(geometry)

    return BoundaryFeature(
        key=key,
        name=name,
        geometry=geometry,
        properties=MappingProxyType(dict(properties)),
    )


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------
def load_boundary_file(
    path: Path,
    key: str,
    name: str,
    collection_mode: str = "first",
) -> BoundaryFeature:
    """Read a GeoJSON file and normalize it into a ``BoundaryFeature``."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = json.load(f)
    except FileNotFoundError as exc:
        raise BoundaryLoadError(f"Boundary file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise BoundaryLoadError(f"Cannot read boundary file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise BoundaryLoadError(f"Invalid JSON in boundary file {path}: {exc}") from exc

    try:
        return load_boundary(source, key, name, collection_mode)
    except BoundaryLoadError as exc:
        raise BoundaryLoadError(f"{path}: {exc}") from exc


def load_registry(
    municipalities: Iterable[tuple[str, str, str]],
    data_dir: Path,
    collection_mode: str = "first",
) -> BoundaryRegistry:
    """Load every configured municipality, in order, into a registry.

    Any failure aborts the whole load; a partially populated registry is
    never returned.
    """
    features = []
    for key, name, filename in municipalities:
        feature = load_boundary_file(data_dir / filename, key, name, collection_mode)
        logger.info(
            "Loaded boundary %s (%s): %s", key, name, feature.geometry_type
        )
        features.append(feature)
    return BoundaryRegistry(features=tuple(features))
