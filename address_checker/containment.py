"""Point-in-polygon checks against municipal boundaries.

Points lying exactly on a boundary ring count as inside (``covers``
semantics). Holes are respected.
"""

from typing import Protocol

from shapely.geometry import Point

from boundaries import BoundaryFeature, BoundaryRegistry


class LatLng(Protocol):
    lat: float
    lng: float


def contains(point: LatLng, feature: BoundaryFeature) -> bool:
    """Return True if ``point`` lies inside ``feature``'s polygon(s).

    Non-polygonal geometries never contain a point.
    """
    if not feature.is_polygonal:
        return False
    # GeoJSON order is (longitude, latitude)
    return bool(feature.geometry.covers(Point(point.lng, point.lat)))


def evaluate_all(point: LatLng, registry: BoundaryRegistry) -> dict[str, bool]:
    """Evaluate ``point`` against every municipality in registration order."""
    return {feature.key: contains(point, feature) for feature in registry}


def first_match(results: dict[str, bool]) -> str | None:
    """Key of the first municipality (in priority order) that contains the point."""
    return next((key for key, inside in results.items() if inside), None)
