"""Root conftest.py — shared fixtures for the entire test suite."""

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Make project modules importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
for sub in ["", "address_checker"]:
    p = str(PROJECT_ROOT / sub) if sub else str(PROJECT_ROOT)
    if p not in sys.path:
        sys.path.insert(0, p)

DATA_DIR = PROJECT_ROOT / "address_checker" / "data"


def square_ring(min_lng, min_lat, max_lng, max_lat):
    """Closed counter-clockwise ring as GeoJSON coordinates."""
    return [
        [min_lng, min_lat],
        [max_lng, min_lat],
        [max_lng, max_lat],
        [min_lng, max_lat],
        [min_lng, min_lat],
    ]


# ---------------------------------------------------------------------------
# GeoJSON source fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def data_dir():
    """Directory holding the shipped municipal boundary files."""
    return DATA_DIR


@pytest.fixture
def ring():
    """Factory for closed square rings: ring(min_lng, min_lat, max_lng, max_lat)."""
    return square_ring


@pytest.fixture
def unit_square_geometry():
    """Bare Polygon covering lng 0..1, lat 0..1."""
    return {"type": "Polygon", "coordinates": [square_ring(0, 0, 1, 1)]}


@pytest.fixture
def square_with_hole_geometry():
    """Polygon 0..10 with a hole 4..6."""
    return {
        "type": "Polygon",
        "coordinates": [square_ring(0, 0, 10, 10), square_ring(4, 4, 6, 6)],
    }


@pytest.fixture
def two_island_geometry():
    """MultiPolygon with parts at 0..1 and 5..6."""
    return {
        "type": "MultiPolygon",
        "coordinates": [[square_ring(0, 0, 1, 1)], [square_ring(5, 5, 6, 6)]],
    }


@pytest.fixture
def feature_factory():
    """Wrap a geometry into a GeoJSON Feature."""
    def _make(geometry, properties=None):
        return {"type": "Feature", "properties": properties, "geometry": geometry}
    return _make


@pytest.fixture
def collection_factory(feature_factory):
    """Wrap geometries into a GeoJSON FeatureCollection."""
    def _make(*geometries):
        return {
            "type": "FeatureCollection",
            "features": [feature_factory(g, {"part": i}) for i, g in enumerate(geometries)],
        }
    return _make


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------
@pytest.fixture
def overlapping_registry():
    """Two municipalities that overlap on lng/lat 1..2, "alpha" registered first."""
    from boundaries import BoundaryRegistry, load_boundary

    alpha = load_boundary(
        {"type": "Polygon", "coordinates": [square_ring(0, 0, 2, 2)]}, "alpha", "Alpha"
    )
    beta = load_boundary(
        {"type": "Polygon", "coordinates": [square_ring(1, 1, 3, 3)]}, "beta", "Beta"
    )
    return BoundaryRegistry(features=(alpha, beta))


@pytest.fixture
def real_registry():
    """Registry built from the shipped Homestead / Florida City data."""
    from boundaries import load_registry
    from config import MUNICIPALITIES

    return load_registry(MUNICIPALITIES, DATA_DIR)


@pytest.fixture
def geocode_result_factory():
    from models import GeocodeResult

    def _make(lat, lng, place_id="ChIJtest", formatted_address="Test Address, FL, USA"):
        return GeocodeResult(
            lat=lat, lng=lng, place_id=place_id, formatted_address=formatted_address
        )
    return _make

