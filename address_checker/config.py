"""Configuration for the municipal address checker."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
PORT = int(os.getenv("PORT", "3000"))

GEOCODE_URL = os.getenv(
    "GEOCODE_URL", "https://maps.googleapis.com/maps/api/geocode/json"
)
GEOCODE_TIMEOUT = float(os.getenv("GEOCODE_TIMEOUT", "10"))

BOUNDARY_DATA_DIR = Path(
    os.getenv("BOUNDARY_DATA_DIR", str(Path(__file__).parent / "data"))
)

# "first" keeps the first feature of a FeatureCollection, "all" merges them
BOUNDARY_COLLECTION_MODE = os.getenv("BOUNDARY_COLLECTION_MODE", "first").lower()
if BOUNDARY_COLLECTION_MODE not in ("first", "all"):
    raise ValueError(
        f"BOUNDARY_COLLECTION_MODE must be 'first' or 'all', got {BOUNDARY_COLLECTION_MODE!r}"
    )

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(__file__).parent / "logs"

# (key, display name, GeoJSON file) in detection priority order
MUNICIPALITIES = (
    ("homestead", "Homestead", "homestead_boundary.geojson"),
    ("floridacity", "Florida City", "floridacity_boundary.geojson"),
)
