"""Municipal Address Checker API.

Answers whether a street address lies within Homestead or Florida City:
  1. Geocode the address (Google Geocoding API)
  2. Point-in-polygon test against every preloaded municipal boundary

Boundaries are loaded once at startup; a load failure stops the server.

Usage:
    cd address_checker && python main.py
"""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from boundaries import BoundaryRegistry, load_registry
from checker import build_check_response
from config import (
    BOUNDARY_COLLECTION_MODE,
    BOUNDARY_DATA_DIR,
    GOOGLE_API_KEY,
    LOG_DIR,
    LOG_LEVEL,
    MUNICIPALITIES,
    PORT,
)
from geocoder import geocode_address
from models import CheckRequest, CheckResponse, CityInfo, ErrorResponse, GeocodeFailure

load_dotenv()

# Add project root for shared imports
_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from shared.constants import ERROR_GEOCODE_FAILED, ERROR_INTERNAL, ERROR_NO_ADDRESS
from shared.logging_setup import setup_logger

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logger = setup_logger("address_checker", LOG_DIR, "address_checker.log", level=LOG_LEVEL)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    # -- Startup --
    logger.info("Loading municipal boundaries from %s...", BOUNDARY_DATA_DIR)
    app.state.boundaries = load_registry(
        MUNICIPALITIES, BOUNDARY_DATA_DIR, BOUNDARY_COLLECTION_MODE
    )
    if not GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY is not set; every address will fail to geocode")
    logger.info(
        "Address checker ready on port %d with municipalities: %s",
        PORT,
        ", ".join(app.state.boundaries.keys()),
    )
    yield
    # -- Shutdown --
    logger.info("Address checker shutting down")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(title="Municipal Address Checker", lifespan=lifespan)


def get_registry(request: Request) -> BoundaryRegistry:
    """Boundary registry built during startup."""
    return request.app.state.boundaries


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s body: %s", request.url.path, exc.errors())
    return _error(400, ERROR_NO_ADDRESS)


# ---------------------------------------------------------------------------
# POST /check-address — main endpoint
# ---------------------------------------------------------------------------
@app.post(
    "/check-address",
    response_model=CheckResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def check_address(
    req: CheckRequest,
    registry: BoundaryRegistry = Depends(get_registry),
):
    """Geocode the address and test it against every known municipality."""
    if req.address is None or not req.address.strip():
        logger.info("Check request without address")
        return _error(400, ERROR_NO_ADDRESS)

    address = req.address.strip()
    logger.info("Check request: address='%s' city=%s", address[:100], req.city)

    try:
        location = await geocode_address(address)
        if isinstance(location, GeocodeFailure):
            logger.warning(
                "Geocoding failed: reason=%s detail=%s address='%s'",
                location.reason.value,
                location.detail,
                address[:100],
            )
            return _error(404, ERROR_GEOCODE_FAILED)

        result = build_check_response(location, registry, req.city)
    except Exception:
        logger.exception("Unexpected error checking address '%s'", address[:100])
        return _error(500, ERROR_INTERNAL)

    logger.info(
        "Checked: requested=%s detected=%s inside_selected=%s",
        result.requested_city,
        result.detected_city,
        result.inside_selected,
    )
    return result


# ---------------------------------------------------------------------------
# GET /cities — known municipalities in priority order
# ---------------------------------------------------------------------------
@app.get("/cities", response_model=list[CityInfo])
async def list_cities(registry: BoundaryRegistry = Depends(get_registry)):
    return [CityInfo(key=feature.key, name=feature.name) for feature in registry]


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return {"ok": True}


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=True)
