"""Google Geocoding API client.

Soft-fails: any provider-side or transport problem comes back as a
``GeocodeFailure`` instead of raising. Only genuinely unexpected payloads
raise, and those surface as a server error in the caller.
"""

import logging
import sys
from pathlib import Path

import httpx

from config import GEOCODE_TIMEOUT, GEOCODE_URL, GOOGLE_API_KEY
from models import GeocodeFailure, GeocodeFailureReason, GeocodeResult

# Add project root for shared imports
_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from shared.http_client import get_json

logger = logging.getLogger("address_checker.geocoder")


async def geocode_address(
    address: str,
    api_key: str | None = None,
) -> GeocodeResult | GeocodeFailure:
    """Resolve a free-text address to a coordinate.

    Args:
        address: Address text as entered by the user
        api_key: Google API key, defaults to ``GOOGLE_API_KEY``

    Returns:
        GeocodeResult for the first provider match, or GeocodeFailure
    """
    key = GOOGLE_API_KEY if api_key is None else api_key
    if not key:
        logger.error("GOOGLE_API_KEY is not set; cannot geocode")
        return GeocodeFailure(
            reason=GeocodeFailureReason.MISSING_CREDENTIALS, detail="no API key"
        )

    try:
        data = await get_json(
            GEOCODE_URL,
            params={"address": address, "key": key},
            timeout=GEOCODE_TIMEOUT,
        )
    except httpx.HTTPError as exc:
        logger.warning("Geocoding request failed for '%s': %s", address[:100], exc)
        return GeocodeFailure(
            reason=GeocodeFailureReason.TRANSPORT_ERROR, detail=str(exc)
        )
    except ValueError as exc:
        logger.warning("Geocoding provider returned non-JSON body: %s", exc)
        return GeocodeFailure(
            reason=GeocodeFailureReason.PROVIDER_STATUS, detail="invalid JSON body"
        )

    if not isinstance(data, dict):
        logger.warning("Geocoding provider returned %s instead of an object", type(data).__name__)
        return GeocodeFailure(
            reason=GeocodeFailureReason.PROVIDER_STATUS, detail="unexpected body"
        )

    status = data.get("status")
    if status == "ZERO_RESULTS" or (status == "OK" and not data.get("results")):
        logger.info("No geocoding results for '%s'", address[:100])
        return GeocodeFailure(reason=GeocodeFailureReason.NO_RESULTS, detail=status)
    if status != "OK":
        logger.warning(
            "Geocoding provider status=%s for '%s': %s",
            status,
            address[:100],
            data.get("error_message", ""),
        )
        return GeocodeFailure(
            reason=GeocodeFailureReason.PROVIDER_STATUS, detail=str(status)
        )

    top = data["results"][0]
    location = top["geometry"]["location"]
    result = GeocodeResult(
        lat=location["lat"],
        lng=location["lng"],
        place_id=top.get("place_id"),
        formatted_address=top.get("formatted_address"),
    )
    logger.info(
        "Geocoded '%s' -> (%.6f, %.6f)", address[:100], result.lat, result.lng
    )
    return result
