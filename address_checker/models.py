"""Pydantic models for the municipal address checker."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class CheckRequest(BaseModel):
    """Incoming /check-address body.

    ``address`` is optional at the schema level so a missing value reaches the
    handler and is reported as a 400 rather than a schema error.
    """

    address: str | None = None
    city: str | None = Field(
        default=None, description="Municipality key to check against, e.g. 'homestead'"
    )

    @field_validator("city", mode="before")
    @classmethod
    def _ignore_non_string_city(cls, value):
        # an unusable city is ignored, never a reason to reject the request
        return value if isinstance(value, str) else None


class GeocodeResult(BaseModel):
    """Coordinate and metadata resolved for an address."""

    lat: float
    lng: float
    place_id: str | None = None
    formatted_address: str | None = None


class GeocodeFailureReason(str, Enum):
    NO_RESULTS = "no_results"
    PROVIDER_STATUS = "provider_status"
    TRANSPORT_ERROR = "transport_error"
    MISSING_CREDENTIALS = "missing_credentials"


class GeocodeFailure(BaseModel):
    """Why an address could not be geocoded. Logged, never returned to callers."""

    reason: GeocodeFailureReason
    detail: str = ""


class CheckResponse(BaseModel):
    """Response from /check-address."""

    geocode: GeocodeResult
    requested_city: str | None = None
    detected_city: str | None = None
    inside_selected: bool | None = None
    inside_any_city: bool
    message: str


class CityInfo(BaseModel):
    key: str
    name: str


class ErrorResponse(BaseModel):
    error: str
