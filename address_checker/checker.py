"""Municipality evaluation and response shaping for /check-address."""

from boundaries import BoundaryRegistry
from containment import evaluate_all, first_match
from models import CheckResponse, GeocodeResult


def resolve_requested_city(city: str | None, registry: BoundaryRegistry) -> str | None:
    """Return the registry key for ``city``, or None if absent or unknown."""
    if city is None:
        return None
    key = city.strip().lower()
    return key if key in registry else None


def build_message(
    registry: BoundaryRegistry,
    requested_city: str | None,
    inside_selected: bool | None,
    detected_city: str | None,
) -> str:
    if requested_city is not None:
        name = registry.get(requested_city).name
        if inside_selected:
            return f"Yes, the address you've entered falls within the municipality of {name}."
        return f"No, the address you've entered does not fall within the municipality of {name}."

    if detected_city is not None:
        name = registry.get(detected_city).name
        return f"The address you've entered falls within the municipality of {name}."

    names = [feature.name for feature in registry]
    if not names:
        return "The address you've entered does not fall within any known municipality."
    if len(names) == 1:
        listed = names[0]
    elif len(names) == 2:
        listed = f"{names[0]} or {names[1]}"
    else:
        listed = ", ".join(names[:-1]) + f", or {names[-1]}"
    return f"The address you've entered does not fall within {listed}."


def build_check_response(
    geocode: GeocodeResult,
    registry: BoundaryRegistry,
    city: str | None = None,
) -> CheckResponse:
    """Evaluate a geocoded point against every municipality and shape the response."""
    requested_city = resolve_requested_city(city, registry)
    results = evaluate_all(geocode, registry)

    detected_city = first_match(results)
    inside_selected = results[requested_city] if requested_city is not None else None

    return CheckResponse(
        geocode=geocode,
        requested_city=requested_city,
        detected_city=detected_city,
        inside_selected=inside_selected,
        inside_any_city=detected_city is not None,
        message=build_message(registry, requested_city, inside_selected, detected_city),
    )
