"""HTTP client utilities for calling external JSON APIs."""

import httpx


async def get_json(url: str, params: dict | None = None, timeout: float = 10) -> dict:
    """GET a JSON document and return the parsed body.

    Args:
        url: Full URL of the endpoint
        params: Query string parameters (URL-encoded by httpx)
        timeout: Request timeout in seconds

    Returns:
        Parsed JSON body as a dict

    Raises:
        httpx.HTTPError: If the request fails or returns a non-2xx status
            (caller should handle)
    """
    async with httpx.AsyncClient() as client:
        resp = await client.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
