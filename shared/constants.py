"""Shared user-facing error messages for the address checker."""

ERROR_NO_ADDRESS = "No address provided."
ERROR_GEOCODE_FAILED = "Address could not be geocoded."
ERROR_INTERNAL = "Something went wrong while checking the address."
