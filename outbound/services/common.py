from typing import Any


def unwrap_data(response: Any) -> Any:
    """Return the payload of a ``{"data": ...}`` envelope."""
    if isinstance(response, dict):
        return response.get("data")
    return response
