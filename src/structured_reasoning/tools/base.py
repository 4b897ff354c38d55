"""Shared helpers for MCP tool functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from structured_reasoning.dispatcher import RequestDispatcher


def get_dispatcher() -> RequestDispatcher:
    """Get the request dispatcher from AppContext.

    Raises:
        AppContextNotInitializedError: If AppContext is not initialized
    """
    from structured_reasoning.server import get_app_context

    return get_app_context().dispatcher


async def invoke(capability: str, **params: Any) -> dict[str, Any]:
    """Dispatch a capability call and return the response envelope as a dict.

    Parameters left as None are dropped so the request models see them as
    absent rather than explicitly null.
    """
    bag = {name: value for name, value in params.items() if value is not None}
    response = await get_dispatcher().dispatch(capability, bag)
    return response.to_payload()


__all__ = ["get_dispatcher", "invoke"]
