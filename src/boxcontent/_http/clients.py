"""Factory functions for httpx clients and the transports wrapping them."""

from __future__ import annotations

import httpx

from .config import DEFAULT_TIMEOUT
from .transport import AsyncTransport, BaseTransport, BlockingTransport


def create_base_client(timeout: float | None = None) -> httpx.Client:
    """Create a sync httpx client with basic configuration (no auth).

    Auth is added per-request by the request builder, so the client only
    carries the timeout.

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.

    Returns:
        An httpx.Client with basic configuration.
    """
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.Client(timeout=httpx.Timeout(effective_timeout))


def create_base_async_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create an async httpx client with basic configuration (no auth).

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.

    Returns:
        An httpx.AsyncClient with basic configuration.
    """
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return httpx.AsyncClient(timeout=httpx.Timeout(effective_timeout))


def make_transport(
    handler: BaseTransport | httpx.Client | None = None,
    timeout: float | None = None,
) -> BaseTransport:
    """Resolve the transport used by a synchronous client.

    Args:
        handler: None for a default transport, a ready transport, or a
            pre-configured httpx.Client to wrap.
        timeout: Timeout for the default client. Ignored if handler is given.

    Raises:
        TypeError: If handler is none of the supported types.
    """
    if handler is None:
        return BlockingTransport(create_base_client(timeout=timeout))
    if isinstance(handler, BaseTransport):
        return handler
    if isinstance(handler, httpx.Client):
        return BlockingTransport(handler)
    raise TypeError(
        "The http client handler must be an instance of httpx.Client "
        "or an instance of boxcontent.BaseTransport."
    )


def make_async_transport(
    handler: BaseTransport | httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> BaseTransport:
    """Resolve the transport used by an asynchronous client.

    Raises:
        TypeError: If handler is none of the supported types.
    """
    if handler is None:
        return AsyncTransport(create_base_async_client(timeout=timeout))
    if isinstance(handler, BaseTransport):
        return handler
    if isinstance(handler, httpx.AsyncClient):
        return AsyncTransport(handler)
    raise TypeError(
        "The http client handler must be an instance of httpx.AsyncClient "
        "or an instance of boxcontent.BaseTransport."
    )


__all__ = [
    "create_base_client",
    "create_base_async_client",
    "make_transport",
    "make_async_transport",
]
