"""Shared HTTP infrastructure for Box API clients."""

from .clients import (
    create_base_async_client,
    create_base_client,
    make_async_transport,
    make_transport,
)
from .config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CHUNKED_UPLOAD_THRESHOLD,
    DEFAULT_TIMEOUT,
    DEFAULT_UPLOAD_BASE_URL,
    BoxConfig,
)
from .iter_coroutine import iter_coroutine
from .transport import (
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    JSONBody,
    MultipartBody,
    RawResponse,
    RequestBody,
)

__all__ = [
    "BoxConfig",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_UPLOAD_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CHUNKED_UPLOAD_THRESHOLD",
    "DEFAULT_CHUNK_SIZE",
    "iter_coroutine",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "JSONBody",
    "MultipartBody",
    "RawResponse",
    "RequestBody",
    "create_base_client",
    "create_base_async_client",
    "make_transport",
    "make_async_transport",
]
