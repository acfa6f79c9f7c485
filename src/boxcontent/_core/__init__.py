"""Request/response pipeline and upload session protocol."""

from .builder import API_ARG_HEADER, RequestBuilder
from .dispatcher import RequestDispatcher
from .payload import BoxFile, FileWindow, make_box_file
from .request import BoxRequest, CommitInfo, EndpointKind, UploadCursor
from .response import BoxResponse
from .upload_session import UploadSession, UploadSessionCoordinator, resolve_chunk_size

__all__ = [
    "API_ARG_HEADER",
    "BoxFile",
    "BoxRequest",
    "BoxResponse",
    "CommitInfo",
    "EndpointKind",
    "FileWindow",
    "RequestBuilder",
    "RequestDispatcher",
    "UploadCursor",
    "UploadSession",
    "UploadSessionCoordinator",
    "make_box_file",
    "resolve_chunk_size",
]
