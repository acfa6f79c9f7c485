from .errors import (
    BoxError,
    ClientError,
    InvalidResponseError,
    TransportError,
    ValidationError,
)

from .client import AsyncBoxClient, BoxClient
from .files import AsyncFilesClient, FilesClient
from .users import AsyncUsersClient, UsersClient
from ._core import (
    BoxFile,
    BoxRequest,
    BoxResponse,
    EndpointKind,
    RequestBuilder,
    RequestDispatcher,
    UploadSession,
    UploadSessionCoordinator,
    make_box_file,
)
from ._http import (
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    BoxConfig,
    RawResponse,
    make_async_transport,
    make_transport,
)
from .models import (
    Account,
    AccountList,
    CopyReference,
    DeletedMetadata,
    File,
    FileMetadata,
    FileRevisions,
    FolderMetadata,
    MetadataCollection,
    SearchResults,
    TemporaryLink,
    Thumbnail,
    make_model,
)

__all__ = [
    # Errors
    "BoxError",
    "ClientError",
    "InvalidResponseError",
    "TransportError",
    "ValidationError",
    # Clients
    "BoxClient",
    "AsyncBoxClient",
    "FilesClient",
    "AsyncFilesClient",
    "UsersClient",
    "AsyncUsersClient",
    # Core
    "BoxFile",
    "BoxRequest",
    "BoxResponse",
    "EndpointKind",
    "RequestBuilder",
    "RequestDispatcher",
    "UploadSession",
    "UploadSessionCoordinator",
    "make_box_file",
    # Transport
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "BoxConfig",
    "RawResponse",
    "make_transport",
    "make_async_transport",
    # Models
    "Account",
    "AccountList",
    "CopyReference",
    "DeletedMetadata",
    "File",
    "FileMetadata",
    "FileRevisions",
    "FolderMetadata",
    "MetadataCollection",
    "SearchResults",
    "TemporaryLink",
    "Thumbnail",
    "make_model",
]
