"""Data types shared by the storage client (identity, payloads, descriptors, results)."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from common.constants import OBJECT_LIST_FIELD


@dataclass(frozen=True)
class ClientIdentity:
    """
    Connection identity of a client instance.
    """
    server_url: str
    client_id: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class BytesPayload:
    """
    Multipart part built from an in-memory buffer.
    """
    content: bytes
    filename: str
    content_type: str
    field_name: str = OBJECT_LIST_FIELD


@dataclass(frozen=True)
class FilePayload:
    """
    Multipart part streamed from a local file.

    The file is opened by the transport when the request is sent. Without
    a content_type the part type is guessed from the filename.
    """
    file_path: Path
    content_type: Optional[str] = None
    field_name: str = OBJECT_LIST_FIELD

    @property
    def filename(self) -> str:
        return self.file_path.name


MultipartPayload = Union[BytesPayload, FilePayload]


@dataclass(frozen=True)
class ObjectEntry:
    """
    One in-memory object for a bulk write.
    """
    name: str
    content: Union[str, bytes]
    mime_type: str


@dataclass(frozen=True)
class FileEntry:
    """
    One local file for a bulk write, optionally with an explicit MIME type.
    """
    path: Union[str, Path]
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Fully signed HTTP request, ready to hand to the transport.
    """
    method: str
    url: str
    headers: Mapping[str, str]
    payloads: tuple[MultipartPayload, ...] = ()
    accept_binary: bool = False
    conditional_tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))
        object.__setattr__(self, 'payloads', tuple(self.payloads))


@dataclass(frozen=True)
class RawResponse:
    """
    Response as returned by the transport, before interpretation.

    body is bytes for binary requests and decoded text otherwise.
    """
    status_code: int
    headers: Mapping[str, str]
    body: Union[str, bytes]


@dataclass(frozen=True)
class StoredObject:
    """
    Object content together with its MIME type and current etag.
    """
    content: bytes
    mimetype: Optional[str]
    etag: Optional[str]


class _NotModified:
    """Result of a conditional get when the held copy is still current."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NOT_MODIFIED'


NOT_MODIFIED = _NotModified()
