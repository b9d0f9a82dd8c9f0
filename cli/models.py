"""Command request data types for the console."""

from dataclasses import dataclass
from typing import Literal, Optional

from storage_client.models import FileEntry, ObjectEntry


@dataclass(frozen=True)
class WriteCommand:
    """Write an object from inline content."""

    bucket: str
    object_id: Optional[str]
    mime_type: str
    content: str
    command: Literal["write"] = "write"


@dataclass(frozen=True)
class WriteMultiCommand:
    """Write several inline objects with server-assigned ids."""

    bucket: str
    entries: tuple[ObjectEntry, ...]
    command: Literal["write-multi"] = "write-multi"


@dataclass(frozen=True)
class WriteFileCommand:
    """Write an object from a local file."""

    bucket: str
    object_id: Optional[str]
    path: str
    mime_type: Optional[str] = None
    command: Literal["write-file"] = "write-file"


@dataclass(frozen=True)
class WriteFileMultiCommand:
    """Write several local files with server-assigned ids."""

    bucket: str
    entries: tuple[FileEntry, ...]
    command: Literal["write-file-multi"] = "write-file-multi"


@dataclass(frozen=True)
class GetCommand:
    """Fetch object content."""

    bucket: str
    object_id: str
    with_type: bool = False
    etag: Optional[str] = None
    command: Literal["get"] = "get"


@dataclass(frozen=True)
class SaveCommand:
    """Download an object to a local file."""

    bucket: str
    object_id: str
    path: str
    command: Literal["save"] = "save"


@dataclass(frozen=True)
class MetaCommand:
    """Show object metadata."""

    bucket: str
    object_id: str
    command: Literal["meta"] = "meta"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete an object."""

    bucket: str
    object_id: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class ListCommand:
    """List objects in a bucket."""

    bucket: str
    command: Literal["list"] = "list"


@dataclass(frozen=True)
class BucketsCommand:
    """List buckets."""

    command: Literal["buckets"] = "buckets"


CommandRequest = (
    WriteCommand
    | WriteMultiCommand
    | WriteFileCommand
    | WriteFileMultiCommand
    | GetCommand
    | SaveCommand
    | MetaCommand
    | DeleteCommand
    | ListCommand
    | BucketsCommand
)
