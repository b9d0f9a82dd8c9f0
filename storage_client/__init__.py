"""Async client for the META Storage bucket/object API."""

from storage_client.auth import build_request, derive_token
from storage_client.client import StorageClient
from storage_client.exceptions import ParseError, ServerError, StorageClientError
from storage_client.models import (
    NOT_MODIFIED,
    ClientIdentity,
    FileEntry,
    ObjectEntry,
    RequestDescriptor,
    StoredObject,
)

__all__ = [
    "NOT_MODIFIED",
    "ClientIdentity",
    "FileEntry",
    "ObjectEntry",
    "ParseError",
    "RequestDescriptor",
    "ServerError",
    "StorageClient",
    "StorageClientError",
    "StoredObject",
    "build_request",
    "derive_token",
]
