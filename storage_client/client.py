"""Async HTTP client for the object storage service."""

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import httpx

from common.constants import DEFAULT_FILENAME, DEFAULT_TIMEOUT_SECONDS, OBJECT_FIELD
from common.logging_config import get_logger
from storage_client.auth import build_request
from storage_client.exceptions import ParseError, ServerError
from storage_client.models import (
    NOT_MODIFIED,
    BytesPayload,
    ClientIdentity,
    FileEntry,
    FilePayload,
    MultipartPayload,
    ObjectEntry,
    RawResponse,
    StoredObject,
)
from storage_client.transport import HttpTransport

logger = get_logger(__name__)


def _to_bytes(content: Union[str, bytes]) -> bytes:
    if isinstance(content, str):
        return content.encode('utf-8')
    return bytes(content)


def _file_entry(item: Union[str, Path, FileEntry]) -> FileEntry:
    if isinstance(item, FileEntry):
        return item
    return FileEntry(path=item)


class StorageClient:
    """
    Client for the bucket/object storage API.

    Every operation is a coroutine that either returns its result or raises:
    ServerError for unexpected status codes, ParseError for malformed JSON,
    httpx.TransportError for network failures and OSError for local file
    failures. Nothing is retried.
    """

    def __init__(
        self,
        server_url: str,
        client_id: str,
        secret: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize storage client.

        Args:
            server_url: Base URL of the storage server (e.g. "http://localhost:8080")
            client_id: Client identifier sent in X-ClientId
            secret: Shared secret used to derive request tokens
            timeout: Request timeout in seconds for the internally created httpx client
            http_client: Optional externally managed httpx.AsyncClient
            transport: Optional httpx transport for the internally created client (testing)
        """
        self.identity = ClientIdentity(server_url=server_url, client_id=client_id, secret=secret)
        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.http_client = http_client
        self.transport = HttpTransport(http_client)
        logger.info(f"Initialized StorageClient [server_url={server_url} client_id={client_id}]")

    async def __aenter__(self) -> 'StorageClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        payloads: Optional[Sequence[MultipartPayload]] = None,
        accept_binary: bool = False,
        conditional_tag: Optional[str] = None,
    ) -> RawResponse:
        descriptor = build_request(
            self.identity,
            method,
            path,
            payloads=payloads,
            accept_binary=accept_binary,
            conditional_tag=conditional_tag,
        )
        return await self.transport.send(descriptor)

    def _interpret(
        self,
        response: RawResponse,
        parse_json: bool = True,
        allow_not_modified: bool = False,
    ) -> Any:
        """
        Turn a raw response into a result or a classified failure.

        Args:
            response: Raw transport response
            parse_json: Parse a 200 body as JSON instead of passing it through
            allow_not_modified: Treat 304 as NOT_MODIFIED (conditional GET only)

        Returns:
            Parsed JSON, the raw body, or NOT_MODIFIED

        Raises:
            ServerError: For any other status, carrying the raw body
            ParseError: If a 200 body is not valid JSON
        """
        if allow_not_modified and response.status_code == 304:
            return NOT_MODIFIED

        if response.status_code != 200:
            logger.warning(f"Request failed: status={response.status_code}")
            raise ServerError(response.status_code, response.body)

        if not parse_json:
            return response.body

        try:
            return json.loads(response.body)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed JSON in response: {e}")
            raise ParseError(e, response.body) from e

    async def _write_object(
        self,
        bucket: str,
        object_id: Optional[str],
        payloads: Sequence[MultipartPayload],
    ) -> Any:
        """
        Upload payloads to a bucket.

        With an object_id, the single payload is sent as field "object" to
        /{bucket}/{object_id}. Without one, every payload is sent as "object[]"
        to /{bucket} and the server assigns ids in order.
        """
        if object_id:
            if len(payloads) != 1:
                raise ValueError("A write to a named object takes exactly one payload")
            payloads = [replace(payloads[0], field_name=OBJECT_FIELD)]
            path = f"/{bucket}/{object_id}"
        else:
            if not payloads:
                raise ValueError("At least one payload is required")
            path = f"/{bucket}"

        logger.info(f"Writing {len(payloads)} object(s) to {path}")
        response = await self._request('POST', path, payloads=payloads)
        return self._interpret(response)

    async def write(
        self,
        bucket: str,
        object_id: Optional[str],
        mime_type: str,
        content: Union[str, bytes],
    ) -> Any:
        """
        Write an object from a string or bytes.

        Args:
            bucket: Bucket name
            object_id: Object id, or None to let the server assign one
            mime_type: Content type stored with the object
            content: Object content (str is encoded as UTF-8)

        Returns:
            Parsed JSON response body
        """
        payload = BytesPayload(content=_to_bytes(content), filename=DEFAULT_FILENAME, content_type=mime_type)
        return await self._write_object(bucket, object_id, [payload])

    async def write_multi(self, bucket: str, entries: Sequence[ObjectEntry]) -> Any:
        """
        Write several in-memory objects with server-assigned ids.

        Args:
            bucket: Bucket name
            entries: Objects to write; parts are sent in this order

        Returns:
            Parsed JSON response body with the assigned ids
        """
        payloads = [
            BytesPayload(content=_to_bytes(entry.content), filename=entry.name, content_type=entry.mime_type)
            for entry in entries
        ]
        return await self._write_object(bucket, None, payloads)

    async def write_file(self, bucket: str, object_id: Optional[str], path: Union[str, Path]) -> Any:
        """
        Write an object from a local file, guessing its type from the filename.

        Args:
            bucket: Bucket name
            object_id: Object id, or None to let the server assign one
            path: File to upload

        Returns:
            Parsed JSON response body
        """
        return await self._write_object(bucket, object_id, [FilePayload(file_path=Path(path))])

    async def write_file_with_type(
        self,
        bucket: str,
        object_id: Optional[str],
        path: Union[str, Path],
        mime_type: str,
    ) -> Any:
        """
        Write an object from a local file with an explicit content type.

        Args:
            bucket: Bucket name
            object_id: Object id, or None to let the server assign one
            path: File to upload
            mime_type: Content type stored with the object

        Returns:
            Parsed JSON response body
        """
        payload = FilePayload(file_path=Path(path), content_type=mime_type)
        return await self._write_object(bucket, object_id, [payload])

    async def write_file_multi(self, bucket: str, files: Sequence[Union[str, Path, FileEntry]]) -> Any:
        """
        Write several local files with server-assigned ids.

        Plain paths have their type guessed from the filename; FileEntry items
        may carry an explicit MIME type.

        Args:
            bucket: Bucket name
            files: Paths or FileEntry records; parts are sent in this order

        Returns:
            Parsed JSON response body with the assigned ids
        """
        payloads = []
        for item in files:
            entry = _file_entry(item)
            payloads.append(FilePayload(file_path=Path(entry.path), content_type=entry.mime_type))
        return await self._write_object(bucket, None, payloads)

    async def write_file_multi_with_type(self, bucket: str, entries: Sequence[FileEntry]) -> Any:
        """
        Write several local files, each with an explicit MIME type.

        Raises:
            ValueError: If an entry has no mime_type
        """
        for entry in entries:
            if not entry.mime_type:
                raise ValueError(f"Missing MIME type for {entry.path}")
        return await self.write_file_multi(bucket, entries)

    async def get(
        self,
        bucket: str,
        object_id: str,
        with_type: bool = False,
        etag: Optional[str] = None,
    ) -> Union[bytes, StoredObject, Any]:
        """
        Fetch object content.

        Args:
            bucket: Bucket name
            object_id: Object id
            with_type: Return a StoredObject with MIME type and etag
            etag: Etag of a copy the caller already holds

        Returns:
            Raw content, a StoredObject, or NOT_MODIFIED when the server
            confirms the held copy is current
        """
        logger.debug(f"Fetching /{bucket}/{object_id} [conditional={bool(etag)}]")
        response = await self._request(
            'GET',
            f"/{bucket}/{object_id}",
            accept_binary=True,
            conditional_tag=etag,
        )
        content = self._interpret(response, parse_json=False, allow_not_modified=bool(etag))

        if content is NOT_MODIFIED or not with_type:
            return content

        return StoredObject(
            content=content,
            mimetype=response.headers.get('content-type'),
            etag=response.headers.get('etag'),
        )

    async def save(self, bucket: str, object_id: str, destination: Union[str, Path]) -> Path:
        """
        Download an object into a local file.

        The file is only written after the fetch succeeded.

        Args:
            bucket: Bucket name
            object_id: Object id
            destination: Target file path

        Returns:
            Path of the written file
        """
        stored = await self.get(bucket, object_id, with_type=True)
        destination = Path(destination)
        await asyncio.to_thread(destination.write_bytes, stored.content)
        logger.info(f"Saved /{bucket}/{object_id} to {destination} ({len(stored.content)} bytes)")
        return destination

    async def get_meta(self, bucket: str, object_id: str) -> Any:
        """Return object metadata as sent by the server."""
        response = await self._request('GET', f"/{bucket}/{object_id}/meta")
        return self._interpret(response)

    async def delete(self, bucket: str, object_id: str) -> None:
        """Delete an object."""
        logger.info(f"Deleting /{bucket}/{object_id}")
        response = await self._request('DELETE', f"/{bucket}/{object_id}")
        self._interpret(response, parse_json=False)

    async def list_objects(self, bucket: str) -> Any:
        """Return the objects of a bucket."""
        response = await self._request('GET', f"/{bucket}")
        return self._interpret(response)

    async def list_buckets(self) -> Any:
        """Return the list of buckets."""
        response = await self._request('GET', '/')
        return self._interpret(response)
